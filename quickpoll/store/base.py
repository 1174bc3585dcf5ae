"""Store handle consumed by the poll service.

A store offers per-record atomicity only. Nothing here spans a question and an
option in one unit of work; the service sequences those steps itself.
"""
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List, Optional


@dataclass
class OptionRecord:
    id: uuid.UUID
    text: str
    votes: int = 0
    link_to_vote: Optional[str] = None


@dataclass
class QuestionRecord:
    id: uuid.UUID
    title: str
    option_ids: List[uuid.UUID] = field(default_factory=list)


class PollStore(ABC):
    """Question and option persistence.

    Lookups return ``None`` (or ``False`` for list updates) when the id does not
    resolve; translating that into a failure is the caller's job.
    """

    # Questions

    @abstractmethod
    def list_questions(self) -> List[QuestionRecord]:
        ...

    @abstractmethod
    def find_question(self, question_id: uuid.UUID) -> Optional[QuestionRecord]:
        ...

    @abstractmethod
    def create_question(self, title: str) -> QuestionRecord:
        ...

    @abstractmethod
    def update_question_options(self, question_id: uuid.UUID, option_ids: Iterable[uuid.UUID]) -> bool:
        """Replace the whole option list."""

    @abstractmethod
    def append_option_ref(self, question_id: uuid.UUID, option_id: uuid.UUID) -> bool:
        """Push one option id onto the end of the question's list."""

    @abstractmethod
    def pull_option_ref(self, question_id: uuid.UUID, option_id: uuid.UUID) -> bool:
        """Remove every occurrence of ``option_id`` from the list. Idempotent."""

    @abstractmethod
    def delete_question(self, question_id: uuid.UUID) -> None:
        ...

    @abstractmethod
    def find_question_owning(self, option_id: uuid.UUID) -> Optional[QuestionRecord]:
        ...

    # Options

    @abstractmethod
    def find_option(self, option_id: uuid.UUID) -> Optional[OptionRecord]:
        ...

    @abstractmethod
    def find_options(self, option_ids: Iterable[uuid.UUID]) -> List[OptionRecord]:
        """Resolve ids to records in the given order, skipping ids that do not resolve."""

    @abstractmethod
    def create_option(self, text: str) -> OptionRecord:
        ...

    @abstractmethod
    def set_option_vote_link(self, option_id: uuid.UUID, link: str) -> Optional[OptionRecord]:
        ...

    @abstractmethod
    def increment_option_votes(self, option_id: uuid.UUID) -> Optional[OptionRecord]:
        """Add one vote as a single atomic read-modify-write."""

    @abstractmethod
    def delete_option(self, option_id: uuid.UUID) -> None:
        ...

    @abstractmethod
    def delete_options(self, option_ids: Iterable[uuid.UUID]) -> int:
        """Bulk removal. Returns how many options were actually deleted."""
