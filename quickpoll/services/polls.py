"""Question/option consistency and deletion rules.

The store gives per-record atomicity only, so every operation that touches both
a question and its options runs as a saga: a sequence of named steps, each a
single store call. Steps are methods so a caller (or a test) can subclass a
saga and interpose between them.

Accepted risks, deliberately not closed with locking:

* Attach: a store failure after ``create_option`` leaves an orphan option.
* DeleteOption / DeleteQuestion: a vote that lands after ``check_votes`` and
  before the delete is lost along with the option.
"""
import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import List, Optional

from ..errors import Forbidden, NotFound, ValidationFailed
from ..store.base import OptionRecord, PollStore, QuestionRecord

logger = logging.getLogger(__name__)


@dataclass
class QuestionView:
    id: uuid.UUID
    title: str
    option_ids: List[uuid.UUID] = field(default_factory=list)
    options: List[OptionRecord] = field(default_factory=list)


@dataclass
class OptionDeletion:
    option: OptionRecord
    # True when no question referenced the option
    orphan: bool = False


def vote_link(base_url: str, option_id) -> str:
    return f"{base_url.rstrip('/')}/options/{option_id}/add_vote"


def parse_id(value, kind: str) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationFailed(f"Invalid {kind} ID format", details={"id": str(value)}) from None


def require_text(value, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed(f"{label} cannot be empty")
    return value.strip()


def question_not_found(question_id) -> NotFound:
    return NotFound(f"Question with ID {question_id} not found.")


def option_not_found(option_id) -> NotFound:
    return NotFound(f"Option with ID {option_id} not found.")


class AttachOptionSaga:
    """create_option -> record_vote_link -> link_to_question.

    The option always exists before anything references it, so a failure can
    orphan an option but never leave a dangling reference.
    """

    def __init__(self, store: PollStore, vote_link_base: str, question: QuestionRecord, text: str):
        self.store = store
        self.vote_link_base = vote_link_base
        self.question = question
        self.text = text

    def run(self) -> OptionRecord:
        option = self.create_option()
        option = self.record_vote_link(option)
        self.link_to_question(option)
        return option

    def create_option(self) -> OptionRecord:
        return self.store.create_option(self.text)

    def record_vote_link(self, option: OptionRecord) -> OptionRecord:
        updated = self.store.set_option_vote_link(option.id, vote_link(self.vote_link_base, option.id))
        if updated is None:
            # Option vanished before it was referenced; linking it now would dangle
            raise option_not_found(option.id)
        return updated

    def link_to_question(self, option: OptionRecord) -> None:
        if not self.store.append_option_ref(self.question.id, option.id):
            # Question deleted since it was loaded
            self.compensate(option)
            raise question_not_found(self.question.id)

    def compensate(self, option: OptionRecord) -> None:
        logger.warning(
            "Question %s disappeared before option %s was linked; removing the option",
            self.question.id, option.id,
        )
        self.store.delete_option(option.id)


class DeleteOptionSaga:
    """load_option -> check_votes -> locate_owner -> remove_option -> unlink_from_owner."""

    def __init__(self, store: PollStore, option_id: uuid.UUID):
        self.store = store
        self.option_id = option_id

    def run(self) -> OptionDeletion:
        option = self.load_option()
        self.check_votes(option)
        owner = self.locate_owner()
        self.remove_option()
        if owner is None:
            # Deleting an unreferenced zero-vote option breaks nothing, so allow it.
            logger.warning(
                "Option %s found but no question references it; deleting orphan option", self.option_id
            )
            return OptionDeletion(option=option, orphan=True)
        self.unlink_from_owner(owner)
        return OptionDeletion(option=option, orphan=False)

    def load_option(self) -> OptionRecord:
        option = self.store.find_option(self.option_id)
        if option is None:
            raise option_not_found(self.option_id)
        return option

    def check_votes(self, option: OptionRecord) -> None:
        if option.votes > 0:
            raise Forbidden(
                f"Option with ID {option.id} has votes and cannot be deleted.",
                details={"votes": option.votes},
            )

    def locate_owner(self) -> Optional[QuestionRecord]:
        return self.store.find_question_owning(self.option_id)

    def remove_option(self) -> None:
        self.store.delete_option(self.option_id)

    def unlink_from_owner(self, owner: QuestionRecord) -> None:
        if not self.store.pull_option_ref(owner.id, self.option_id):
            logger.info("Question %s was deleted before option %s could be unlinked", owner.id, self.option_id)


class DeleteQuestionSaga:
    """load_question -> load_owned_options -> check_votes -> remove_options -> remove_question."""

    def __init__(self, store: PollStore, question_id: uuid.UUID):
        self.store = store
        self.question_id = question_id

    def run(self) -> QuestionView:
        question = self.load_question()
        options = self.load_owned_options(question)
        self.check_votes(options)
        if question.option_ids:
            self.remove_options(question)
        self.remove_question()
        return QuestionView(id=question.id, title=question.title, option_ids=question.option_ids, options=options)

    def load_question(self) -> QuestionRecord:
        question = self.store.find_question(self.question_id)
        if question is None:
            raise question_not_found(self.question_id)
        return question

    def load_owned_options(self, question: QuestionRecord) -> List[OptionRecord]:
        return self.store.find_options(question.option_ids)

    def check_votes(self, options: List[OptionRecord]) -> None:
        voted = [o for o in options if o.votes > 0]
        if voted:
            raise Forbidden(
                "Cannot delete this question as one or more of its options have votes",
                details={"options_with_votes": [str(o.id) for o in voted]},
            )

    def remove_options(self, question: QuestionRecord) -> None:
        # Keyed by the full list, including ids that no longer resolve
        deleted = self.store.delete_options(question.option_ids)
        logger.debug("Deleted %d option(s) of question %s", deleted, question.id)

    def remove_question(self) -> None:
        self.store.delete_question(self.question_id)


class PollService:
    """Question and option operations over an explicitly passed store."""

    attach_saga_class = AttachOptionSaga
    delete_option_saga_class = DeleteOptionSaga
    delete_question_saga_class = DeleteQuestionSaga

    def __init__(self, store: PollStore, vote_link_base: str = "http://localhost:8000"):
        self.store = store
        self.vote_link_base = vote_link_base.rstrip("/")

    def _view(self, question: QuestionRecord, link_base: Optional[str] = None) -> QuestionView:
        options = self.store.find_options(question.option_ids)
        if link_base:
            options = [replace(o, link_to_vote=vote_link(link_base, o.id)) for o in options]
        return QuestionView(id=question.id, title=question.title, option_ids=question.option_ids, options=options)

    def list_questions(self) -> List[QuestionView]:
        return [self._view(q) for q in self.store.list_questions()]

    def get_question(self, question_id, link_base: Optional[str] = None) -> QuestionView:
        """Question with its options resolved in list order.

        ``link_base`` re-derives each option's vote link, e.g. from the host the
        request came in on.
        """
        question_id = parse_id(question_id, "question")
        question = self.store.find_question(question_id)
        if question is None:
            raise question_not_found(question_id)
        return self._view(question, link_base)

    def create_question(self, title) -> QuestionRecord:
        title = require_text(title, "Question title")
        question = self.store.create_question(title)
        logger.info("Created question %s", question.id)
        return question

    def attach_option(self, question_id, text) -> OptionRecord:
        question_id = parse_id(question_id, "question")
        text = require_text(text, "Option text")
        question = self.store.find_question(question_id)
        if question is None:
            raise question_not_found(question_id)
        option = self.attach_saga_class(self.store, self.vote_link_base, question, text).run()
        logger.info("Attached option %s to question %s", option.id, question_id)
        return option

    def cast_vote(self, option_id) -> OptionRecord:
        option_id = parse_id(option_id, "option")
        option = self.store.increment_option_votes(option_id)
        if option is None:
            raise option_not_found(option_id)
        return option

    def delete_option(self, option_id) -> OptionDeletion:
        option_id = parse_id(option_id, "option")
        result = self.delete_option_saga_class(self.store, option_id).run()
        logger.info("Deleted option %s (orphan=%s)", option_id, result.orphan)
        return result

    def delete_question(self, question_id) -> QuestionView:
        question_id = parse_id(question_id, "question")
        deleted = self.delete_question_saga_class(self.store, question_id).run()
        logger.info("Deleted question %s with %d option(s)", question_id, len(deleted.option_ids))
        return deleted
