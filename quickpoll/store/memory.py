import logging
import threading
import uuid
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from .base import OptionRecord, PollStore, QuestionRecord
from .ownership import OptionOwnership

logger = logging.getLogger(__name__)


class InMemoryPollStore(PollStore):
    """Dict-backed store for tests and single-process runs (POLL_STORE=memory).

    One lock serialises every call, so each method is atomic the way a single
    document write is. Records are copied on the way in and out.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._titles: Dict[uuid.UUID, str] = {}
        self._ownership = OptionOwnership()
        self._options: Dict[uuid.UUID, OptionRecord] = {}

    def _question(self, question_id) -> QuestionRecord:
        return QuestionRecord(
            id=question_id,
            title=self._titles[question_id],
            option_ids=self._ownership.options_of(question_id),
        )

    # Questions

    def list_questions(self) -> List[QuestionRecord]:
        with self._lock:
            return [self._question(qid) for qid in self._titles]

    def find_question(self, question_id) -> Optional[QuestionRecord]:
        with self._lock:
            if question_id not in self._titles:
                return None
            return self._question(question_id)

    def create_question(self, title: str) -> QuestionRecord:
        question_id = uuid.uuid4()
        with self._lock:
            self._titles[question_id] = title
            self._ownership.add_question(question_id)
            return self._question(question_id)

    def update_question_options(self, question_id, option_ids: Iterable[uuid.UUID]) -> bool:
        with self._lock:
            if question_id not in self._titles:
                return False
            self._ownership.replace(question_id, list(option_ids))
            return True

    def append_option_ref(self, question_id, option_id) -> bool:
        with self._lock:
            if question_id not in self._titles:
                return False
            self._ownership.append(question_id, option_id)
            return True

    def pull_option_ref(self, question_id, option_id) -> bool:
        with self._lock:
            if question_id not in self._titles:
                return False
            self._ownership.pull(question_id, option_id)
            return True

    def delete_question(self, question_id) -> None:
        with self._lock:
            self._titles.pop(question_id, None)
            self._ownership.drop_question(question_id)

    def find_question_owning(self, option_id) -> Optional[QuestionRecord]:
        with self._lock:
            owner_id = self._ownership.owner_of(option_id)
            if owner_id is None:
                return None
            return self._question(owner_id)

    # Options

    def find_option(self, option_id) -> Optional[OptionRecord]:
        with self._lock:
            option = self._options.get(option_id)
            return replace(option) if option else None

    def find_options(self, option_ids: Iterable[uuid.UUID]) -> List[OptionRecord]:
        with self._lock:
            return [replace(self._options[oid]) for oid in option_ids if oid in self._options]

    def create_option(self, text: str) -> OptionRecord:
        option = OptionRecord(id=uuid.uuid4(), text=text, votes=0)
        with self._lock:
            self._options[option.id] = option
            return replace(option)

    def set_option_vote_link(self, option_id, link: str) -> Optional[OptionRecord]:
        with self._lock:
            option = self._options.get(option_id)
            if option is None:
                return None
            option.link_to_vote = link
            return replace(option)

    def increment_option_votes(self, option_id) -> Optional[OptionRecord]:
        with self._lock:
            option = self._options.get(option_id)
            if option is None:
                return None
            option.votes += 1
            return replace(option)

    def delete_option(self, option_id) -> None:
        with self._lock:
            self._options.pop(option_id, None)

    def delete_options(self, option_ids: Iterable[uuid.UUID]) -> int:
        with self._lock:
            deleted = 0
            for oid in set(option_ids):
                if self._options.pop(oid, None) is not None:
                    deleted += 1
            logger.debug("Bulk-deleted %d option(s)", deleted)
            return deleted
