from collections import defaultdict
from typing import Dict, Iterable, List, Optional
import uuid


class OptionOwnership:
    """Question -> ordered option ids, with a reverse index option id -> questions.

    Used by the in-memory store so the owning-question lookup is an index hit
    rather than a scan of every list. Not thread-safe on its own; the store
    serialises access.
    """

    def __init__(self):
        self._lists: Dict[uuid.UUID, List[uuid.UUID]] = {}
        # dict used as an insertion-ordered set
        self._owners: Dict[uuid.UUID, Dict[uuid.UUID, None]] = defaultdict(dict)

    def __contains__(self, question_id) -> bool:
        return question_id in self._lists

    def add_question(self, question_id: uuid.UUID) -> None:
        self._lists.setdefault(question_id, [])

    def options_of(self, question_id: uuid.UUID) -> List[uuid.UUID]:
        return list(self._lists[question_id])

    def append(self, question_id: uuid.UUID, option_id: uuid.UUID) -> None:
        self._lists[question_id].append(option_id)
        self._owners[option_id][question_id] = None

    def pull(self, question_id: uuid.UUID, option_id: uuid.UUID) -> None:
        self._lists[question_id] = [oid for oid in self._lists[question_id] if oid != option_id]
        self._forget_owner(option_id, question_id)

    def replace(self, question_id: uuid.UUID, option_ids: Iterable[uuid.UUID]) -> None:
        for oid in self._lists.get(question_id, []):
            self._forget_owner(oid, question_id)
        self._lists[question_id] = []
        for oid in option_ids:
            self.append(question_id, oid)

    def drop_question(self, question_id: uuid.UUID) -> List[uuid.UUID]:
        option_ids = self._lists.pop(question_id, [])
        for oid in option_ids:
            self._forget_owner(oid, question_id)
        return option_ids

    def owner_of(self, option_id: uuid.UUID) -> Optional[uuid.UUID]:
        owners = self._owners.get(option_id)
        if not owners:
            return None
        return next(iter(owners))

    def _forget_owner(self, option_id, question_id) -> None:
        owners = self._owners.get(option_id)
        if owners is None:
            return
        owners.pop(question_id, None)
        if not owners:
            del self._owners[option_id]
