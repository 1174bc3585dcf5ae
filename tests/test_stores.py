import threading
import uuid
from datetime import datetime

import pytest
from sqlalchemy import update

from quickpoll import create_app
from quickpoll.config import TestConfig
from quickpoll.errors import StoreFailure
from quickpoll.extensions import db
from quickpoll.models.question import Question
from quickpoll.store.memory import InMemoryPollStore
from quickpoll.store.ownership import OptionOwnership
from quickpoll.store.sqlalchemy_store import SqlAlchemyPollStore


@pytest.fixture(params=["memory", "sqlalchemy"])
def store(request):
    if request.param == "memory":
        return InMemoryPollStore()
    request.getfixturevalue("app")
    return SqlAlchemyPollStore()


def test_missing_ids_resolve_to_none(store):
    missing = uuid.uuid4()
    assert store.find_question(missing) is None
    assert store.find_option(missing) is None
    assert store.find_question_owning(missing) is None
    assert store.increment_option_votes(missing) is None
    assert store.set_option_vote_link(missing, "x") is None
    assert store.append_option_ref(missing, uuid.uuid4()) is False
    assert store.pull_option_ref(missing, uuid.uuid4()) is False
    assert store.update_question_options(missing, []) is False


def test_pull_removes_every_occurrence_and_is_idempotent(store):
    question = store.create_question("Q")
    a = store.create_option("A")
    b = store.create_option("B")
    assert store.update_question_options(question.id, [a.id, b.id, a.id])

    assert store.pull_option_ref(question.id, a.id)
    assert store.pull_option_ref(question.id, a.id)
    assert store.find_question(question.id).option_ids == [b.id]


def test_update_replaces_list_and_reverse_lookup(store):
    question = store.create_question("Q")
    a = store.create_option("A")
    b = store.create_option("B")
    store.append_option_ref(question.id, a.id)

    store.update_question_options(question.id, [b.id])

    assert store.find_question(question.id).option_ids == [b.id]
    assert store.find_question_owning(a.id) is None
    assert store.find_question_owning(b.id).id == question.id


def test_find_options_keeps_order_and_skips_missing(store):
    a = store.create_option("A")
    b = store.create_option("B")
    found = store.find_options([b.id, uuid.uuid4(), a.id])
    assert [o.text for o in found] == ["B", "A"]
    assert store.find_options([]) == []


def test_bulk_delete_counts_only_existing(store):
    a = store.create_option("A")
    b = store.create_option("B")
    assert store.delete_options([a.id, b.id, uuid.uuid4()]) == 2
    assert store.delete_options([]) == 0


def test_delete_question_drops_reverse_index(store):
    question = store.create_question("Q")
    a = store.create_option("A")
    store.append_option_ref(question.id, a.id)
    store.delete_question(question.id)
    assert store.find_question_owning(a.id) is None
    # the option itself is a separate record
    assert store.find_option(a.id) is not None


def test_sqlalchemy_errors_become_store_failure(app):
    store = SqlAlchemyPollStore()
    db.drop_all()
    with pytest.raises(StoreFailure) as exc:
        store.create_question("Q")
    assert exc.value.message == "Failed to create question"
    db.create_all()


class TestOptionOwnership:
    def test_owner_is_first_linking_question(self):
        ownership = OptionOwnership()
        q1, q2, opt = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        ownership.add_question(q1)
        ownership.add_question(q2)
        ownership.append(q1, opt)
        ownership.append(q2, opt)

        assert ownership.owner_of(opt) == q1
        ownership.pull(q1, opt)
        assert ownership.owner_of(opt) == q2
        assert ownership.drop_question(q2) == [opt]
        assert ownership.owner_of(opt) is None
        assert q2 not in ownership


def test_sqlalchemy_lists_in_creation_order_despite_equal_timestamps(app):
    store = SqlAlchemyPollStore()
    created = [store.create_question(f"Q{i}").id for i in range(6)]
    db.session.execute(update(Question).values(created_at=datetime(2024, 1, 1)))
    db.session.commit()

    assert [q.id for q in store.list_questions()] == created


@pytest.fixture
def file_backed_app(tmp_path):
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'polls.db'}"
        SQLALCHEMY_ENGINE_OPTIONS = {"connect_args": {"timeout": 30, "check_same_thread": False}}

    app = create_app(FileConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


def test_sqlalchemy_concurrent_votes_are_not_lost(file_backed_app):
    service = file_backed_app.extensions["poll_service"]
    with file_backed_app.app_context():
        question = service.create_question("Q")
        option = service.attach_option(question.id, "A")

    voters, votes_each = 8, 10
    start = threading.Barrier(voters)
    errors = []

    def vote():
        with file_backed_app.app_context():
            start.wait()
            try:
                for _ in range(votes_each):
                    service.cast_vote(option.id)
            except Exception as exc:  # surfaced by the assertion below
                errors.append(exc)
            finally:
                db.session.remove()

    threads = [threading.Thread(target=vote) for _ in range(voters)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    with file_backed_app.app_context():
        assert service.store.find_option(option.id).votes == voters * votes_each
