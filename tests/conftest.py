"""Shared fixtures.

``service`` runs against the in-memory store. ``any_service`` is parametrised
over both stores so the deletion and linking rules are checked against each.
The SQLAlchemy variant uses a per-test in-memory SQLite database.
"""
import pytest

from quickpoll import create_app
from quickpoll.config import TestConfig
from quickpoll.extensions import db
from quickpoll.services.polls import PollService
from quickpoll.store.memory import InMemoryPollStore


@pytest.fixture
def memory_store():
    return InMemoryPollStore()


@pytest.fixture
def service(memory_store):
    return PollService(memory_store, vote_link_base="http://polls.test")


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(params=["memory", "sqlalchemy"])
def any_service(request):
    if request.param == "memory":
        return PollService(InMemoryPollStore(), vote_link_base="http://polls.test")
    app = request.getfixturevalue("app")
    return PollService(app.extensions["poll_store"], vote_link_base="http://polls.test")
