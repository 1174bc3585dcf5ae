from .base import OptionRecord, PollStore, QuestionRecord  # noqa: F401
from .memory import InMemoryPollStore
from .sqlalchemy_store import SqlAlchemyPollStore

STORE_BACKENDS = {
    "memory": InMemoryPollStore,
    "sqlalchemy": SqlAlchemyPollStore,
}


def build_store(app) -> PollStore:
    """Instantiate the store named by ``POLL_STORE``."""
    name = app.config.get("POLL_STORE", "sqlalchemy")
    try:
        backend = STORE_BACKENDS[name]
    except KeyError:
        raise ValueError(f"Unknown POLL_STORE {name!r}; expected one of {sorted(STORE_BACKENDS)}") from None
    app.logger.info("Using %s poll store", name)
    return backend()
