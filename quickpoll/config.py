import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent  # project root (where wsgi.py is)
load_dotenv(BASE_DIR / ".env")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'polls.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "sqlalchemy" or "memory"
    POLL_STORE = os.getenv("POLL_STORE", "sqlalchemy")
    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "false").lower() == "true"

    # Base used for the persisted link_to_vote of new options
    VOTE_LINK_BASE_URL = os.getenv("VOTE_LINK_BASE_URL", "http://localhost:8000").rstrip("/")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    SWAGGER = {"title": "Quick Poll API", "uiversion": 3}


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    POLL_STORE = "sqlalchemy"
    AUTO_CREATE_TABLES = True
    VOTE_LINK_BASE_URL = "http://localhost:8000"
