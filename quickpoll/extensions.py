from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_marshmallow import Marshmallow

db = SQLAlchemy()
migrate = Migrate()
ma = Marshmallow()


def current_poll_service():
    """PollService bound to the running app (see create_app)."""
    return current_app.extensions["poll_service"]
