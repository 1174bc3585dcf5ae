from dotenv import load_dotenv
from flask import Flask
from flasgger import Swagger
from .config import Config
from .errors import register_error_handlers
from .extensions import db, migrate, ma
from .logging_setup import configure_logging
from .middleware.request_id import init_request_id
from .services.polls import PollService
from .store import build_store
from .store.base import PollStore
from .swagger_config import swagger_template

load_dotenv()


def create_app(config_class=Config, store: PollStore | None = None) -> Flask:
    """Build the app. ``store`` overrides the one named by POLL_STORE."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    if not app.testing:
        # pytest installs its own capture handlers on the root logger
        configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    Swagger(app, template=swagger_template(app))

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    ma.init_app(app)

    # Middleware + errors
    init_request_id(app)
    register_error_handlers(app)

    # Store handle + service
    from . import models  # noqa: F401  (register tables with the metadata)

    if store is None:
        store = build_store(app)
    app.extensions["poll_store"] = store
    app.extensions["poll_service"] = PollService(store, vote_link_base=app.config["VOTE_LINK_BASE_URL"])

    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    # Blueprint imports
    from .api.home.routes import home_bp
    from .api.questions.routes import questions_bp
    from .api.options.routes import options_bp

    # Blueprints
    app.register_blueprint(home_bp)
    app.register_blueprint(questions_bp, url_prefix="/questions")
    app.register_blueprint(options_bp, url_prefix="/options")
    app.register_blueprint(options_bp, url_prefix="/questions/options", name="question_options")

    @app.cli.command("init-db")
    def init_db():
        """Create all tables without running migrations."""
        db.create_all()
        app.logger.info("Tables created for %s", app.config["SQLALCHEMY_DATABASE_URI"])

    return app
