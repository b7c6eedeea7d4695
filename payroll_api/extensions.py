# payroll_api/extensions.py
import logging

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Gateway results are read after their unit commits and closes the session.
db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate()

log = logging.getLogger(__name__)


def normalize_db_url(url: str) -> str:
    if not url:
        return url
    # Render / Heroku style → SQLAlchemy psycopg3 driver
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def init_db(app):
    url = app.config.get("SQLALCHEMY_DATABASE_URI", "") or ""
    app.config["SQLALCHEMY_DATABASE_URI"] = normalize_db_url(url)

    # SQLite (tests / local runs) keeps the SQLAlchemy pool defaults
    if not app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
        app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {
            "pool_pre_ping": True,
            "pool_recycle": 270,
            "pool_size": 5,
            "max_overflow": 2,
            "pool_timeout": 30,
        })

    db.init_app(app)
    migrate.init_app(app, db)


def dispose_engine(app):
    """Close every pooled connection; call once when the process shuts down."""
    with app.app_context():
        db.session.remove()
        db.engine.dispose()
    log.info("database pool disposed")
