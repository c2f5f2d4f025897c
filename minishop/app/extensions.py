import logging

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

# Singletons (initialized in app factory)
db = SQLAlchemy()
migrate = Migrate()
cors = CORS()

logger = logging.getLogger(__name__)


def verify_store_connection() -> None:
    """Round-trip a trivial query; an unreachable store ends the process.

    Must run inside an application context.
    """
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database connection failed")
        raise SystemExit(1)
    finally:
        db.session.remove()
    logger.info("Database connected")
