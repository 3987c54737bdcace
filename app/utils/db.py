from contextlib import contextmanager
import logging
from sqlalchemy.orm.exc import StaleDataError
from models import db
from app.services.errors import ServiceError, ConflictError

@contextmanager
def transactional(message="DB transaction failed"):
    """Context manager to wrap a database transaction.

    Service errors roll back quietly; a stale versioned row becomes a
    ``ConflictError``; anything else is logged before it propagates.
    """
    try:
        yield
        db.session.commit()
    except ServiceError:
        db.session.rollback()
        raise
    except StaleDataError as e:
        db.session.rollback()
        logging.warning(f"{message}: stale write rejected: %s", e)
        raise ConflictError("The record was changed by another request, reload and retry")
    except Exception as e:
        db.session.rollback()
        logging.error(f"{message}: %s", e, exc_info=True)
        raise
