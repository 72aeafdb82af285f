"""
Classify driver-level database errors into store failure codes.

The codes follow PostgreSQL SQLSTATE values so a failure looks the same
whichever driver produced it: PostgreSQL drivers report the SQLSTATE directly,
SQLite and MySQL only give us a message, which is matched on keywords.
"""
import logging
from enum import Enum

from sqlalchemy.exc import DBAPIError, IntegrityError

logger = logging.getLogger(__name__)


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class StoreErrorCode(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"
    # PostgREST's code for "a single row was requested but none matched"
    NO_ROWS = "PGRST116"
    UNKNOWN = "unknown"


_SQLSTATE_CODES = {
    code.value: code
    for code in (
        StoreErrorCode.UNIQUE_VIOLATION,
        StoreErrorCode.NOT_NULL_VIOLATION,
        StoreErrorCode.FOREIGN_KEY_VIOLATION,
        StoreErrorCode.CHECK_VIOLATION,
    )
}


# =================================================================================================================
# Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _sqlstate_of(orig) -> str | None:
    # psycopg2 exposes `pgcode`, psycopg 3 and asyncpg expose `sqlstate`
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _constraint_name_of(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None:
        return getattr(diag, "constraint_name", None)
    # asyncpg: the adapted exception wraps the native one
    cause = getattr(orig, "__cause__", None)
    return getattr(cause, "constraint_name", None)


def _classify_from_postgres_diag(orig) -> tuple[StoreErrorCode | None, str | None]:
    """
    Classify from the SQLSTATE reported by a PostgreSQL driver.
    Returns (None, None) when the driver gives no SQLSTATE.
    """
    sqlstate = _sqlstate_of(orig)
    if not sqlstate:
        return None, None

    constraint_name = _constraint_name_of(orig)
    code = _SQLSTATE_CODES.get(sqlstate)

    if code:
        logger.debug(
            "Postgres integrity diagnostic",
            extra={"sqlstate": sqlstate, "constraint_name": constraint_name}
        )
        return code, constraint_name

    logger.warning(
        "Unknown Postgres error code encountered",
        extra={"sqlstate": sqlstate, "constraint_name": constraint_name}
    )
    return StoreErrorCode.UNKNOWN, constraint_name


def _classify_from_generic_message(msg: str) -> StoreErrorCode:
    """
    Classify from message content (SQLite, MySQL).
    """
    normalized = msg.lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "unique violation", "duplicate"]):
        return StoreErrorCode.UNIQUE_VIOLATION

    if _match_any(normalized, ["not null constraint", "not null", "null value in column"]):
        return StoreErrorCode.NOT_NULL_VIOLATION

    if _match_any(normalized, ["foreign key constraint", "foreign key", "is not present in table"]):
        return StoreErrorCode.FOREIGN_KEY_VIOLATION

    if _match_any(normalized, ["check constraint", "check failed"]):
        return StoreErrorCode.CHECK_VIOLATION

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    return StoreErrorCode.UNKNOWN


def classify_store_error(exc: Exception) -> tuple[StoreErrorCode, str | None]:
    """
    Classify an exception raised while talking to the database.

    Returns:
        A tuple of (StoreErrorCode, constraint_name if available)
    """
    if not isinstance(exc, DBAPIError):
        return StoreErrorCode.UNKNOWN, None

    orig = exc.orig

    code, constraint_name = _classify_from_postgres_diag(orig)
    if code is not None:
        return code, constraint_name

    # Without a SQLSTATE only integrity errors carry a recognisable message
    if isinstance(exc, IntegrityError):
        return _classify_from_generic_message(str(orig)), None

    return StoreErrorCode.UNKNOWN, None
