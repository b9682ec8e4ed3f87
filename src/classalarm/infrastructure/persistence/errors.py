"""Classification of driver errors raised by the stores."""

import re

from sqlalchemy.exc import DBAPIError

_MISSING_TABLE_PATTERNS = (
    re.compile(r"no such table"),  # sqlite
    re.compile(r'relation "[^"]+" does not exist'),  # postgresql
    re.compile(r"table '[^']+' doesn't exist"),  # mysql
)


def is_missing_table_error(error: Exception) -> bool:
    """Whether ``error`` means the queried table (object class) does not exist."""
    if not isinstance(error, DBAPIError):
        return False
    message = str(error.orig if error.orig is not None else error).lower()
    return any(pattern.search(message) for pattern in _MISSING_TABLE_PATTERNS)
