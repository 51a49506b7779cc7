from __future__ import annotations

import logging
from contextlib import contextmanager

from ..core.constants import MSG_INTERNAL_ERROR
from ..core.exceptions import DomainError, InternalError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str):
    """Re-raise anything that is not a domain rule as InternalError."""

    try:
        yield
    except DomainError:
        raise
    except Exception as exc:
        logger.exception("Store failure during %s", operation)
        raise InternalError(MSG_INTERNAL_ERROR) from exc
