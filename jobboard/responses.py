"""
Uniform response envelope for actions.

Successful actions return SuccessResponse(...).serialize(); the
server_action decorator turns every failure into ErrorResponse(...).serialize().
"""

import functools
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from .errors import ErrorKind, JobBoardError
from .logger import get_logger


@dataclass
class SuccessResponse:
    message: str
    status_code: int
    additional: Any = None

    def serialize(self) -> Dict[str, Any]:
        return {
            "status": True,
            "message": self.message,
            "statusCode": self.status_code,
            "additional": self.additional,
        }


@dataclass
class ErrorResponse:
    message: str
    kind: ErrorKind
    errors: Optional[List[str]] = None

    def serialize(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "status": False,
            "message": self.message,
            "error": self.kind.value,
        }
        if self.errors:
            body["errors"] = self.errors
        return body


def format_validation_errors(exc: ValidationError) -> List[str]:
    """Flatten pydantic errors to 'field: message' strings."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "payload"
        messages.append(f"{loc}: {err['msg']}")
    return messages


def server_action(func: Callable) -> Callable:
    """
    Wrap an action so every failure resolves to an error envelope.

    Only the mapped kind and a human message reach the caller;
    exception details go to the log.
    """
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        logger = getattr(self, "logger", None) or get_logger()
        action = func.__name__
        try:
            return func(self, *args, **kwargs)
        except JobBoardError as e:
            logger.record_failure(e.kind.value)
            logger.warning(f"{action} rejected", kind=e.kind.value, reason=e.message)
            return ErrorResponse(e.message, e.kind).serialize()
        except ValidationError as e:
            errors = format_validation_errors(e)
            logger.record_failure(ErrorKind.VALIDATION_ERROR.value)
            logger.info(f"{action} validation failed", errors=errors)
            return ErrorResponse("Invalid input", ErrorKind.VALIDATION_ERROR, errors).serialize()
        except SQLAlchemyError as e:
            logger.record_failure(ErrorKind.DATABASE_ERROR.value)
            logger.error(f"{action} database failure", exc_info=True, error=str(e))
            return ErrorResponse("Internal server error", ErrorKind.DATABASE_ERROR).serialize()
        except Exception as e:
            logger.record_failure(ErrorKind.INTERNAL_SERVER_ERROR.value)
            logger.error(f"{action} failed unexpectedly", exc_info=True, error=str(e))
            return ErrorResponse(
                "Internal server error", ErrorKind.INTERNAL_SERVER_ERROR
            ).serialize()

    return wrapper
