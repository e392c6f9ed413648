"""
Domain error handling for API endpoints.

Maps the domain exception hierarchy onto HTTP status codes so every
router reports failures the same way.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from mathprep.core.exceptions import (
    ConflictError,
    InsufficientQuestionsError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from mathprep.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_domain_errors(func: F) -> F:
    """
    Decorator turning domain exceptions into HTTPExceptions.

    NotFound -> 404, Conflict -> 409, PermissionDenied -> 403,
    Validation and InsufficientQuestions -> 400, pydantic errors -> 422,
    anything else -> 500 with the traceback logged.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"resource": e.resource, "error": e.message})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except ConflictError as e:
            logger.warning("Conflicting request", extra={"error": e.message, "details": e.details})
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

        except PermissionDeniedError as e:
            logger.warning("Permission denied", extra={"error": e.message})
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)

        except (ValidationError, InsufficientQuestionsError) as e:
            logger.warning("Invalid request", extra={"error": e.message, "details": e.details})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except PydanticValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(),
            )

        except Exception as e:
            log_exception_with_context(logger, "Unexpected failure in request handler", e, handler=func.__name__)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
