"""
Service error handling for routers.

Provides a decorator translating domain exceptions into HTTP responses
consistently across endpoints.

Dependencies: fastapi, skillswap.core.exceptions, skillswap.observability
System role: Error translation at the HTTP boundary
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from skillswap.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    SkillSwapException,
)
from skillswap.observability.log_utils import log_domain_error, log_exception_with_context

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_EXCEPTION: dict[type[SkillSwapException], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
}


def handle_service_errors(func: F) -> F:
    """
    Decorator to transform service-layer errors into HTTPExceptions.

    This centralizes:
    - Mapping domain exceptions to HTTP status codes
    - Logging of rejected operations (WARNING) and failures (with traceback)
    - Hiding internal error details from clients
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except SkillSwapException as e:
            status_code = next(
                (code for exc_type, code in STATUS_BY_EXCEPTION.items() if isinstance(e, exc_type)),
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
            log_domain_error(logger, "Request rejected", e, endpoint=func.__name__, status_code=status_code)
            raise HTTPException(status_code=status_code, detail=e.message)

        except Exception as e:
            log_exception_with_context(logger, "Unexpected failure in endpoint", e, endpoint=func.__name__)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
