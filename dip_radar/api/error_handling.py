"""Error handling utilities for API endpoints."""

import functools
import traceback
from typing import Any, Awaitable, Callable

from pydantic import ValidationError as PydanticValidationError
from starlette.responses import JSONResponse

from dip_radar.logging_config import get_logger
from dip_radar.utils.error_handling import DipRadarError

logger = get_logger(__name__)


def with_error_handling(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
    """Decorator to handle common errors in REST API endpoints.

    Args:
        func: The endpoint function to wrap

    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> Any:
        try:
            return await func(*args, **kwargs)
        except PydanticValidationError as e:
            logger.warning(f"Validation error: {str(e)}")
            return JSONResponse({
                "error": "Validation error",
                "error_explanation": "The request data failed validation requirements.",
                "details": e.errors(include_url=False, include_context=False),
            }, status_code=400)
        except DipRadarError as e:
            logger.warning(f"{e.__class__.__name__}: {e.message}")
            return JSONResponse(e.to_dict(), status_code=400)
        except ValueError as e:
            logger.warning(f"Value error: {str(e)}")
            return JSONResponse({
                "error": str(e),
                "error_explanation": "Invalid input value provided."
            }, status_code=400)
        except Exception as e:
            logger.error(f"Unexpected error: {str(e)}")
            logger.debug(traceback.format_exc())
            return JSONResponse({
                "error": f"Unexpected error: {str(e)}",
                "error_explanation": "An unexpected error occurred while processing your request."
            }, status_code=500)

    return wrapper
