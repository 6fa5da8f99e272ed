import logging
from functools import wraps
from http import HTTPStatus

from fastapi import HTTPException

logger = logging.getLogger(__name__)

ERRMAP = {
    "validation_error": HTTPStatus.BAD_REQUEST,
    "not_found": HTTPStatus.NOT_FOUND,
}


def handle_runtime_errors(mapping: dict[str, HTTPStatus] = ERRMAP):
    """
    Turns a RuntimeError carrying a known `code` into an HTTPException.
    Anything else (storage failures included) becomes a 500.
    """
    def decorator(fn):
        @wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except RuntimeError as e:
                code = getattr(e, "code", None)
                if code in mapping:
                    raise HTTPException(status_code=mapping[code],
                                        detail=e.to_detail())
                logger.error("unhandled_runtime_error",
                             extra={"err": str(e)}, exc_info=e)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail={"error": "internal_error",
                            "message": "internal_error"})
        return wrapper
    return decorator
