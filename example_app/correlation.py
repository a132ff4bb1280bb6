"""Request correlation and logging for the HTTP entrypoint."""
import time
import uuid
from functools import wraps
from typing import Callable

from flask import request as flask_request


def get_correlation_id(request=None) -> str:
    """Get or generate a correlation ID.

    Checks X-Correlation-ID, then X-Request-ID, and falls back to a new UUID.
    """
    if request:
        return (
            request.headers.get('X-Correlation-ID') or
            request.headers.get('X-Request-ID') or
            str(uuid.uuid4())
        )
    return str(uuid.uuid4())


def with_correlation(logger):
    """Decorator handling the correlation ID and request logging for Flask.

    Usage:
        @with_correlation(logger)
        def my_handler(request: Request):
            # request.correlation_id is set here
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            req = flask_request
            correlation_id = get_correlation_id(req)
            req.correlation_id = correlation_id
            start_time = time.time()

            logger.info(
                "Request started",
                correlation_id=correlation_id,
                method=req.method,
                path=req.path,
                user_agent=req.headers.get('User-Agent', ''),
                remote_addr=req.headers.get('X-Forwarded-For', '').split(',')[0] if req.headers.get('X-Forwarded-For') else ''
            )

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.time() - start_time) * 1000
                logger.error(
                    "Request failed",
                    error=e,
                    correlation_id=correlation_id,
                    method=req.method,
                    path=req.path,
                    duration_ms=round(duration_ms, 2)
                )
                raise

            if isinstance(result, tuple):
                response_data = result[0]
                status_code = result[1] if len(result) > 1 else 200
                headers = result[2] if len(result) > 2 and isinstance(result[2], dict) else {}
            else:
                response_data = result
                status_code = getattr(result, 'status_code', 200)
                headers = {}

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Request completed",
                correlation_id=correlation_id,
                method=req.method,
                path=req.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2)
            )

            headers['X-Correlation-ID'] = correlation_id
            return response_data, status_code, headers

        return wrapper
    return decorator
