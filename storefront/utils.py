import functools
import inspect

from loguru import logger

_REDACTED_PARAMS = {"password", "access_token", "token"}


def log_call(func):
    """
    A decorator that logs coroutine entry, exit, and exceptions.

    Features:
    - Logs function name and parameters before execution (secrets redacted)
    - Logs exceptions and re-raises them unchanged
    - Logs a debug message after successful execution
    - Preserves function metadata and return values
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        func_name = func.__qualname__

        sig = inspect.signature(func)
        bound_args = sig.bind(*args, **kwargs)
        bound_args.apply_defaults()
        params = {
            name: ("***" if name in _REDACTED_PARAMS else value)
            for name, value in bound_args.arguments.items()
            if name != "self"
        }

        logger.debug(f"Entering {func_name} with params: {params}")

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.info(f"{func_name} raised {type(e).__name__}: {e}")
            raise

        logger.debug(f"{func_name} done")
        return result

    return wrapper
