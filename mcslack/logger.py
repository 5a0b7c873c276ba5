import functools
import gzip
import inspect
import logging
import logging.handlers
import shutil
import sys
from pathlib import Path
from typing import Callable

from .config import settings

logger = logging.getLogger("mcslack")
logger.setLevel(logging.DEBUG)
formatter = logging.Formatter(
    "%(asctime)s %(levelname)s [%(module)s:%(funcName)s:%(lineno)d] %(message)s"
)

logs_dir = Path(settings.logs_dir)
logs_dir.mkdir(parents=True, exist_ok=True)


def rotator(source: str, dest: str) -> None:
    """Compress a rotated log file and drop the uncompressed copy."""
    with open(source, "rb") as f_in, gzip.open(dest + ".gz", "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    Path(source).unlink()


log_file_handler = logging.handlers.TimedRotatingFileHandler(
    logs_dir / "mcslack.log", when="midnight"
)
log_file_handler.setFormatter(formatter)
log_file_handler.rotator = rotator
logger.addHandler(log_file_handler)

log_stream_handler = logging.StreamHandler(sys.stdout)
log_stream_handler.setFormatter(formatter)
logger.addHandler(log_stream_handler)


def log_exception[**P, R](
    prefix: str = "",
    default_return: R | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator that logs any exception raised by the wrapped function and
    returns `default_return` instead of propagating it.

    Works for sync and async functions. The prefix may reference the
    function's parameters, e.g. `@log_exception("posting {text!r}")`.

    Usage:
        @log_exception("Slack post")
        async def post(text: str):
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        sig = inspect.signature(func)

        def describe(args: tuple, kwargs: dict) -> str:
            try:
                bound = sig.bind(*args, **kwargs)
            except TypeError:
                return ""
            bound.apply_defaults()
            arguments = {k: v for k, v in bound.arguments.items() if k != "self"}

            params = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
            described = f"[{params}] " if params else ""
            if not prefix:
                return described
            try:
                return f"{described}{prefix.format_map(arguments)}: "
            except (KeyError, ValueError, IndexError):
                return f"{described}{prefix}: "

        def report(e: Exception, args: tuple, kwargs: dict) -> None:
            logger.error(
                f"{describe(args, kwargs)}{type(e).__name__}: {e}",
                exc_info=True,
                stacklevel=3,
            )

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    report(e, args, kwargs)
                    return default_return  # type: ignore[return-value]

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                report(e, args, kwargs)
                return default_return  # type: ignore[return-value]

        return sync_wrapper

    return decorator
