from __future__ import annotations

import asyncio
import functools
import inspect
import traceback
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from loguru import logger

from .chain import ErrorChain
from .site import CaptureSite

P = ParamSpec("P")
R = TypeVar("R")


def _format_tail(exc: BaseException, *, limit: int = 6) -> str:
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(tb[-limit:])


def _wrap(exc: Exception, fmt_args: tuple[Any, ...]) -> ErrorChain:
    logger.debug("Wrapping {!r}\n{}", exc, _format_tail(exc))
    wrapped = ErrorChain(exc, *fmt_args)
    if wrapped.location is not None:
        wrapped.location = CaptureSite.from_traceback(exc.__traceback__)
    return wrapped


def wrap_errors(*fmt_args: Any) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator re-raising escaping exceptions as an :class:`ErrorChain`.

    ``fmt_args`` are passed to the new node after the caught exception, so
    ``@wrap_errors("loading profile %s", "default")`` yields
    ``"loading profile default: <original error>"``.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
                try:
                    return await func(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    raise _wrap(exc, fmt_args) from exc

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                raise _wrap(exc, fmt_args) from exc

        return sync_wrapper  # type: ignore[return-value]

    return decorator
