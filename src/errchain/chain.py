from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Self

from loguru import logger

from . import config
from .site import CaptureSite

NIL_STRING = "(nil)"
GENERIC_PUBLIC_MESSAGE = "unexpected error"

Attributes = dict[str, Any]


def format_message(fmt: str, args: Sequence[Any]) -> str:
    """printf-style formatting that never raises."""

    if not args:
        return fmt
    try:
        if len(args) == 1 and isinstance(args[0], Mapping):
            return fmt % args[0]
        return fmt % tuple(args)
    except (TypeError, ValueError, KeyError, OverflowError) as exc:
        logger.debug("Cannot format {!r} with {!r}: {}", fmt, args, exc)
        return " ".join([fmt, *map(repr, args)])


def _join(head: str, tail: str) -> str:
    if head and tail:
        return f"{head}: {tail}"
    return head or tail


class ErrorChain(Exception):
    """One link of an error chain.

    Wraps an optional parent (another :class:`ErrorChain` or any exception),
    a diagnostic ``message`` and, once marked private, a user-facing
    ``public_message``. ``str()`` yields the user-facing text while
    :meth:`full_error` yields everything, for logs.

    Example::

        err = new(exc, "error reading file %s", path).attr("path", path)
        raise err.mark_private("unable to load settings")
    """

    parent: BaseException | None
    private: bool
    message: str
    public_message: str
    location: CaptureSite | None
    attrs: Attributes | None

    def __init__(self, *args: Any, stacklevel: int = 1) -> None:
        self.parent = None
        self.private = False
        self.message = ""
        self.public_message = ""
        self.location = None
        self.attrs = None

        if config.is_recording_stack_trace():
            self.location = CaptureSite.capture(stacklevel)

        for i, arg in enumerate(args):
            if isinstance(arg, BaseException):
                self.parent = arg
            elif isinstance(arg, str):
                self.message = format_message(arg, args[i + 1 :])
                break

        super().__init__(self.message)
        if self.parent is not None:
            self.__cause__ = self.parent

    def __str__(self) -> str:
        return self.error()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_error()!r})"

    def _error(self, public_only: bool) -> str:
        public_only = public_only or self.private
        msg = self.public_message if public_only else self.message

        parent = self.parent
        if isinstance(parent, ErrorChain):
            return _join(msg, parent._error(public_only))
        if parent is not None and not public_only:
            # raw low-level errors are only shown while nothing above is private
            return _join(msg, str(parent))
        return msg

    def error(self) -> str:
        """User-facing message; ``"(nil)"`` for a missing node."""

        if self is None:
            return NIL_STRING
        return self._error(self.private)

    def full_error(self) -> str:
        """Complete message including private parts, suitable for a logfile."""

        if self is None:
            return NIL_STRING

        if self.public_message and self.message:
            msg = f"({self.public_message}) {self.message}"
        else:
            msg = self.public_message or self.message

        parent = self.parent
        if isinstance(parent, ErrorChain):
            return _join(msg, parent.full_error())
        if parent is not None:
            return _join(msg, str(parent))
        return msg

    def stack_trace(self) -> str:
        """Capture sites of this node and its chained parents, one per line.

        Empty when this node was built with recording disabled.
        """

        if self.location is None:
            return ""

        trace = self.location.render()
        if isinstance(self.parent, ErrorChain):
            trace += self.parent.stack_trace()
        return trace

    def mark_private(self, *fmt_args: Any) -> Self:
        """Hide this node's message and everything below it from ``str()``.

        The optional arguments format the user-facing replacement, e.g.
        ``mark_private("unable to save %s", name)``.
        """

        msg = GENERIC_PUBLIC_MESSAGE
        for i, arg in enumerate(fmt_args):
            if isinstance(arg, str):
                msg = format_message(arg, fmt_args[i + 1 :])
                break

        self.private = True
        self.public_message = msg
        return self

    def attr(self, key: str, value: Any) -> Self:
        if self.attrs is None:
            self.attrs = {}
        self.attrs[key] = value
        return self

    def _collect_attrs(self, inout: Attributes) -> None:
        if self.attrs:
            inout.update(self.attrs)
        # ancestors are merged last so their values win on collisions
        if isinstance(self.parent, ErrorChain):
            self.parent._collect_attrs(inout)

    def get_attrs(self) -> Attributes:
        """Attributes of the whole chain merged into a new dict."""

        attrs: Attributes = {}
        self._collect_attrs(attrs)
        return attrs


def new(*args: Any) -> ErrorChain:
    """Create a new :class:`ErrorChain`.

    Arguments may be a parent error and/or a format string followed by its
    arguments: ``new(err, "error reading file %s", path)``.
    """

    return ErrorChain(*args, stacklevel=2)
