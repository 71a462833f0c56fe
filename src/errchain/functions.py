"""Accessors that accept any error, chained or not."""

from __future__ import annotations

from .chain import Attributes, ErrorChain


def full_error(err: BaseException | None) -> str:
    """Complete error message, including private (non-user-facing) parts."""

    if err is None:
        return ""
    if isinstance(err, ErrorChain):
        return err.full_error()
    return str(err)


def stack_trace(err: BaseException | None) -> str:
    """Recorded capture sites of *err*, or an empty string."""

    if isinstance(err, ErrorChain):
        return err.stack_trace()
    return ""


def get_attrs(err: BaseException | None) -> Attributes | None:
    """Merged attributes of the chain, or ``None`` for plain errors."""

    if isinstance(err, ErrorChain):
        return err.get_attrs()
    return None


def as_chain(err: BaseException) -> ErrorChain:
    """Return *err* itself when it is already chained, otherwise wrap it."""

    if isinstance(err, ErrorChain):
        return err
    return ErrorChain(err, stacklevel=2)
