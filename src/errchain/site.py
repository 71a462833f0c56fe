from __future__ import annotations

import inspect
import traceback
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class CaptureSite:
    """Program location where an error node was constructed.

    Only plain values are kept so that recording a site never pins a frame.
    """

    function: str
    filename: str
    lineno: int

    @classmethod
    def unknown(cls) -> CaptureSite:
        return cls(UNKNOWN, UNKNOWN, 0)

    @classmethod
    def capture(cls, stacklevel: int = 1) -> CaptureSite:
        """Capture the frame *stacklevel* levels above the caller."""

        frame = inspect.currentframe()
        try:
            # skip this method's own frame
            for _ in range(stacklevel + 1):
                if frame is None:
                    break
                frame = frame.f_back
            if frame is None:
                return cls.unknown()
            code = frame.f_code
            return cls(code.co_qualname, code.co_filename, frame.f_lineno)
        finally:
            del frame

    @classmethod
    def from_traceback(cls, tb: TracebackType | None) -> CaptureSite:
        """Site of the innermost frame of *tb*, where the exception was raised."""

        if tb is None:
            return cls.unknown()
        summary = traceback.extract_tb(tb)[-1]
        return cls(summary.name, summary.filename, summary.lineno or 0)

    def render(self) -> str:
        if self.filename == UNKNOWN:
            return f" {self.function} ({UNKNOWN}:{self.lineno})\n"
        return f" {self.function} ({Path(self.filename).name}:{self.lineno})\n"
