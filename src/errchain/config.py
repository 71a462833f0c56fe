"""Process-wide switches.

Capture-site recording is off by default and is read only when an error node
is constructed. Nothing here is synchronized: flipping the switch while other
threads construct errors is a race the caller must avoid.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_record_stack_trace = False


class Settings(BaseSettings):
    record_stack_trace: bool = Field(
        default=False, validation_alias="ERRCHAIN_RECORD_STACK_TRACE"
    )

    @field_validator("record_stack_trace", mode="before")
    @classmethod
    def _parse_record_stack_trace(cls, v: bool | str) -> bool | str:
        if v == "":
            return False
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


def is_recording_stack_trace() -> bool:
    return _record_stack_trace


def set_record_stack_trace(enabled: bool) -> None:
    global _record_stack_trace
    if _record_stack_trace != enabled:
        logger.debug("Capture-site recording {}", "enabled" if enabled else "disabled")
    _record_stack_trace = enabled


def enable_stack_trace() -> None:
    set_record_stack_trace(True)


def disable_stack_trace() -> None:
    set_record_stack_trace(False)


@contextmanager
def stack_trace_recording(enabled: bool = True) -> Iterator[None]:
    """Temporarily set capture-site recording, restoring the previous value."""

    previous = _record_stack_trace
    set_record_stack_trace(enabled)
    try:
        yield
    finally:
        set_record_stack_trace(previous)


def configure(settings: Settings | None = None) -> Settings:
    """Apply *settings* (read from the environment when omitted)."""

    settings = settings or Settings()
    set_record_stack_trace(settings.record_stack_trace)
    return settings
