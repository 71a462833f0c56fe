import logging
from collections.abc import Callable, Iterator

import pytest
from loguru import logger

import errchain
from errchain import ErrorChain, new


class NoRowsError(Exception):
    """Stand-in for a driver error such as ``sql.ErrNoRows``."""


@pytest.fixture(autouse=True)
def restore_recording() -> Iterator[None]:
    """Keep the process-wide recording switch from leaking between tests."""
    previous = errchain.is_recording_stack_trace()
    yield
    errchain.set_record_stack_trace(previous)


@pytest.fixture
def loguru_caplog(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    """Route errchain's loguru records into caplog."""
    caplog.set_level(logging.DEBUG)
    logger.enable("errchain")
    sink_id = logger.add(caplog.handler, level="DEBUG", format="{message}")
    yield caplog
    logger.remove(sink_id)
    logger.disable("errchain")


@pytest.fixture
def no_rows() -> NoRowsError:
    return NoRowsError("sql: no rows in result set")


@pytest.fixture
def database_error(no_rows: NoRowsError) -> Callable[[], ErrorChain]:
    """Build ``database error: <driver error>`` tagged with ``db``."""

    def factory() -> ErrorChain:
        return new(no_rows, "database error").attr("db", "mydb")

    return factory


@pytest.fixture
def request_error_private(
    database_error: Callable[[], ErrorChain],
) -> Callable[[], ErrorChain]:
    def factory() -> ErrorChain:
        return new(database_error()).mark_private("unable to save data")

    return factory


@pytest.fixture
def request_error_private_with_message(
    database_error: Callable[[], ErrorChain],
) -> Callable[[], ErrorChain]:
    def factory() -> ErrorChain:
        return new(database_error(), "error processing request").mark_private(
            "unable to save data"
        )

    return factory


@pytest.fixture
def request_error_public_calling_private(
    request_error_private: Callable[[], ErrorChain],
) -> Callable[[], ErrorChain]:
    def factory() -> ErrorChain:
        return new(request_error_private(), "public err").attr("server", "west-12")

    return factory
