import logging
from typing import List
from unittest.mock import Mock

import httpx
import pytest

from feed_relay.errors import FetchError
from feed_relay.utils import mask_token
from feed_relay.utils.exception_logging import (
    format_exception_message,
    log_exception_with_details,
)


class BrokenStrException(Exception):
    """An exception that breaks when __str__ is called."""

    def __str__(self):
        raise RuntimeError("Cannot convert to string!")

    def __repr__(self):
        return "BrokenStrException(cannot convert to string)"


class MockExceptionGroup(Exception):
    """Stand-in for an exception group raised by a task group."""

    def __init__(self, message: str, exceptions: List[Exception]):
        super().__init__(message)
        self.exceptions = exceptions


def _fetch_error() -> FetchError:
    cause = httpx.ConnectError("Connection refused")
    try:
        raise FetchError("unable to execute request", cause) from cause
    except FetchError as e:
        return e


class TestLogExceptionWithDetails:
    def setup_method(self):
        self.logger = Mock(spec=logging.Logger)

    def test_normal_exception_logging(self):
        exception = ValueError("Normal test error")

        log_exception_with_details(self.logger, "[TEST]", exception)

        self.logger.log.assert_called_once_with(
            logging.ERROR,
            "[TEST] Exception: ValueError: Normal test error",
            exc_info=exception,
        )

    def test_custom_level(self):
        exception = ValueError("Warning level error")

        log_exception_with_details(self.logger, "[TEST]", exception, logging.WARNING)

        assert self.logger.log.call_args.args[0] == logging.WARNING

    def test_cause_chain_is_included(self):
        exception = _fetch_error()

        log_exception_with_details(self.logger, "[Feed]", exception)

        message = self.logger.log.call_args.args[1]
        assert message.startswith("[Feed] Exception: FetchError: unable to execute request")
        assert "caused by ConnectError: Connection refused" in message

    def test_exception_group_logs_each_sub_exception(self):
        subs = [ValueError("one"), RuntimeError("two")]

        log_exception_with_details(self.logger, "[TEST]", MockExceptionGroup("many", subs))

        assert self.logger.log.call_count == 3
        assert self.logger.log.call_args_list[1].args == (
            logging.ERROR,
            "[TEST] Sub-exception 1: ValueError: one",
        )
        assert self.logger.log.call_args_list[2].kwargs["exc_info"] is subs[1]

    def test_broken_str_exception(self):
        log_exception_with_details(self.logger, "[TEST]", BrokenStrException())

        assert self.logger.log.call_count == 1
        assert "BrokenStrException(cannot convert to string)" in self.logger.log.call_args.args[1]

    @pytest.mark.parametrize("value", [None, "Not an exception"])
    def test_odd_inputs_do_not_raise(self, value):
        log_exception_with_details(self.logger, "[TEST]", value)  # type: ignore

        assert self.logger.log.call_count == 1

    def test_failing_logger_does_not_raise(self):
        self.logger.log.side_effect = RuntimeError("handler down")

        log_exception_with_details(self.logger, "[TEST]", ValueError("x"))


class TestFormatExceptionMessage:
    def test_plain_exception(self):
        assert format_exception_message(ValueError("boom")) == "boom"

    def test_none(self):
        assert format_exception_message(None) == "None"

    def test_cause_chain(self):
        assert format_exception_message(_fetch_error()) == (
            "unable to execute request: Connection refused"
            " | caused by ConnectError: Connection refused"
        )

    def test_exception_group(self):
        group = MockExceptionGroup("many", [ValueError("one"), KeyError("k")])

        assert format_exception_message(group) == (
            "many (Sub-exceptions: ValueError: one; KeyError: 'k')"
        )


def test_mask_token():
    assert mask_token("user alice_example logged in", "alice_example") == "user alic**** logged in"
    assert mask_token("nothing to hide", None) == "nothing to hide"
