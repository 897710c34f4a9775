"""Unit tests for message content validation."""

import pytest

from board_api.core.content_validation import validate_message_content
from board_api.core.errors import ValidationAppError


def test_trims_whitespace_before_storing() -> None:
    assert validate_message_content("  ok  ") == "ok"
    assert validate_message_content("\n\thello world \n") == "hello world"


@pytest.mark.parametrize("raw", ["", "   ", "\n\t  \n", "\ufeff", " \u00a0\u3000\u2028 "])
def test_empty_after_trim_is_rejected(raw: str) -> None:
    with pytest.raises(ValidationAppError) as exc_info:
        validate_message_content(raw)

    assert exc_info.value.code == "message_empty"
    assert exc_info.value.message == "Message cannot be empty"


def test_exactly_max_length_is_accepted() -> None:
    content = "a" * 2000
    assert validate_message_content(content) == content


def test_one_over_max_length_is_rejected() -> None:
    with pytest.raises(ValidationAppError) as exc_info:
        validate_message_content("a" * 2001)

    assert exc_info.value.code == "message_too_long"
    assert exc_info.value.message == "Message too long (max 2000 characters)"
    assert exc_info.value.details == {"max_value": 2000, "actual_value": 2001}


def test_length_is_measured_after_trimming() -> None:
    padded = "   " + "a" * 2000 + "   "
    assert validate_message_content(padded) == "a" * 2000


def test_custom_limit() -> None:
    assert validate_message_content("abc", max_chars=3) == "abc"
    with pytest.raises(ValidationAppError):
        validate_message_content("abcd", max_chars=3)


def test_byte_order_mark_is_trimmed() -> None:
    assert validate_message_content("\ufeffhello\ufeff") == "hello"


@pytest.mark.parametrize("separator", ["\x1c", "\x1d", "\x1e", "\x1f", "\x85"])
def test_control_separators_are_kept(separator: str) -> None:
    assert validate_message_content(f"{separator}hi{separator}") == f"{separator}hi{separator}"
    assert validate_message_content(separator) == separator
