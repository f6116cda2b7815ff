import pytest
from selenium.common.exceptions import NoSuchElementException

from vigil.core.errors import (
    ElementNotFound,
    ElementShould,
    ElementShouldNot,
    InvalidSelector,
    UIAssertionError,
    format_cause,
    format_timeout,
)


@pytest.mark.parametrize("timeout_ms, expected", [
    (0, "0 ms."),
    (250, "250 ms."),
    (4000, "4 s."),
    (1500, "1.500 s."),
])
def test_format_timeout(timeout_ms, expected):
    """Test timeout formatting."""
    assert format_timeout(timeout_ms) == expected


def test_format_cause_keeps_first_line():
    """Test that causes are reduced to their first line."""
    cause = ValueError("first line\nstacktrace follows")
    assert format_cause(cause) == "ValueError: first line"
    assert format_cause(IndexError()) == "IndexError"


def test_not_found_message():
    """Test the ElementNotFound message layout."""
    error = ElementNotFound("#login", "visible", 4000, NoSuchElementException("no such element"))
    lines = str(error).splitlines()
    assert lines[0] == "Element not found {#login}"
    assert lines[1] == "Expected: visible"
    assert lines[2] == "Timeout: 4 s."
    assert lines[3].startswith("Caused by: NoSuchElementException:")


def test_should_message():
    """Test the ElementShould message layout."""
    error = ElementShould("h1", "have ", "it was renamed", "text 'Bye'", "<h1>Hi</h1>", 250)
    assert str(error) == (
        "Element should have text 'Bye' because it was renamed {h1}\n"
        "Element: '<h1>Hi</h1>'\n"
        "Timeout: 250 ms."
    )


def test_should_not_message():
    """Test the ElementShouldNot headline."""
    error = ElementShouldNot("#spinner", "be ", None, "visible", "<div></div>", 4000)
    assert str(error).startswith("Element should not be visible {#spinner}")


def test_assertion_errors_are_assertion_errors():
    """Test that timeout failures are AssertionErrors and selector errors are not."""
    assert issubclass(UIAssertionError, AssertionError)
    assert isinstance(ElementNotFound("a", "exist", 0), AssertionError)
    assert not isinstance(InvalidSelector("a["), AssertionError)


def test_invalid_selector_message():
    """Test the InvalidSelector message."""
    error = InvalidSelector("div[", ValueError("bad"))
    assert str(error) == "Invalid selector {div[}\nCaused by: ValueError: bad"
    assert error.selector == "div["
