"""
Vigil error taxonomy.

InvalidSelector aborts a wait immediately. The UIAssertionError family is
raised only after the polling budget is spent.
"""

from typing import Any, Optional


class VigilError(Exception):
    """Base class for all Vigil failures."""


class InvalidSelector(VigilError):
    """The driver rejected the selector syntax. Retrying cannot help."""

    def __init__(self, selector: str, cause: Optional[BaseException] = None):
        self.selector = selector
        self.cause = cause
        message = f"Invalid selector {{{selector}}}"
        if cause is not None:
            message += f"\n{describe_cause(cause)}"
        super().__init__(message)


class UIAssertionError(VigilError, AssertionError):
    """A wait ran out of time without observing the expected state."""

    def __init__(
        self,
        headline: str,
        selector: str,
        condition: Any,
        timeout_ms: int,
        cause: Optional[BaseException] = None,
        element: Optional[str] = None,
        expected: Optional[Any] = None,
    ):
        self.selector = selector
        self.condition = condition
        self.timeout_ms = timeout_ms
        self.cause = cause
        self.element = element

        lines = [f"{headline} {{{selector}}}"]
        if expected is not None:
            lines.append(f"Expected: {expected}")
        if element is not None:
            lines.append(f"Element: '{element}'")
        lines.append(f"Timeout: {format_timeout(timeout_ms)}")
        if cause is not None:
            lines.append(describe_cause(cause))
        super().__init__("\n".join(lines))


class ElementNotFound(UIAssertionError):
    """No element could be resolved within the timeout."""

    def __init__(self, selector: str, condition: Any, timeout_ms: int,
                 cause: Optional[BaseException] = None):
        super().__init__(
            "Element not found",
            selector,
            condition,
            timeout_ms,
            cause=cause,
            expected=condition,
        )


class ElementShould(UIAssertionError):
    """The element was found but never satisfied the condition."""

    def __init__(self, selector: str, prefix: str, message: Optional[str], condition: Any,
                 element: str, timeout_ms: int, cause: Optional[BaseException] = None):
        super().__init__(
            f"Element should {prefix}{condition}{_because(message)}",
            selector,
            condition,
            timeout_ms,
            cause=cause,
            element=element,
        )


class ElementShouldNot(UIAssertionError):
    """The element was found but the condition never stopped holding."""

    def __init__(self, selector: str, prefix: str, message: Optional[str], condition: Any,
                 element: str, timeout_ms: int, cause: Optional[BaseException] = None):
        super().__init__(
            f"Element should not {prefix}{condition}{_because(message)}",
            selector,
            condition,
            timeout_ms,
            cause=cause,
            element=element,
        )


def _because(message: Optional[str]) -> str:
    return f" because {message}" if message else ""


def format_timeout(timeout_ms: int) -> str:
    """Render a timeout the way failure messages show it, e.g. '4 s.' or '250 ms.'"""
    if timeout_ms < 1000:
        return f"{timeout_ms} ms."
    if timeout_ms % 1000 == 0:
        return f"{timeout_ms // 1000} s."
    return f"{timeout_ms / 1000:.3f} s."


def format_cause(cause: BaseException) -> str:
    """First line of a low-level failure, prefixed with its type."""
    text = str(cause).strip()
    # Selenium appends stacktraces and build info after the first line
    first_line = text.splitlines()[0] if text else ""
    name = type(cause).__name__
    return f"{name}: {first_line}" if first_line else name


def describe_cause(cause: BaseException) -> str:
    return f"Caused by: {format_cause(cause)}"
