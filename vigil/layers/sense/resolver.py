"""
Element Handle Resolver - point-in-time element lookup.

Turns a locator into exactly one of Found, Absent or Fatal. Driver
failures are classified here, once, so the polling layer can use plain
control flow instead of exception-driven retries.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union, TYPE_CHECKING
import logging

from selenium.common.exceptions import (
    InvalidSelectorException,
    NoSuchElementException,
    StaleElementReferenceException,
    WebDriverException,
)

from vigil.core.errors import InvalidSelector
from vigil.core.selectors import Selector

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver
    from selenium.webdriver.remote.webelement import WebElement

logger = logging.getLogger(__name__)

# Failures that mean "not there (yet)" rather than "something is broken"
RECOVERABLE_ERRORS = (
    NoSuchElementException,
    StaleElementReferenceException,
    IndexError,
)


@dataclass(frozen=True)
class Found:
    element: "WebElement"


@dataclass(frozen=True)
class Absent:
    cause: BaseException


@dataclass(frozen=True)
class Fatal:
    cause: BaseException


Resolution = Union[Found, Absent, Fatal]


@dataclass(frozen=True)
class SelectorLocator:
    """Selector plus ordinal index, optionally scoped to a parent locator."""
    selector: Selector
    index: int = 0
    parent: Optional["Locator"] = None

    def describe(self) -> str:
        text = self.selector.describe()
        if self.index:
            text += f"[{self.index}]"
        if self.parent is not None:
            text = f"{self.parent.describe()}/{text}"
        return text


@dataclass(frozen=True)
class WrappedLocator:
    """An element the caller already holds. Staleness shows up on use."""
    element: "WebElement"

    def describe(self) -> str:
        try:
            return f"<{self.element.tag_name}>"
        except RECOVERABLE_ERRORS:
            return "<stale element>"


Locator = Union[SelectorLocator, WrappedLocator]


class ElementResolver:
    """
    Resolve locators against a live driver.

    Never retries. Each call is a single attempt whose outcome is
    returned as a value; only failures outside the recognized set
    propagate as exceptions.

    Example:
        >>> resolver = ElementResolver(driver)
        >>> resolution = resolver.resolve(SelectorLocator(Selector.of("#login")))
        >>> if isinstance(resolution, Found):
        ...     resolution.element.click()
    """

    def __init__(self, driver: "WebDriver"):
        self.driver = driver

    def resolve(self, locator: Locator) -> Resolution:
        if isinstance(locator, WrappedLocator):
            return Found(locator.element)

        context: Any = self.driver
        if locator.parent is not None:
            parent = self.resolve(locator.parent)
            if not isinstance(parent, Found):
                return parent
            context = parent.element

        selector = locator.selector
        try:
            matches = context.find_elements(selector.by, selector.value)
        except InvalidSelectorException as e:
            logger.debug(f"[ElementResolver] Invalid selector {locator.describe()}: {e}")
            return Fatal(e)
        except RECOVERABLE_ERRORS as e:
            return Absent(e)

        if not matches:
            return Absent(NoSuchElementException(
                f"Unable to locate element: {locator.describe()}"
            ))
        if locator.index >= len(matches):
            return Absent(IndexError(
                f"Index {locator.index} out of range, {len(matches)} element(s) match {selector.describe()}"
            ))
        return Found(matches[locator.index])

    def count(self, locator: SelectorLocator) -> int:
        """Number of elements currently matching the locator's selector."""
        context: Any = self.driver
        if locator.parent is not None:
            parent = self.resolve(locator.parent)
            if isinstance(parent, Fatal):
                raise_invalid_selector(locator.parent, parent.cause)
            if isinstance(parent, Absent):
                return 0
            context = parent.element
        try:
            return len(context.find_elements(locator.selector.by, locator.selector.value))
        except InvalidSelectorException as e:
            raise_invalid_selector(locator, e)
        except RECOVERABLE_ERRORS:
            return 0


def raise_invalid_selector(locator: Locator, cause: BaseException):
    raise InvalidSelector(locator.describe(), cause) from cause


def is_live(element: Optional["WebElement"]) -> bool:
    """
    Best-effort liveness probe.

    Reading a property off a detached element raises a driver error;
    any such error counts as "does not really exist".
    """
    if element is None:
        return False
    try:
        element.is_displayed()
        return True
    except WebDriverException:
        return False
