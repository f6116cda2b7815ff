"""
Text entry strategies.

How characters reach an input is pluggable: native keystrokes are the
faithful default, value injection is the fast path for slow pages.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from vigil.layers.action import scripts

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver
    from selenium.webdriver.remote.webelement import WebElement


class TextEntryStrategy(ABC):
    """Puts a non-empty string into an input element."""

    @abstractmethod
    def enter(self, driver: "WebDriver", element: "WebElement", text: str) -> None:
        pass


class NativeKeysStrategy(TextEntryStrategy):
    """Clear the field and type through the driver's keyboard simulation."""

    def enter(self, driver: "WebDriver", element: "WebElement", text: str) -> None:
        element.clear()
        element.send_keys(text)


class FastSetValueStrategy(TextEntryStrategy):
    """
    Assign the value directly via JavaScript.

    When the page has jQuery, key events for the last character are
    replayed so keyup/keypress handlers still run.
    """

    def enter(self, driver: "WebDriver", element: "WebElement", text: str) -> None:
        if driver.execute_script(scripts.JQUERY_AVAILABLE):
            driver.execute_script(scripts.JQUERY_SET_VALUE, element, text, ord(text[-1]))
        else:
            driver.execute_script(scripts.SET_VALUE, element, text)


def strategy_for(fast_set_value: bool) -> TextEntryStrategy:
    return FastSetValueStrategy() if fast_set_value else NativeKeysStrategy()
