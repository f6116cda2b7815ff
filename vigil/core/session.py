"""
Vigil Session - entry point for tests.

Wires a WebDriver to the resolver, polling engine, dispatcher and step
recorder, and hands out virtual elements.
"""

from typing import Any, Optional

from vigil.core.config import VigilConfig
from vigil.core.driver_factory import WebDriverType, create_driver
from vigil.core.selectors import SelectorLike
from vigil.layers.action.collection import ElementCollection
from vigil.layers.action.dispatcher import OperationDispatcher
from vigil.layers.action.element import VirtualElement
from vigil.layers.action.polling import PollingEngine
from vigil.layers.action.text_entry import TextEntryStrategy
from vigil.layers.sense.resolver import ElementResolver
from vigil.reporters import StepRecorder


class VigilSession:
    """
    A browsing session with retrying element operations.

    The driver is created lazily from the config unless one is supplied;
    a supplied driver is not quit by close().

    Example:
        >>> with VigilSession(config=VigilConfig(headless=True)) as vigil:
        ...     vigil.open("https://example.com")
        ...     vigil.find("h1").should_have(text("Example Domain"))
    """

    def __init__(
        self,
        driver: Optional[WebDriverType] = None,
        config: Optional[VigilConfig] = None,
        recorder: Optional[StepRecorder] = None,
        text_entry: Optional[TextEntryStrategy] = None,
    ):
        self.config = config or VigilConfig()
        self.recorder = recorder or StepRecorder()
        self._text_entry = text_entry
        self._driver = driver
        self._owns_driver = driver is None
        self._dispatcher: Optional[OperationDispatcher] = None

    @property
    def driver(self) -> WebDriverType:
        """Get the WebDriver instance, creating it if needed."""
        if self._driver is None:
            self._driver = create_driver(
                headless=self.config.headless,
                profile_path=self.config.profile_path,
            )
        return self._driver

    @property
    def dispatcher(self) -> OperationDispatcher:
        if self._dispatcher is None:
            engine = PollingEngine(ElementResolver(self.driver), self.config)
            self._dispatcher = OperationDispatcher(
                self.driver, engine, self.recorder, self._text_entry
            )
        return self._dispatcher

    def open(self, url: str) -> None:
        self.driver.get(url)

    def find(self, selector: SelectorLike, index: int = 0) -> VirtualElement:
        return self.dispatcher.element(selector, index)

    def find_all(self, selector: SelectorLike) -> ElementCollection:
        return self.dispatcher.collection(selector)

    def wrap(self, web_element: Any) -> VirtualElement:
        return self.dispatcher.wrap(web_element)

    def execute_script(self, script: str, *args: Any) -> Any:
        return self.dispatcher.execute_script(script, *args)

    def close(self) -> None:
        if self._driver is not None and self._owns_driver:
            self._driver.quit()
            self._driver = None
            self._dispatcher = None

    def __enter__(self) -> "VigilSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
