"""
Operation Dispatcher - routes operations on virtual elements.

Holds the collaborators every operation needs (driver, resolver, polling
engine, step recorder, text-entry strategy) and runs operations against
their target.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional, TYPE_CHECKING
import logging

from vigil.core.selectors import Selector, SelectorLike
from vigil.layers.action import scripts
from vigil.layers.action.collection import ElementCollection
from vigil.layers.action.element import VirtualElement
from vigil.layers.action.operations import Operation
from vigil.layers.action.polling import PollingEngine
from vigil.layers.action.text_entry import TextEntryStrategy, strategy_for
from vigil.layers.sense.conditions import exist, visible
from vigil.layers.sense.resolver import ElementResolver, SelectorLocator, WrappedLocator
from vigil.reporters.step_recorder import StepRecorder, StepStatus

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver
    from selenium.webdriver.remote.webelement import WebElement

logger = logging.getLogger(__name__)


class OperationDispatcher:
    """
    Run operations against virtual elements.

    Example:
        >>> dispatcher = OperationDispatcher(driver, engine, StepRecorder())
        >>> login = dispatcher.element("#login")
        >>> login.should_be(visible).click()
    """

    def __init__(
        self,
        driver: "WebDriver",
        engine: PollingEngine,
        recorder: Optional[StepRecorder] = None,
        text_entry: Optional[TextEntryStrategy] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            driver: Selenium WebDriver used for scripts and action chains
            engine: Polling engine; its resolver must use the same driver
            recorder: Step bookkeeping collaborator
            text_entry: How set_value types text (defaults from engine config)
        """
        self.driver = driver
        self.engine = engine
        self.recorder = recorder or StepRecorder()
        self.text_entry = text_entry or strategy_for(engine.config.fast_set_value)

    @property
    def resolver(self) -> ElementResolver:
        return self.engine.resolver

    def dispatch(self, target: VirtualElement, operation: Operation) -> Any:
        logger.debug(f"[OperationDispatcher] {type(operation).__name__} on {target.locator.describe()}")
        return operation.perform(target, self)

    # Virtual element construction

    def element(
        self,
        selector: SelectorLike,
        index: int = 0,
        parent: Optional[VirtualElement] = None,
    ) -> VirtualElement:
        """Describe an element without resolving it."""
        locator = SelectorLocator(
            Selector.of(selector),
            index,
            parent.locator if parent is not None else None,
        )
        return VirtualElement(locator, self)

    def collection(self, selector: SelectorLike,
                   parent: Optional[VirtualElement] = None) -> ElementCollection:
        locator = SelectorLocator(
            Selector.of(selector),
            0,
            parent.locator if parent is not None else None,
        )
        return ElementCollection(locator, self)

    def wrap(self, web_element: "WebElement") -> VirtualElement:
        """Virtual element over an element the caller already holds."""
        return VirtualElement(WrappedLocator(web_element), self)

    # Helpers shared by operations

    def require(self, target: VirtualElement) -> "WebElement":
        """Wait until the element exists and return it."""
        return self.engine.wait_until(target.locator, exist)

    def wait_for_element(self, target: VirtualElement) -> "WebElement":
        """Wait until the element is visible and return it."""
        return self.engine.wait_until(target.locator, visible, prefix="be ")

    def execute_script(self, script: str, *args: Any) -> Any:
        return self.driver.execute_script(script, *args)

    def fire_event(self, element: "WebElement", event: str) -> None:
        self.execute_script(scripts.FIRE_EVENT, element, event)

    def fire_change_event(self, element: "WebElement") -> None:
        self.fire_event(element, "change")

    @contextmanager
    def step(self, target: VirtualElement, description: str) -> Iterator[None]:
        """
        Bracket a block with begin/commit on the recorder.

        The commit is always balanced; on failure the original exception
        propagates unchanged after the step is marked FAILED.
        """
        self.recorder.begin_step(target.locator.describe(), description)
        try:
            yield
        except BaseException:
            self.recorder.commit_step(StepStatus.FAILED)
            raise
        self.recorder.commit_step(StepStatus.PASSED)
