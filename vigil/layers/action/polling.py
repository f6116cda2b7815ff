"""
Condition Polling Engine.

Repeatedly resolves a locator and evaluates a condition until the
desired truth value is observed or the timeout budget is spent. Each
polling call owns its own clock and last-error state.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union, TYPE_CHECKING
import logging
import time

from vigil.core.config import VigilConfig
from vigil.core.errors import (
    ElementNotFound,
    ElementShould,
    ElementShouldNot,
    InvalidSelector,
)
from vigil.layers.sense.conditions import Condition, not_
from vigil.layers.sense.describe import describe_element
from vigil.layers.sense.resolver import (
    RECOVERABLE_ERRORS,
    Absent,
    ElementResolver,
    Fatal,
    Found,
    Locator,
    is_live,
)

if TYPE_CHECKING:
    from selenium.webdriver.remote.webelement import WebElement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Satisfied:
    """The desired truth value was observed. element is None when satisfied by absence."""
    element: Optional["WebElement"]
    attempts: int


@dataclass(frozen=True)
class TimedOut:
    """The budget ran out. element is the last resolved element, if any."""
    element: Optional["WebElement"]
    last_error: Optional[BaseException]
    attempts: int


@dataclass(frozen=True)
class Aborted:
    """The selector was rejected by the driver."""
    cause: BaseException
    attempts: int


WaitOutcome = Union[Satisfied, TimedOut, Aborted]


class PollingEngine:
    """
    Wait for conditions with asymmetric termination rules.

    wait_until succeeds when the condition holds on a resolved element, or
    when nothing resolves and the condition applies to absence.
    wait_while succeeds when the condition stops holding, or when nothing
    resolves and the condition does not apply to absence.

    Example:
        >>> engine = PollingEngine(ElementResolver(driver), VigilConfig())
        >>> element = engine.wait_until(locator, visible)
    """

    def __init__(
        self,
        resolver: ElementResolver,
        config: Optional[VigilConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the polling engine.

        Args:
            resolver: Single-attempt element resolver
            config: Default timeout and polling interval
            clock: Monotonic clock in seconds
            sleep: Sleep function taking seconds
        """
        self.resolver = resolver
        self.config = config or VigilConfig()
        self._clock = clock
        self._sleep = sleep

    def poll(self, locator: Locator, condition: Condition, timeout_ms: int,
             desired: bool = True) -> WaitOutcome:
        """
        Run the polling loop and return its outcome without raising.

        Args:
            locator: What to resolve on every attempt
            condition: Predicate to evaluate
            timeout_ms: Budget in milliseconds; 0 means a single attempt
            desired: Truth value that ends the wait
        """
        if timeout_ms < 0:
            raise ValueError(f"timeout_ms must be non-negative, got {timeout_ms}")

        interval = self.config.polling_interval_ms / 1000
        started = self._clock()
        attempts = 0
        element: Optional["WebElement"] = None
        last_error: Optional[BaseException] = None

        while True:
            attempts += 1
            last_error = None
            resolution = self.resolver.resolve(locator)
            logger.debug(
                f"[PollingEngine] Attempt {attempts} on {locator.describe()}: "
                f"{type(resolution).__name__}"
            )

            if isinstance(resolution, Fatal):
                return Aborted(resolution.cause, attempts)

            if isinstance(resolution, Found):
                element = resolution.element
                try:
                    if condition.apply(element) == desired:
                        return Satisfied(element, attempts)
                except RECOVERABLE_ERRORS as e:
                    last_error = e
            else:
                element = None
                last_error = resolution.cause
                if condition.applies_when_absent == desired:
                    return Satisfied(None, attempts)

            if timeout_ms == 0:
                break
            self._sleep(interval)
            if (self._clock() - started) * 1000 > timeout_ms:
                break

        logger.debug(
            f"[PollingEngine] Gave up on {locator.describe()} after {attempts} attempts: {last_error}"
        )
        return TimedOut(element, last_error, attempts)

    def wait_until(
        self,
        locator: Locator,
        condition: Condition,
        timeout_ms: Optional[int] = None,
        prefix: str = "",
        message: Optional[str] = None,
    ) -> Optional["WebElement"]:
        """
        Wait until the condition holds.

        Returns:
            The element the condition held on, or None if absence satisfied it.

        Raises:
            InvalidSelector: immediately, if the selector is malformed
            ElementNotFound: if no element could be resolved in time
            ElementShould: if an element was resolved but never complied
        """
        timeout_ms = self.config.timeout_ms if timeout_ms is None else timeout_ms
        outcome = self.poll(locator, condition, timeout_ms, desired=True)

        if isinstance(outcome, Satisfied):
            return outcome.element
        if isinstance(outcome, Aborted):
            raise InvalidSelector(locator.describe(), outcome.cause) from outcome.cause
        if not is_live(outcome.element):
            raise ElementNotFound(locator.describe(), condition, timeout_ms, outcome.last_error)
        raise ElementShould(
            locator.describe(),
            prefix,
            message,
            condition,
            describe_element(outcome.element),
            timeout_ms,
            outcome.last_error,
        )

    def wait_while(
        self,
        locator: Locator,
        condition: Condition,
        timeout_ms: Optional[int] = None,
        prefix: str = "",
        message: Optional[str] = None,
    ) -> None:
        """
        Wait while the condition holds, returning once it stops holding.

        Raises:
            InvalidSelector: immediately, if the selector is malformed
            ElementNotFound: with the negated condition, if nothing resolved
            ElementShouldNot: if the condition never stopped holding
        """
        timeout_ms = self.config.timeout_ms if timeout_ms is None else timeout_ms
        outcome = self.poll(locator, condition, timeout_ms, desired=False)

        if isinstance(outcome, Satisfied):
            return
        if isinstance(outcome, Aborted):
            raise InvalidSelector(locator.describe(), outcome.cause) from outcome.cause
        if not is_live(outcome.element):
            raise ElementNotFound(locator.describe(), not_(condition), timeout_ms, outcome.last_error)
        raise ElementShouldNot(
            locator.describe(),
            prefix,
            message,
            condition,
            describe_element(outcome.element),
            timeout_ms,
            outcome.last_error,
        )

    def matches(self, locator: Locator, condition: Condition) -> bool:
        """Check the condition once, without waiting."""
        resolution = self.resolver.resolve(locator)
        if isinstance(resolution, Fatal):
            raise InvalidSelector(locator.describe(), resolution.cause) from resolution.cause
        if isinstance(resolution, Absent):
            return condition.applies_when_absent
        try:
            return condition.apply(resolution.element)
        except RECOVERABLE_ERRORS:
            return condition.applies_when_absent
