import pytest
from selenium.common.exceptions import (
    InvalidSelectorException,
    StaleElementReferenceException,
)
from selenium.webdriver.common.by import By

from vigil.core.config import VigilConfig
from vigil.layers.action.dispatcher import OperationDispatcher
from vigil.layers.action.polling import PollingEngine
from vigil.layers.sense.resolver import ElementResolver
from vigil.reporters import StepRecorder


class FakeClock:
    """Millisecond clock that only moves when something sleeps."""

    def __init__(self):
        self.now_ms = 0
        self.sleeps = []

    def now(self):
        return self.now_ms / 1000

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now_ms += round(seconds * 1000)


class FakeElement:
    """Stand-in for a Selenium WebElement."""

    def __init__(self, tag="div", text="", attributes=None, displayed=True,
                 enabled=True, selected=False, location=None):
        self._tag = tag
        self._text = text
        self.attributes = dict(attributes or {})
        self._displayed = displayed
        self.enabled = enabled
        self.selected = selected
        self.location_value = location or {"x": 0, "y": 0}
        self.children = {}
        self.stale = False
        self.clicks = 0
        self.keys = []
        self.cleared = 0

    def _check(self):
        if self.stale:
            raise StaleElementReferenceException("stale element reference: element is not attached")

    def add_child(self, by, value, *elements):
        self.children.setdefault((by, value), []).extend(elements)
        return elements[0] if len(elements) == 1 else elements

    @property
    def tag_name(self):
        self._check()
        return self._tag

    @property
    def text(self):
        self._check()
        return self._text

    @property
    def location(self):
        self._check()
        return self.location_value

    def is_displayed(self):
        self._check()
        return self._displayed() if callable(self._displayed) else self._displayed

    def is_enabled(self):
        self._check()
        return self.enabled

    def is_selected(self):
        self._check()
        return self.selected

    def get_attribute(self, name):
        self._check()
        return self.attributes.get(name)

    def click(self):
        self._check()
        self.clicks += 1

    def send_keys(self, *values):
        self._check()
        self.keys.append("".join(values))

    def clear(self):
        self._check()
        self.cleared += 1
        self.attributes["value"] = ""

    def find_elements(self, by, value):
        self._check()
        return list(self.children.get((by, value), []))


class FakeDriver:
    """Stand-in for a Selenium WebDriver."""

    def __init__(self):
        self.elements = {}
        self.invalid = set()
        self.lookups = []
        self.scripts = []
        self.script_handler = None
        self.current_url = "about:blank"
        self.visited = []

    def add(self, selector, *elements, by=By.CSS_SELECTOR):
        self.elements.setdefault((by, selector), []).extend(elements)
        return elements[0] if len(elements) == 1 else elements

    def find_elements(self, by, value):
        self.lookups.append((by, value))
        if value in self.invalid:
            raise InvalidSelectorException(f"invalid selector: {value}")
        found = self.elements.get((by, value), [])
        return list(found() if callable(found) else found)

    def execute_script(self, script, *args):
        self.scripts.append((script, args))
        if self.script_handler is not None:
            return self.script_handler(script, *args)
        return None

    def get(self, url):
        self.visited.append(url)
        self.current_url = url


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def make_element():
    return FakeElement


@pytest.fixture
def config():
    return VigilConfig(timeout_ms=1000, polling_interval_ms=100)


@pytest.fixture
def recorder():
    return StepRecorder()


@pytest.fixture
def engine(driver, clock, config):
    return PollingEngine(ElementResolver(driver), config, clock=clock.now, sleep=clock.sleep)


@pytest.fixture
def dispatcher(driver, engine, recorder):
    return OperationDispatcher(driver, engine, recorder)
