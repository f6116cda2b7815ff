"""
Virtual Element - a lazy, re-resolvable handle.

A VirtualElement is a locator plus the dispatcher that runs operations on
it. It never holds a live element; every call re-resolves. Attribute
names it does not define are forwarded to the live Selenium element.
"""

from typing import Any, Optional, TYPE_CHECKING

from vigil.layers.action import operations as ops

if TYPE_CHECKING:
    from pathlib import Path
    from selenium.webdriver.remote.webelement import WebElement
    from vigil.core.selectors import SelectorLike
    from vigil.layers.action.collection import ElementCollection
    from vigil.layers.action.dispatcher import OperationDispatcher
    from vigil.layers.sense.conditions import Condition
    from vigil.layers.sense.resolver import Locator


class VirtualElement:
    """
    Describe an element once, use it many times.

    Example:
        >>> search = session.find("#search")
        >>> search.set_value("selenium").press_enter()
        >>> session.find(".results li", 0).should_have(text("selenium"))
    """

    def __init__(self, locator: "Locator", dispatcher: "OperationDispatcher"):
        self._locator = locator
        self._dispatcher = dispatcher

    @property
    def locator(self) -> "Locator":
        return self._locator

    def _run(self, operation: ops.Operation) -> Any:
        return self._dispatcher.dispatch(self, operation)

    # Assertions

    def should(self, *conditions: "Condition", message: Optional[str] = None) -> "VirtualElement":
        return self._run(ops.Should(conditions, "", message))

    def should_have(self, *conditions: "Condition", message: Optional[str] = None) -> "VirtualElement":
        return self._run(ops.Should(conditions, "have ", message))

    def should_be(self, *conditions: "Condition", message: Optional[str] = None) -> "VirtualElement":
        return self._run(ops.Should(conditions, "be ", message))

    def should_not(self, *conditions: "Condition", message: Optional[str] = None) -> "VirtualElement":
        return self._run(ops.Should(conditions, "", message, negate=True))

    def should_not_have(self, *conditions: "Condition", message: Optional[str] = None) -> "VirtualElement":
        return self._run(ops.Should(conditions, "have ", message, negate=True))

    def should_not_be(self, *conditions: "Condition", message: Optional[str] = None) -> "VirtualElement":
        return self._run(ops.Should(conditions, "be ", message, negate=True))

    def wait_until(self, condition: "Condition", timeout_ms: int,
                   message: Optional[str] = None) -> "VirtualElement":
        return self._run(ops.Should((condition,), "", message, timeout_ms=timeout_ms))

    def wait_while(self, condition: "Condition", timeout_ms: int,
                   message: Optional[str] = None) -> "VirtualElement":
        return self._run(ops.Should((condition,), "", message, negate=True, timeout_ms=timeout_ms))

    # Read queries

    def text(self) -> str:
        return self._run(ops.Text())

    def inner_text(self) -> Optional[str]:
        return self._run(ops.InnerText())

    def inner_html(self) -> Optional[str]:
        return self._run(ops.InnerHtml())

    def attr(self, name: str) -> Optional[str]:
        return self._run(ops.Attr(name))

    def name(self) -> Optional[str]:
        return self._run(ops.Attr("name"))

    def data(self, key: str) -> Optional[str]:
        return self._run(ops.Attr(f"data-{key}"))

    def val(self, text: Optional[str] = None) -> Any:
        """Read the value, or set it when text is given."""
        if text is None:
            return self._run(ops.Attr("value"))
        return self.set_value(text)

    def exists(self) -> bool:
        return self._run(ops.Exists())

    def is_displayed(self) -> bool:
        return self._run(ops.IsDisplayed())

    def matches(self, condition: "Condition") -> bool:
        return self._run(ops.Matches(condition))

    has = matches

    def is_image(self) -> bool:
        return self._run(ops.IsImage())

    def get_selected_option(self) -> Optional["VirtualElement"]:
        return self._run(ops.SelectedOption())

    def get_selected_value(self) -> Optional[str]:
        return self._run(ops.SelectedValue())

    def get_selected_text(self) -> Optional[str]:
        return self._run(ops.SelectedText())

    def to_web_element(self) -> "WebElement":
        return self._run(ops.ToWebElement())

    def describe(self) -> str:
        return self._run(ops.Describe())

    # Interactions

    def click(self) -> None:
        self._run(ops.Click())

    def context_click(self) -> None:
        self._run(ops.ContextClick())

    def hover(self) -> None:
        self._run(ops.Hover())

    def set_value(self, text: Optional[str]) -> "VirtualElement":
        return self._run(ops.SetValue(text))

    def append(self, text: str) -> "VirtualElement":
        return self._run(ops.Append(text))

    def press_enter(self) -> "VirtualElement":
        return self._run(ops.PRESS_ENTER)

    def press_tab(self) -> "VirtualElement":
        return self._run(ops.PRESS_TAB)

    def drag_and_drop_to(self, target_selector: "SelectorLike") -> None:
        self._run(ops.DragAndDropTo(target_selector))

    def select_option(self, text: str) -> None:
        self._run(ops.SelectOptionByText(text))

    def select_option_by_value(self, value: str) -> None:
        self._run(ops.SelectOptionByValue(value))

    def set_selected(self, selected: bool) -> "VirtualElement":
        return self._run(ops.SetSelected(selected))

    def follow_link(self) -> None:
        self._run(ops.FollowLink())

    def scroll_to(self) -> "VirtualElement":
        return self._run(ops.ScrollTo())

    def upload_file(self, *paths: str) -> "Path":
        """Upload local files; returns the resolved path of the first one."""
        return self._run(ops.UploadFiles(tuple(str(p) for p in paths)))

    def upload_from_package(self, package: str, *names: str) -> "Path":
        """Upload data files shipped inside an importable package."""
        return self._run(ops.UploadFiles(ops.package_resource_paths(package, names)))

    # Navigation

    def find(self, selector: "SelectorLike", index: int = 0) -> "VirtualElement":
        return self._run(ops.Find(selector, index))

    def find_all(self, selector: "SelectorLike") -> "ElementCollection":
        return self._run(ops.FindAll(selector))

    def parent(self) -> "VirtualElement":
        return self._run(ops.Parent())

    def closest(self, tag_or_class: str) -> "VirtualElement":
        return self._run(ops.Closest(tag_or_class))

    # Everything else goes to the live element

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._run(ops.PassThrough(name))

    def __repr__(self) -> str:
        return f"VirtualElement({self._locator.describe()})"

    def __str__(self) -> str:
        return self.describe()
