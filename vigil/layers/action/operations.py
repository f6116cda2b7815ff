"""
Operation catalogue.

Every call on a virtual element becomes one of these variants. Families
share a base class: assertions wait through the polling engine,
interactions are bracketed by a reported step, read queries and
navigation return values, and PassThrough forwards anything else to the
live Selenium element.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Optional, Tuple, TYPE_CHECKING
import logging

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.support.select import Select

from vigil.core.errors import format_cause
from vigil.core.selectors import Selector, SelectorLike, by_text, by_value, by_xpath
from vigil.layers.action import scripts
from vigil.layers.sense.conditions import Condition, exist, visible
from vigil.layers.sense.describe import describe_element
from vigil.layers.sense.resolver import (
    RECOVERABLE_ERRORS,
    Fatal,
    Found,
    raise_invalid_selector,
)

if TYPE_CHECKING:
    from selenium.webdriver.remote.webelement import WebElement
    from vigil.layers.action.dispatcher import OperationDispatcher
    from vigil.layers.action.element import VirtualElement

logger = logging.getLogger(__name__)


class Operation(ABC):
    """A single request against a virtual element."""

    @abstractmethod
    def perform(self, target: "VirtualElement", dispatcher: "OperationDispatcher") -> Any:
        pass


# Assertions

@dataclass(frozen=True)
class Should(Operation):
    """
    Wait for each condition in order, or for each to stop holding when negated.

    Each condition is a separate reported step. The first failure stops
    the chain and propagates unchanged.
    """
    conditions: Tuple[Condition, ...]
    prefix: str = ""
    message: Optional[str] = None
    negate: bool = False
    timeout_ms: Optional[int] = None

    def perform(self, target, dispatcher):
        engine = dispatcher.engine
        for condition in self.conditions:
            with dispatcher.step(target, self.describe(condition)):
                if self.negate:
                    engine.wait_while(target.locator, condition, self.timeout_ms,
                                      self.prefix, self.message)
                else:
                    engine.wait_until(target.locator, condition, self.timeout_ms,
                                      self.prefix, self.message)
        return target

    def describe(self, condition: Condition) -> str:
        verb = "should not" if self.negate else "should"
        text = f"{verb} {self.prefix}{condition}"
        if self.message:
            text += f" because {self.message}"
        return text


# Read queries

class ReadQuery(Operation):
    """Resolves and reads once. Not reported as a step."""


@dataclass(frozen=True)
class Text(ReadQuery):
    def perform(self, target, dispatcher):
        return dispatcher.require(target).text


@dataclass(frozen=True)
class InnerText(ReadQuery):
    def perform(self, target, dispatcher):
        return dispatcher.require(target).get_attribute("textContent")


@dataclass(frozen=True)
class InnerHtml(ReadQuery):
    def perform(self, target, dispatcher):
        return dispatcher.require(target).get_attribute("innerHTML")


@dataclass(frozen=True)
class Attr(ReadQuery):
    name: str

    def perform(self, target, dispatcher):
        return dispatcher.require(target).get_attribute(self.name)


@dataclass(frozen=True)
class Exists(ReadQuery):
    """False for an absent element; a malformed selector still raises."""

    def perform(self, target, dispatcher):
        resolution = dispatcher.resolver.resolve(target.locator)
        if isinstance(resolution, Fatal):
            raise_invalid_selector(target.locator, resolution.cause)
        return isinstance(resolution, Found)


@dataclass(frozen=True)
class IsDisplayed(ReadQuery):
    def perform(self, target, dispatcher):
        resolution = dispatcher.resolver.resolve(target.locator)
        if isinstance(resolution, Fatal):
            raise_invalid_selector(target.locator, resolution.cause)
        if not isinstance(resolution, Found):
            return False
        try:
            return resolution.element.is_displayed()
        except RECOVERABLE_ERRORS:
            return False


@dataclass(frozen=True)
class Matches(ReadQuery):
    condition: Condition

    def perform(self, target, dispatcher):
        return dispatcher.engine.matches(target.locator, self.condition)


@dataclass(frozen=True)
class IsImage(ReadQuery):
    def perform(self, target, dispatcher):
        img = dispatcher.require(target)
        if img.tag_name.lower() != "img":
            raise ValueError("is_image() is only applicable for img elements")
        return bool(dispatcher.execute_script(scripts.IS_IMAGE_LOADED, img))


@dataclass(frozen=True)
class SelectedOption(ReadQuery):
    """Currently selected <option> of a <select>, or None."""

    def perform(self, target, dispatcher):
        option = _first_selected_option(dispatcher.require(target))
        return dispatcher.wrap(option) if option is not None else None


@dataclass(frozen=True)
class SelectedValue(ReadQuery):
    def perform(self, target, dispatcher):
        option = _first_selected_option(dispatcher.require(target))
        return option.get_attribute("value") if option is not None else None


@dataclass(frozen=True)
class SelectedText(ReadQuery):
    def perform(self, target, dispatcher):
        option = _first_selected_option(dispatcher.require(target))
        return option.text if option is not None else None


@dataclass(frozen=True)
class ToWebElement(ReadQuery):
    """The live Selenium element, resolved with a single attempt."""

    def perform(self, target, dispatcher):
        return dispatcher.engine.wait_until(target.locator, exist, timeout_ms=0)


@dataclass(frozen=True)
class Describe(ReadQuery):
    """Live snapshot of the element, or the reason it cannot be resolved."""

    def perform(self, target, dispatcher):
        resolution = dispatcher.resolver.resolve(target.locator)
        if isinstance(resolution, Found):
            return describe_element(resolution.element)
        return format_cause(resolution.cause)


def _first_selected_option(select_element: "WebElement") -> Optional["WebElement"]:
    try:
        return Select(select_element).first_selected_option
    except NoSuchElementException:
        return None


# Interactions

class Interaction(Operation):
    """
    A side effect bracketed by a reported step.

    Subclasses implement interact(); failures are committed as FAILED
    and re-raised as the original exception.
    """

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def interact(self, target: "VirtualElement", dispatcher: "OperationDispatcher") -> Any:
        pass

    def perform(self, target, dispatcher):
        with dispatcher.step(target, self.description):
            return self.interact(target, dispatcher)


@dataclass(frozen=True)
class Click(Interaction):
    description = "click"

    def interact(self, target, dispatcher):
        dispatcher.wait_for_element(target).click()


@dataclass(frozen=True)
class ContextClick(Interaction):
    description = "context click"

    def interact(self, target, dispatcher):
        element = dispatcher.wait_for_element(target)
        ActionChains(dispatcher.driver).context_click(element).perform()


@dataclass(frozen=True)
class Hover(Interaction):
    description = "hover"

    def interact(self, target, dispatcher):
        element = dispatcher.wait_for_element(target)
        ActionChains(dispatcher.driver).move_to_element(element).perform()


@dataclass(frozen=True)
class SetValue(Interaction):
    """
    Replace the field's value.

    <select> elements select the option with this value; None or an
    empty string clears the field instead of typing nothing.
    """
    text: Optional[str]

    @property
    def description(self):
        return f"set value '{self.text or ''}'"

    def interact(self, target, dispatcher):
        element = dispatcher.wait_for_element(target)
        if element.tag_name.lower() == "select":
            _select_by_value(target, dispatcher, element, self.text or "")
        elif not self.text:
            element.clear()
        else:
            dispatcher.text_entry.enter(dispatcher.driver, element, self.text)
            dispatcher.fire_change_event(element)
        return target


@dataclass(frozen=True)
class Append(Interaction):
    text: str

    @property
    def description(self):
        return f"append '{self.text}'"

    def interact(self, target, dispatcher):
        element = dispatcher.wait_for_element(target)
        element.send_keys(self.text)
        dispatcher.fire_change_event(element)
        return target


@dataclass(frozen=True)
class PressKey(Interaction):
    key: str
    label: str

    @property
    def description(self):
        return f"press {self.label}"

    def interact(self, target, dispatcher):
        dispatcher.wait_for_element(target).send_keys(self.key)
        return target


PRESS_ENTER = PressKey(Keys.ENTER, "enter")
PRESS_TAB = PressKey(Keys.TAB, "tab")


@dataclass(frozen=True)
class DragAndDropTo(Interaction):
    target_selector: SelectorLike

    @property
    def description(self):
        return f"drag and drop to {Selector.of(self.target_selector)}"

    def interact(self, target, dispatcher):
        destination = dispatcher.element(self.target_selector).should_be(visible).to_web_element()
        source = dispatcher.wait_for_element(target)
        ActionChains(dispatcher.driver).drag_and_drop(source, destination).perform()


@dataclass(frozen=True)
class SelectOptionByText(Interaction):
    text: str

    @property
    def description(self):
        return f"select option '{self.text}'"

    def interact(self, target, dispatcher):
        element = dispatcher.wait_for_element(target)
        target.find(by_text(self.text)).should_be(visible)
        Select(element).select_by_visible_text(self.text)


@dataclass(frozen=True)
class SelectOptionByValue(Interaction):
    value: str

    @property
    def description(self):
        return f"select option by value '{self.value}'"

    def interact(self, target, dispatcher):
        element = dispatcher.wait_for_element(target)
        _select_by_value(target, dispatcher, element, self.value)


def _select_by_value(target, dispatcher, select_element, value: str) -> None:
    target.find(by_value(value)).should_be(visible)
    Select(select_element).select_by_value(value)


@dataclass(frozen=True)
class SetSelected(Interaction):
    selected: bool

    @property
    def description(self):
        return f"set selected {str(self.selected).lower()}"

    def interact(self, target, dispatcher):
        element = dispatcher.wait_for_element(target)
        if element.is_selected() != self.selected:
            element.click()
        return target


@dataclass(frozen=True)
class FollowLink(Interaction):
    """Click a link; navigate to its href if the click did not."""
    description = "follow link"

    def interact(self, target, dispatcher):
        link = dispatcher.wait_for_element(target)
        href = link.get_attribute("href")
        url_before = dispatcher.driver.current_url
        link.click()
        if href and dispatcher.driver.current_url == url_before and href != url_before:
            dispatcher.driver.get(href)


@dataclass(frozen=True)
class ScrollTo(Interaction):
    description = "scroll to"

    def interact(self, target, dispatcher):
        location = dispatcher.wait_for_element(target).location
        dispatcher.execute_script(scripts.SCROLL_TO, location["x"], location["y"])
        return target


# File upload

@dataclass(frozen=True)
class UploadFiles(Interaction):
    """
    Send local files to a file input.

    All files are checked before the page is touched. Each file after the
    first goes to a fresh input cloned into the enclosing form, since one
    input accepts one path per interaction.
    """
    paths: Tuple[str, ...]

    @property
    def description(self):
        return f"upload file {', '.join(Path(p).name for p in self.paths)}"

    def interact(self, target, dispatcher):
        if not self.paths:
            raise ValueError("No files to upload")
        files = [Path(p).resolve() for p in self.paths]
        for file in files:
            if not file.is_file():
                raise ValueError(f"File not found: {file}")

        input_field = dispatcher.require(target)
        _check_input(input_field)
        form = dispatcher.require(target.closest("form")) if len(files) > 1 else None

        _send_file(input_field, files[0])
        if form is not None:
            for file in files[1:]:
                clone = dispatcher.execute_script(scripts.CLONE_FILE_INPUT, form, input_field)
                _send_file(clone, file)

        return files[0]


def _send_file(input_field: "WebElement", file: Path) -> None:
    _check_input(input_field)
    input_field.send_keys(str(file))


def _check_input(input_field: "WebElement") -> None:
    if input_field.tag_name.lower() != "input":
        raise ValueError(
            f"Cannot upload file because {describe_element(input_field)} is not an INPUT"
        )


def package_resource_paths(package: str, names: Tuple[str, ...]) -> Tuple[str, ...]:
    """Filesystem paths of data files shipped inside an importable package."""
    paths = []
    for name in names:
        resource = resources.files(package).joinpath(name)
        if not resource.is_file():
            raise ValueError(f"File not found in package {package}: {name}")
        paths.append(str(resource))
    return tuple(paths)


# Navigation

@dataclass(frozen=True)
class Find(Operation):
    selector: SelectorLike
    index: int = 0

    def perform(self, target, dispatcher):
        return dispatcher.element(self.selector, self.index, parent=target)


@dataclass(frozen=True)
class FindAll(Operation):
    selector: SelectorLike

    def perform(self, target, dispatcher):
        return dispatcher.collection(self.selector, parent=target)


@dataclass(frozen=True)
class Parent(Operation):
    def perform(self, target, dispatcher):
        return dispatcher.element(by_xpath(".."), parent=target)


@dataclass(frozen=True)
class Closest(Operation):
    """Nearest ancestor matching a tag name or a `.class`."""
    tag_or_class: str

    def perform(self, target, dispatcher):
        if self.tag_or_class.startswith("."):
            class_name = self.tag_or_class[1:]
            xpath = (
                "ancestor::*[contains(concat(' ', normalize-space(@class), ' '), "
                f"' {class_name} ')][1]"
            )
        else:
            xpath = f"ancestor::{self.tag_or_class}[1]"
        return dispatcher.element(by_xpath(xpath), parent=target)


# Everything else

@dataclass(frozen=True)
class PassThrough(Operation):
    """
    Forward an attribute lookup to the live element.

    The element is resolved once per call. Whatever the element raises
    reaches the caller as-is.
    """
    name: str

    def perform(self, target, dispatcher):
        logger.debug(f"[PassThrough] {self.name} on {target.locator.describe()}")
        return getattr(dispatcher.require(target), self.name)
