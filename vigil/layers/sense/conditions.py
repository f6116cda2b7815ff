"""
Conditions - reusable predicates over resolved elements.

A condition knows how to evaluate itself against a live element and what
it means when no element exists at all (applies_when_absent).
"""

from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING
import re

if TYPE_CHECKING:
    from selenium.webdriver.remote.webelement import WebElement


@dataclass(frozen=True)
class Condition:
    """
    A named predicate with an absence policy.

    Attributes:
        name: Description used in step names and failure messages
        predicate: Evaluated against a resolved element; may raise driver errors
        applies_when_absent: Truth value when nothing can be resolved
    """
    name: str
    predicate: Callable[["WebElement"], bool]
    applies_when_absent: bool = False

    def apply(self, element: "WebElement") -> bool:
        return bool(self.predicate(element))

    def negate(self) -> "Condition":
        return not_(self)

    def __invert__(self) -> "Condition":
        return not_(self)

    def __str__(self) -> str:
        return self.name


def not_(condition: Condition) -> Condition:
    """Logical negation, including the absence policy."""
    return Condition(
        name=f"not {condition.name}",
        predicate=lambda element: not condition.apply(element),
        applies_when_absent=not condition.applies_when_absent,
    )


def _reduce_spaces(text: Optional[str]) -> str:
    return " ".join((text or "").split())


def _is_present(element: "WebElement") -> bool:
    # Touching the element proves it is still attached
    element.is_displayed()
    return True


def _attribute(element: "WebElement", name: str) -> Optional[str]:
    return element.get_attribute(name)


exist = Condition("exist", _is_present)
present = Condition("present", _is_present)
visible = Condition("visible", lambda e: e.is_displayed())
appear = Condition("appear", lambda e: e.is_displayed())
hidden = Condition("hidden", lambda e: not e.is_displayed(), applies_when_absent=True)
disappear = Condition("disappear", lambda e: not e.is_displayed(), applies_when_absent=True)
enabled = Condition("enabled", lambda e: e.is_enabled())
disabled = Condition("disabled", lambda e: not e.is_enabled())
selected = Condition("selected", lambda e: e.is_selected())
checked = Condition("checked", lambda e: e.is_selected())
readonly = Condition("readonly", lambda e: _attribute(e, "readonly") is not None)
empty = Condition(
    "empty",
    lambda e: not (_attribute(e, "value") or "") and not _reduce_spaces(e.text),
)


def text(expected: str) -> Condition:
    """Visible text contains `expected`, ignoring case and whitespace runs."""
    needle = _reduce_spaces(expected).lower()
    return Condition(
        f"text '{expected}'",
        lambda e: needle in _reduce_spaces(e.text).lower(),
    )


def exact_text(expected: str) -> Condition:
    """Visible text equals `expected`, ignoring case and whitespace runs."""
    wanted = _reduce_spaces(expected).lower()
    return Condition(
        f"exact text '{expected}'",
        lambda e: _reduce_spaces(e.text).lower() == wanted,
    )


def exact_text_case_sensitive(expected: str) -> Condition:
    wanted = _reduce_spaces(expected)
    return Condition(
        f"exact text case sensitive '{expected}'",
        lambda e: _reduce_spaces(e.text) == wanted,
    )


def match_text(pattern: str) -> Condition:
    regex = re.compile(pattern, re.DOTALL)
    return Condition(
        f"match text '{pattern}'",
        lambda e: regex.search(e.text or "") is not None,
    )


def attribute(name: str, expected: Optional[str] = None) -> Condition:
    """Attribute is present, or equals `expected` when given."""
    if expected is None:
        return Condition(f"attribute {name}", lambda e: _attribute(e, name) is not None)
    return Condition(
        f"attribute {name}={expected}",
        lambda e: _attribute(e, name) == expected,
    )


def value(expected: str) -> Condition:
    """Value attribute contains `expected`."""
    return Condition(
        f"value '{expected}'",
        lambda e: expected in (_attribute(e, "value") or ""),
    )


def name(expected: str) -> Condition:
    return attribute("name", expected)


def type_(expected: str) -> Condition:
    return attribute("type", expected)


def id_(expected: str) -> Condition:
    return attribute("id", expected)


def css_class(class_name: str) -> Condition:
    return Condition(
        f"css class '{class_name}'",
        lambda e: class_name in (_attribute(e, "class") or "").split(),
    )


def css_value(property_name: str, expected: str) -> Condition:
    return Condition(
        f"css value {property_name}={expected}",
        lambda e: e.value_of_css_property(property_name) == expected,
    )


def and_(name: str, *conditions: Condition) -> Condition:
    """All conditions hold. Absent only satisfies if every part allows it."""
    return Condition(
        name,
        lambda e: all(c.apply(e) for c in conditions),
        applies_when_absent=all(c.applies_when_absent for c in conditions),
    )


def or_(name: str, *conditions: Condition) -> Condition:
    return Condition(
        name,
        lambda e: any(c.apply(e) for c in conditions),
        applies_when_absent=any(c.applies_when_absent for c in conditions),
    )
