"""
Selector helpers.

A Selector is an immutable (by, value) pair using Selenium's By
strategies. Plain strings are treated as CSS selectors.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from selenium.webdriver.common.by import By


_LABELS = {
    By.XPATH: "xpath",
    By.ID: "id",
    By.NAME: "name",
    By.LINK_TEXT: "linkText",
    By.PARTIAL_LINK_TEXT: "partialLinkText",
    By.TAG_NAME: "tagName",
    By.CLASS_NAME: "className",
}


@dataclass(frozen=True)
class Selector:
    """How to find zero, one or many elements."""
    by: str
    value: str

    def describe(self) -> str:
        """Short human-readable form used in failure messages."""
        if self.by == By.CSS_SELECTOR:
            return self.value
        return f"By.{_LABELS.get(self.by, self.by)}: {self.value}"

    def __str__(self) -> str:
        return self.describe()

    @classmethod
    def of(cls, selector: "SelectorLike") -> "Selector":
        """Coerce a CSS string, a (by, value) tuple or a Selector."""
        if isinstance(selector, Selector):
            return selector
        if isinstance(selector, str):
            return cls(By.CSS_SELECTOR, selector)
        if isinstance(selector, tuple) and len(selector) == 2:
            return cls(selector[0], selector[1])
        raise TypeError(f"Unsupported selector: {selector!r}")


SelectorLike = Union[Selector, str, Tuple[str, str]]


def by_css(css: str) -> Selector:
    return Selector(By.CSS_SELECTOR, css)


def by_xpath(xpath: str) -> Selector:
    return Selector(By.XPATH, xpath)


def by_id(element_id: str) -> Selector:
    return Selector(By.ID, element_id)


def by_name(name: str) -> Selector:
    return Selector(By.NAME, name)


def by_text(text: str) -> Selector:
    """Element whose own normalized text equals `text`."""
    return Selector(
        By.XPATH,
        f".//*/text()[normalize-space(.) = {xpath_literal(text)}]/parent::*",
    )


def by_value(value: str) -> Selector:
    return by_attribute("value", value)


def by_attribute(name: str, value: str) -> Selector:
    return Selector(By.XPATH, f".//*[@{name} = {xpath_literal(value)}]")


def xpath_literal(text: str) -> str:
    """
    Quote a string for use inside an XPath expression.

    XPath 1.0 has no escape sequences, so strings containing both quote
    kinds are assembled with concat().
    """
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = text.split("'")
    pieces = []
    for i, part in enumerate(parts):
        if part:
            pieces.append(f"'{part}'")
        if i < len(parts) - 1:
            pieces.append('"\'"')
    return f"concat({', '.join(pieces)})"
