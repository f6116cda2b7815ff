"""Human-readable snapshots of live elements for failure messages."""

from typing import TYPE_CHECKING

from selenium.common.exceptions import WebDriverException

from vigil.core.errors import format_cause

if TYPE_CHECKING:
    from selenium.webdriver.remote.webelement import WebElement

# Attributes worth showing when diagnosing a failed wait
DESCRIBED_ATTRIBUTES = (
    "class", "disabled", "href", "id", "name", "onclick", "onchange",
    "placeholder", "readonly", "selected", "src", "style", "type", "value",
)

MAX_TEXT_LENGTH = 100


def describe_element(element: "WebElement") -> str:
    """
    Render an element as `<tag attr="...">text</tag>`.

    Never raises for driver errors: an element that detaches while being
    described is rendered as the failure that occurred.
    """
    try:
        tag = element.tag_name
        parts = [tag]
        for name in DESCRIBED_ATTRIBUTES:
            value = element.get_attribute(name)
            if value is not None and value != "":
                parts.append(f'{name}="{value}"')
        if not element.is_displayed():
            parts.append("displayed:false")
        text = " ".join((element.text or "").split())
        if len(text) > MAX_TEXT_LENGTH:
            text = text[:MAX_TEXT_LENGTH] + "..."
        return f"<{' '.join(parts)}>{text}</{tag}>"
    except WebDriverException as e:
        return format_cause(e)
