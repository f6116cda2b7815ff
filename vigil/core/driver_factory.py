"""
Driver Factory - WebDriver creation for Vigil sessions.

Vigil never owns browser specifics beyond this module: everything else
talks to whatever WebDriver it is handed.
"""

from typing import Optional
import logging

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions

logger = logging.getLogger(__name__)

# Type alias for driver - can be extended to support other browsers
WebDriverType = webdriver.Chrome


def create_driver(
    headless: bool = False,
    profile_path: Optional[str] = None,
    window_size: str = "1366,768",
) -> WebDriverType:
    """
    Create a Chrome WebDriver instance.

    Args:
        headless: Run browser in headless mode
        profile_path: Path to browser profile for session persistence
        window_size: Initial window size as "width,height"

    Returns:
        Chrome WebDriver

    Example:
        >>> driver = create_driver(headless=True)
        >>> driver.get("https://example.com")
    """
    options = build_chrome_options(headless, profile_path, window_size)
    logger.info(f"[DriverFactory] Starting Chrome (headless={headless})")
    return webdriver.Chrome(options=options)


def build_chrome_options(
    headless: bool = False,
    profile_path: Optional[str] = None,
    window_size: str = "1366,768",
) -> ChromeOptions:
    """Chrome options used by create_driver."""
    options = ChromeOptions()

    if headless:
        options.add_argument("--headless=new")

    if profile_path:
        options.add_argument(f"--user-data-dir={profile_path}")

    # Common stability options
    options.add_argument(f"--window-size={window_size}")
    options.add_argument("--disable-extensions")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-gpu")
    options.add_experimental_option("excludeSwitches", ["enable-automation"])

    return options
