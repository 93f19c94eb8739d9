#!/usr/bin/env python3
"""
Element handle module.

This module wraps a Selenium WebElement so that every element-scoped call
fails the current test unit instead of raising.
"""

from selenium.webdriver.common.by import By

from .errors import BROWSER_ERRORS


class Element:
    """
    A DOM element bound to the recorder of the test unit that found it.

    Every method calls the matching WebElement operation and stops the test
    unit through the recorder if Selenium raises.
    """

    def __init__(self, el, recorder):
        """
        Initialize the element handle.

        Args:
            el: Selenium WebElement instance
            recorder: Recorder of the owning test unit
        """
        self.el = el
        self.t = recorder

    def __repr__(self):
        return f"Element({getattr(self.el, 'id', self.el)!r})"

    def text(self) -> str:
        try:
            return self.el.text
        except BROWSER_ERRORS as e:
            self.t.fatalf("Failed to get text of element with error %s", e)

    def click(self) -> None:
        try:
            self.el.click()
        except BROWSER_ERRORS as e:
            self.t.fatalf("Failed to click element with error %s", e)

    def send_keys(self, keys: str) -> None:
        try:
            self.el.send_keys(keys)
        except BROWSER_ERRORS as e:
            self.t.fatalf("Failed to send keys with error %s", e)

    def get_attribute(self, name: str):
        """Return the attribute or property value, None if it is not set."""
        try:
            return self.el.get_attribute(name)
        except BROWSER_ERRORS as e:
            self.t.fatalf("Failed to get attribute %s with error %s", name, e)

    def is_displayed(self) -> bool:
        try:
            return self.el.is_displayed()
        except BROWSER_ERRORS as e:
            self.t.fatalf("Failed to check if element is displayed with error %s", e)

    def element(self, selector: str) -> "Element":
        """
        Find a descendant element by CSS selector.

        Args:
            selector: CSS selector relative to this element

        Returns:
            Element: Handle sharing this element's recorder
        """
        try:
            el = self.el.find_element(By.CSS_SELECTOR, selector)
        except BROWSER_ERRORS as e:
            self.t.fatalf("Failed to find element with selector %s with error %s",
                          selector, e)
        return Element(el, self.t)

    def submit(self) -> None:
        try:
            self.el.submit()
        except BROWSER_ERRORS as e:
            self.t.fatalf("Failed to submit element with error %s", e)

    def clear(self) -> None:
        try:
            self.el.clear()
        except BROWSER_ERRORS as e:
            self.t.fatalf("Failed to clear element with error %s", e)
