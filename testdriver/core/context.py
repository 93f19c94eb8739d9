#!/usr/bin/env python3
"""
Test context module.

This module contains the Context class handed to every browser test. It
wraps a Selenium WebDriver session together with the outcome recorder of the
running test unit, turning every failing browser call into a fatal test
failure.
"""

import json
from urllib.parse import urlsplit

from selenium.webdriver.common.by import By
from selenium.webdriver.remote.command import Command
from selenium.webdriver.remote.webelement import WebElement

from .element import Element
from .errors import BROWSER_ERRORS

# W3C element reference key and the legacy JSON wire protocol key
ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"
LEGACY_ELEMENT_KEY = "ELEMENT"

FRAME_BY_SOURCE_SCRIPT = """
var iframes = document.getElementsByTagName('iframe');
for (var i = 0; i < iframes.length; i++) {
  var src = iframes[i].src;
  src = src.substring(src.indexOf('/', 9));
  if (src.indexOf(arguments[0]) === 0) {
    if (iframes[i].name) {
      return iframes[i].name;
    }
    return "";
  }
}
return "";
"""


def _unwrap(args):
    """Replace Element handles with the WebElements they wrap."""
    return [arg.el if isinstance(arg, Element) else arg for arg in args]


def _to_reference(value):
    """Serialize element arguments as W3C element references for raw commands."""
    if isinstance(value, Element):
        value = value.el
    if isinstance(value, WebElement):
        return {ELEMENT_KEY: value.id}
    if isinstance(value, (list, tuple)):
        return [_to_reference(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_reference(item) for key, item in value.items()}
    return value


def _element_id(reference):
    if ELEMENT_KEY in reference:
        return reference[ELEMENT_KEY]
    return reference[LEGACY_ELEMENT_KEY]


def _load(data):
    if isinstance(data, (bytes, bytearray, str)):
        return json.loads(data)
    return data


class Context:
    """
    Browser test context bound to one WebDriver session.

    The context exposes the recorder methods (log, error, fatal, ...) and a
    fail-fast version of the session operations a test needs. Any operation
    that Selenium rejects stops the test unit with a message naming the
    operation, its argument and the underlying error.
    """

    def __init__(self, driver, recorder):
        """
        Initialize the test context.

        Args:
            driver: Selenium WebDriver session owned by this test unit
            recorder: Recorder of the running test unit
        """
        self.driver = driver
        self.t = recorder
        self.main_window_handle = None

    # Recorder passthroughs

    def fail(self):
        self.t.fail()

    def failed(self):
        return self.t.failed()

    def fail_now(self):
        self.t.fail_now()

    def log(self, *args):
        self.t.log(*args)

    def logf(self, fmt, *args):
        self.t.logf(fmt, *args)

    def error(self, *args):
        self.t.error(*args)

    def errorf(self, fmt, *args):
        self.t.errorf(fmt, *args)

    def fatal(self, *args):
        self.t.fatal(*args)

    def fatalf(self, fmt, *args):
        self.t.fatalf(fmt, *args)

    def skip(self, *args):
        self.t.skip(*args)

    # Session operations

    def element(self, selector: str) -> Element:
        """
        Find an element on the page by CSS selector.

        Args:
            selector: CSS selector

        Returns:
            Element: Handle bound to this test unit's recorder
        """
        try:
            el = self.driver.find_element(By.CSS_SELECTOR, selector)
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to find element with selector %s with error %s",
                        selector, e)
        return Element(el, self.t)

    def get(self, url: str) -> None:
        try:
            self.driver.get(url)
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to get URL %s with error %s", url, e)

    def title(self) -> str:
        try:
            return self.driver.title
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to get page title with error %s", e)

    def current_window_handle(self) -> str:
        try:
            return self.driver.current_window_handle
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to get current window handle with error %s", e)

    def window_handles(self) -> list:
        try:
            return self.driver.window_handles
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to get window handles with error %s", e)

    def page_source(self) -> str:
        try:
            return self.driver.page_source
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to get page source with error %s", e)

    def current_url(self):
        """
        Get the URL of the current page.

        Returns:
            SplitResult: The parsed current URL
        """
        try:
            url = self.driver.current_url
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to get current URL with error %s", e)
        try:
            return urlsplit(url)
        except ValueError as e:
            self.fatalf("Failed to parse current URL %s with error %s", url, e)

    def switch_window(self, window: str) -> None:
        try:
            self.driver.switch_to.window(window)
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to switch to window %s with error %s", window, e)

    def switch_frame(self, frame) -> None:
        """Switch to a frame given by name, index or Element."""
        if isinstance(frame, Element):
            frame = frame.el
        try:
            self.driver.switch_to.frame(frame)
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to switch to frame %s with error %s", frame, e)

    def switch_frame_by_source(self, prefix: str) -> None:
        """
        Switch to the first iframe whose source path starts with prefix.

        The scheme and host of each iframe's src are ignored, so the prefix
        is matched against the path (e.g. "/plugins/like.php").

        Args:
            prefix: Source path prefix of the iframe
        """
        out = self.execute_script(FRAME_BY_SOURCE_SCRIPT, prefix)
        if not isinstance(out, str):
            self.fatalf("Was expecting string name for frame but got %r of type %s",
                        out, type(out).__name__)
        if out == "":
            self.fatalf("Could not find frame with source prefix %s", prefix)
        self.switch_frame(out)

    def execute_script(self, script: str, *args):
        try:
            return self.driver.execute_script(script, *_unwrap(args))
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to execute script with error %s:\n%s", e, script)

    def execute_script_async(self, script: str, *args):
        try:
            return self.driver.execute_async_script(script, *_unwrap(args))
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to execute async script with error %s:\n%s", e, script)

    def execute_script_raw(self, script: str, *args) -> str:
        """
        Execute a script and return the undecoded JSON result.

        Element references in the result are left as JSON objects so they
        can be decoded later with decode_element or decode_elements.
        """
        try:
            return self._execute_raw(Command.W3C_EXECUTE_SCRIPT, script, args)
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to execute script with error %s:\n%s", e, script)

    def execute_script_async_raw(self, script: str, *args) -> str:
        try:
            return self._execute_raw(Command.W3C_EXECUTE_SCRIPT_ASYNC, script, args)
        except BROWSER_ERRORS as e:
            self.fatalf("Failed to execute async script with error %s:\n%s", e, script)

    def _execute_raw(self, command, script, args):
        params = {
            "script": script,
            "args": _to_reference(list(args)),
            "sessionId": self.driver.session_id,
        }
        response = self.driver.command_executor.execute(command, params)
        self.driver.error_handler.check_response(response)
        return json.dumps(response.get("value"))

    def decode_element(self, data) -> Element:
        """
        Decode a serialized element reference.

        Args:
            data: JSON text (str or bytes) or an already parsed reference

        Returns:
            Element: Handle for the referenced element
        """
        try:
            element_id = _element_id(_load(data))
        except (ValueError, KeyError, TypeError) as e:
            self.fatalf("Failed to decode element: %r %s %s", data, type(data).__name__, e)
        return Element(self.driver.create_web_element(element_id), self.t)

    def decode_elements(self, data) -> list:
        try:
            element_ids = [_element_id(reference) for reference in _load(data)]
        except (ValueError, KeyError, TypeError) as e:
            self.fatalf("Failed to decode elements: %r %s %s", data, type(data).__name__, e)
        return [Element(self.driver.create_web_element(element_id), self.t)
                for element_id in element_ids]

    # Popup handling

    def switch_popup_window(self) -> None:
        """
        Switch to the popup window.

        Exactly two windows must be open: the main window, recorded on first
        use, and the popup.
        """
        if self.main_window_handle is None:
            self.main_window_handle = self.current_window_handle()

        handles = self.window_handles()
        if len(handles) != 2:
            self.fatalf("switch_popup_window expects exactly two windows, found: %d",
                        len(handles))
        for handle in handles:
            if handle != self.main_window_handle:
                self.switch_window(handle)
                return
        self.fatal("Failed to find other window.")

    def switch_main_window(self) -> None:
        if self.main_window_handle is None:
            self.fatal("Never left main window.")
        self.switch_window(self.main_window_handle)
