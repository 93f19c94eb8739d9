"""Tests for the Context session wrapper."""

import json
from unittest.mock import MagicMock, PropertyMock

import pytest
from selenium.common.exceptions import (NoSuchElementException,
                                        NoSuchFrameException,
                                        WebDriverException)
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.command import Command
from selenium.webdriver.remote.webelement import WebElement
from urllib3.exceptions import MaxRetryError, ProtocolError

from testdriver.core.context import ELEMENT_KEY, FRAME_BY_SOURCE_SCRIPT, Context
from testdriver.core.element import Element


class TestRecorderPassthrough:
    """Tests for the recorder methods exposed on Context."""

    def test_errorf_and_failed(self, context, recorder) -> None:
        context.errorf("value %s", "x")

        assert context.failed()
        assert recorder.output == ["value x"]

    def test_fatal_raises(self, context) -> None:
        with pytest.raises(pytest.fail.Exception):
            context.fatal("stop")


class TestElementLookup:
    """Tests for Context.element."""

    def test_returns_element_sharing_recorder(self, context, driver, recorder) -> None:
        web_element = MagicMock(name="web_element")
        driver.find_element.return_value = web_element

        el = context.element("#login")

        driver.find_element.assert_called_once_with(By.CSS_SELECTOR, "#login")
        assert isinstance(el, Element)
        assert el.el is web_element
        assert el.t is recorder

    def test_missing_element_fails_with_selector_and_error(self, context, driver, recorder) -> None:
        driver.find_element.side_effect = NoSuchElementException("no such element")

        with pytest.raises(pytest.fail.Exception):
            context.element("#missing")

        assert recorder.failed()
        message = recorder.output[-1]
        assert "#missing" in message
        assert "no such element" in message

    def test_missing_element_halts_test_function(self, context, driver) -> None:
        driver.find_element.side_effect = NoSuchElementException("no such element")
        after = []

        def test(c):
            c.element("#missing")
            after.append("ran")

        with pytest.raises(pytest.fail.Exception, match="#missing"):
            test(context)

        assert after == []


class TestNavigation:
    """Tests for page level operations."""

    def test_get(self, context, driver) -> None:
        context.get("http://app.test/")
        driver.get.assert_called_once_with("http://app.test/")

    def test_get_failure(self, context, driver, recorder) -> None:
        driver.get.side_effect = WebDriverException("unreachable")

        with pytest.raises(pytest.fail.Exception):
            context.get("http://app.test/")

        assert "Failed to get URL http://app.test/ with error" in recorder.output[-1]
        assert "unreachable" in recorder.output[-1]

    def test_get_transport_failure(self, context, driver, recorder) -> None:
        driver.get.side_effect = MaxRetryError(None, "/session/session-1/url",
                                               reason=ConnectionRefusedError(111, "refused"))

        with pytest.raises(pytest.fail.Exception):
            context.get("http://app.test/")

        assert recorder.failed()
        assert "Failed to get URL http://app.test/ with error" in recorder.output[-1]
        assert "Max retries exceeded" in recorder.output[-1]

    def test_title(self, context, driver) -> None:
        type(driver).title = PropertyMock(return_value="Home")
        assert context.title() == "Home"

    def test_title_failure(self, context, driver, recorder) -> None:
        type(driver).title = PropertyMock(side_effect=WebDriverException("gone"))

        with pytest.raises(pytest.fail.Exception):
            context.title()

        assert recorder.output[-1].startswith("Failed to get page title with error")

    def test_page_source(self, context, driver) -> None:
        type(driver).page_source = PropertyMock(return_value="<html></html>")
        assert context.page_source() == "<html></html>"

    def test_page_source_failure(self, context, driver, recorder) -> None:
        type(driver).page_source = PropertyMock(side_effect=WebDriverException("gone"))

        with pytest.raises(pytest.fail.Exception):
            context.page_source()

        assert "Failed to get page source" in recorder.output[-1]

    def test_current_url_is_parsed(self, context, driver) -> None:
        type(driver).current_url = PropertyMock(return_value="https://app.test/a/b?q=1")

        url = context.current_url()

        assert url.netloc == "app.test"
        assert url.path == "/a/b"
        assert url.query == "q=1"

    def test_current_url_parse_failure(self, context, driver, recorder) -> None:
        type(driver).current_url = PropertyMock(return_value="http://[::1/")

        with pytest.raises(pytest.fail.Exception):
            context.current_url()

        assert "Failed to parse current URL http://[::1/" in recorder.output[-1]

    def test_window_handles(self, context, driver) -> None:
        type(driver).window_handles = PropertyMock(return_value=["w1", "w2"])
        assert context.window_handles() == ["w1", "w2"]

    def test_current_window_handle_failure(self, context, driver, recorder) -> None:
        type(driver).current_window_handle = PropertyMock(side_effect=WebDriverException("x"))

        with pytest.raises(pytest.fail.Exception):
            context.current_window_handle()

        assert "Failed to get current window handle" in recorder.output[-1]


class TestSwitching:
    """Tests for window and frame switching."""

    def test_switch_window_failure(self, context, driver, recorder) -> None:
        driver.switch_to.window.side_effect = WebDriverException("no such window")

        with pytest.raises(pytest.fail.Exception):
            context.switch_window("w9")

        assert "Failed to switch to window w9" in recorder.output[-1]

    def test_switch_frame(self, context, driver) -> None:
        context.switch_frame("editor")
        driver.switch_to.frame.assert_called_once_with("editor")

    def test_switch_frame_failure(self, context, driver, recorder) -> None:
        driver.switch_to.frame.side_effect = NoSuchFrameException("no frame")

        with pytest.raises(pytest.fail.Exception):
            context.switch_frame("editor")

        assert "Failed to switch to frame editor" in recorder.output[-1]

    def test_switch_frame_by_source(self, context, driver) -> None:
        driver.execute_script.return_value = "like_frame"

        context.switch_frame_by_source("/plugins/like.php")

        driver.execute_script.assert_called_once_with(FRAME_BY_SOURCE_SCRIPT, "/plugins/like.php")
        driver.switch_to.frame.assert_called_once_with("like_frame")

    def test_switch_frame_by_source_not_found(self, context, driver, recorder) -> None:
        driver.execute_script.return_value = ""

        with pytest.raises(pytest.fail.Exception):
            context.switch_frame_by_source("/plugins/like.php")

        assert recorder.output[-1] == "Could not find frame with source prefix /plugins/like.php"
        driver.switch_to.frame.assert_not_called()

    def test_switch_frame_by_source_non_string(self, context, driver, recorder) -> None:
        driver.execute_script.return_value = 42

        with pytest.raises(pytest.fail.Exception):
            context.switch_frame_by_source("/x")

        assert "Was expecting string name for frame but got 42 of type int" == recorder.output[-1]


class TestPopupWindows:
    """Tests for popup window switching."""

    def test_switch_popup_with_two_windows(self, context, driver) -> None:
        type(driver).current_window_handle = PropertyMock(return_value="main")
        type(driver).window_handles = PropertyMock(return_value=["main", "popup"])

        context.switch_popup_window()

        assert context.main_window_handle == "main"
        driver.switch_to.window.assert_called_once_with("popup")

    @pytest.mark.parametrize("handles", [["main"], ["main", "a", "b"], ["main", "a", "b", "c"]])
    def test_switch_popup_requires_exactly_two_windows(self, context, driver, recorder, handles) -> None:
        type(driver).current_window_handle = PropertyMock(return_value="main")
        type(driver).window_handles = PropertyMock(return_value=handles)

        with pytest.raises(pytest.fail.Exception):
            context.switch_popup_window()

        assert recorder.output[-1] == (
            f"switch_popup_window expects exactly two windows, found: {len(handles)}"
        )
        driver.switch_to.window.assert_not_called()

    def test_switch_popup_without_other_window(self, context, driver, recorder) -> None:
        type(driver).current_window_handle = PropertyMock(return_value="main")
        type(driver).window_handles = PropertyMock(return_value=["main", "main"])

        with pytest.raises(pytest.fail.Exception):
            context.switch_popup_window()

        assert recorder.output[-1] == "Failed to find other window."

    def test_main_window_is_recorded_once(self, context, driver) -> None:
        current = PropertyMock(return_value="main")
        type(driver).current_window_handle = current
        type(driver).window_handles = PropertyMock(return_value=["main", "popup"])

        context.switch_popup_window()
        context.switch_main_window()
        context.switch_popup_window()

        assert current.call_count == 1

    def test_switch_main_before_popup_fails(self, context, driver, recorder) -> None:
        with pytest.raises(pytest.fail.Exception):
            context.switch_main_window()

        assert recorder.output[-1] == "Never left main window."
        driver.switch_to.window.assert_not_called()

    def test_switch_main_after_popup(self, context, driver) -> None:
        type(driver).current_window_handle = PropertyMock(return_value="main")
        type(driver).window_handles = PropertyMock(return_value=["main", "popup"])

        context.switch_popup_window()
        context.switch_main_window()

        assert driver.switch_to.window.call_args_list[-1].args == ("main",)


class TestScripts:
    """Tests for script execution and element decoding."""

    def test_execute_script_unwraps_elements(self, context, driver, recorder) -> None:
        web_element = MagicMock(name="web_element")
        driver.execute_script.return_value = 3

        result = context.execute_script("return 3", Element(web_element, recorder), "x")

        assert result == 3
        driver.execute_script.assert_called_once_with("return 3", web_element, "x")

    def test_execute_script_failure_includes_script(self, context, driver, recorder) -> None:
        driver.execute_script.side_effect = WebDriverException("js error")

        with pytest.raises(pytest.fail.Exception):
            context.execute_script("return nope()")

        assert recorder.output[-1].startswith("Failed to execute script with error")
        assert recorder.output[-1].endswith(":\nreturn nope()")

    def test_execute_script_async(self, context, driver) -> None:
        driver.execute_async_script.return_value = "done"

        assert context.execute_script_async("arguments[0]('done')") == "done"

    def test_execute_script_async_failure(self, context, driver, recorder) -> None:
        driver.execute_async_script.side_effect = WebDriverException("timeout")

        with pytest.raises(pytest.fail.Exception):
            context.execute_script_async("x")

        assert recorder.output[-1].startswith("Failed to execute async script with error")

    def test_execute_script_raw_returns_json(self, context, driver) -> None:
        driver.command_executor.execute.return_value = {"value": {ELEMENT_KEY: "e1"}}
        arg = WebElement(driver, "e0")

        raw = context.execute_script_raw("return arguments[0]", arg)

        assert json.loads(raw) == {ELEMENT_KEY: "e1"}
        command, params = driver.command_executor.execute.call_args.args
        assert command == Command.W3C_EXECUTE_SCRIPT
        assert params["args"] == [{ELEMENT_KEY: "e0"}]
        assert params["sessionId"] == "session-1"
        driver.error_handler.check_response.assert_called_once()

    def test_execute_script_async_raw_failure(self, context, driver, recorder) -> None:
        driver.error_handler.check_response.side_effect = WebDriverException("bad")

        with pytest.raises(pytest.fail.Exception):
            context.execute_script_async_raw("x")

        assert driver.command_executor.execute.call_args.args[0] == Command.W3C_EXECUTE_SCRIPT_ASYNC
        assert recorder.output[-1].startswith("Failed to execute async script with error")

    def test_execute_script_raw_dropped_connection(self, context, driver, recorder) -> None:
        driver.command_executor.execute.side_effect = ProtocolError(
            "Connection aborted.", ConnectionResetError(104, "reset"))

        with pytest.raises(pytest.fail.Exception):
            context.execute_script_raw("return 1")

        assert recorder.failed()
        assert "Connection aborted." in recorder.output[-1]
        assert recorder.output[-1].endswith("return 1")

    def test_decode_element(self, context, driver, recorder) -> None:
        created = MagicMock(name="created")
        driver.create_web_element.return_value = created

        el = context.decode_element(json.dumps({ELEMENT_KEY: "e1"}))

        driver.create_web_element.assert_called_once_with("e1")
        assert el.el is created
        assert el.t is recorder

    def test_decode_element_legacy_key(self, context, driver) -> None:
        context.decode_element(b'{"ELEMENT": "e2"}')
        driver.create_web_element.assert_called_once_with("e2")

    def test_decode_element_failure(self, context, recorder) -> None:
        with pytest.raises(pytest.fail.Exception):
            context.decode_element('{"value": 1}')

        assert recorder.output[-1].startswith("Failed to decode element:")
        assert "str" in recorder.output[-1]

    def test_decode_elements(self, context, driver) -> None:
        driver.create_web_element.side_effect = lambda element_id: element_id

        elements = context.decode_elements(json.dumps([{ELEMENT_KEY: "a"}, {ELEMENT_KEY: "b"}]))

        assert [el.el for el in elements] == ["a", "b"]

    def test_decode_elements_failure(self, context, recorder) -> None:
        with pytest.raises(pytest.fail.Exception):
            context.decode_elements("not json")

        assert recorder.output[-1].startswith("Failed to decode elements:")
