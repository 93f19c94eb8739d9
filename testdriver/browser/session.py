#!/usr/bin/env python3
"""
Browser session lifecycle module.

This module builds session capabilities for a browser name, opens a remote
WebDriver session with the configured timeouts and returns the teardown
function that applies the quit policy.
"""

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.options import ArgOptions


class SessionError(RuntimeError):
    """Raised when a WebDriver session cannot be created or configured."""


OPTIONS_BY_BROWSER = {
    "firefox": webdriver.FirefoxOptions,
    "chrome": webdriver.ChromeOptions,
    "edge": webdriver.EdgeOptions,
    "safari": webdriver.SafariOptions,
    "iexplorer": webdriver.IeOptions,
    "internet explorer": webdriver.IeOptions,
}


def build_capabilities(browser, config):
    """
    Build the capabilities requested for a session.

    Args:
        browser: Browser name (e.g. "firefox")
        config: Configuration instance

    Returns:
        dict: Capabilities keyed by their W3C names
    """
    caps = {
        "browserName": browser,
        "acceptInsecureCerts": True,
    }
    if config.proxy:
        caps["proxy"] = {
            "proxyType": "manual",
            "httpProxy": config.proxy,
            "sslProxy": config.proxy,
        }
    return caps


def make_options(capabilities):
    """
    Convert a capabilities dict into Selenium options for its browser.

    Args:
        capabilities: Capabilities built by build_capabilities

    Returns:
        ArgOptions: Options instance carrying every capability
    """
    browser = capabilities.get("browserName", "")
    options_class = OPTIONS_BY_BROWSER.get(browser.lower())
    options = options_class() if options_class else ArgOptions()

    for name, value in capabilities.items():
        if name == "browserName" and options_class is not None:
            # Options classes carry their own W3C browser name
            continue
        options.set_capability(name, value)
    return options


def new_remote(browser, config, endpoint=None):
    """
    Open a WebDriver session for a browser.

    Args:
        browser: Browser name to request
        config: Configuration instance
        endpoint: URL overriding config.remote_url (e.g. an embedded driver)

    Returns:
        tuple: (driver, quit) where quit(failed) applies the teardown policy

    Raises:
        SessionError: If the session cannot be opened or its timeouts set
    """
    options = make_options(build_capabilities(browser, config))
    remote_url = endpoint or config.remote_url

    try:
        driver = webdriver.Remote(command_executor=remote_url, options=options)
    except Exception as e:
        # Unreachable endpoints surface as urllib3 errors, not WebDriverException
        raise SessionError(f"Can't start session {e} for browser {browser}") from e

    try:
        driver.set_script_timeout(config.async_script)
    except WebDriverException as e:
        _quit_quietly(driver)
        raise SessionError(f"Can't set async script timeout {e}") from e
    try:
        driver.implicitly_wait(config.implicit_wait)
    except WebDriverException as e:
        _quit_quietly(driver)
        raise SessionError(f"Can't set implicit wait timeout {e}") from e

    def quit(failed=False):
        """Quit the session unless the policy keeps the browser open."""
        if should_quit(config, failed):
            _quit_quietly(driver)
        else:
            print(f"Leaving {browser} session {driver.session_id} open for inspection")

    return driver, quit


def should_quit(config, failed):
    """
    Decide whether a session should be quit after its test unit.

    Args:
        config: Configuration instance
        failed: Whether the test unit failed

    Returns:
        bool: True if the session should be quit
    """
    if not config.quit:
        return False
    return not failed or config.quit_on_fail


def _quit_quietly(driver):
    try:
        driver.quit()
    except WebDriverException as e:
        print(f"Error quitting browser session: {e}")
