from functools import partial

import pytest

from qa_automation.common import BrowserEngine, ConfigLoader
from qa_automation.ui_testing.framework import BrowserManager, SessionLifecycle, SessionSetupError
from qa_automation.ui_testing.framework.browser_manager import CHROMIUM_ARGS


class FakeHandle:
    def __init__(self, name, events, fail_on_close=False):
        self.name = name
        self.events = events
        self.fail_on_close = fail_on_close

    def close(self):
        self.events.append(f"close {self.name}")
        if self.fail_on_close:
            raise RuntimeError(f"{self.name} close failed")


class FakePage(FakeHandle):
    def __init__(self, events, **kwargs):
        super().__init__("page", events, **kwargs)
        self.default_timeout = None
        self.navigation_timeout = None

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout


class FakeContext(FakeHandle):
    def __init__(self, events, options, failures):
        super().__init__("context", events, fail_on_close="context" in failures)
        self.options = options
        self.failures = failures

    def new_page(self):
        return FakePage(self.events, fail_on_close="page" in self.failures)


class FakeBrowser(FakeHandle):
    def __init__(self, events, launch_options, failures):
        super().__init__("browser", events, fail_on_close="browser" in failures)
        self.launch_options = launch_options
        self.failures = failures
        self.context = None

    def new_context(self, **options):
        if "new_context" in self.failures:
            raise RuntimeError("context refused")
        self.context = FakeContext(self.events, options, self.failures)
        return self.context


class FakeLauncher:
    def __init__(self, engine, playwright):
        self.engine = engine
        self.playwright = playwright

    def launch(self, **options):
        self.playwright.launched.append(self.engine)
        return FakeBrowser(self.playwright.events, options, self.playwright.failures)


class FakePlaywright:
    def __init__(self, failures=()):
        self.events = []
        self.launched = []
        self.failures = set(failures)
        self.chromium = FakeLauncher("chromium", self)
        self.firefox = FakeLauncher("firefox", self)
        self.webkit = FakeLauncher("webkit", self)

    def stop(self):
        self.events.append("stop playwright")
        if "playwright" in self.failures:
            raise RuntimeError("stop failed")


def make_manager(engine=BrowserEngine.CHROMIUM, failures=(), **kwargs):
    fake = FakePlaywright(failures)
    return BrowserManager(engine=engine, playwright_factory=lambda: fake, **kwargs), fake


@pytest.mark.parametrize("engine", list(BrowserEngine))
def test_start_launches_configured_engine(engine):
    manager, fake = make_manager(engine)

    page = manager.start()

    assert fake.launched == [engine.value]
    assert manager.page is page
    assert manager.context.options["locale"] == "en-US"
    assert manager.context.options["viewport"] == {"width": 1920, "height": 1080}


def test_launch_options():
    manager, fake = make_manager(BrowserEngine.CHROMIUM, headless=False)
    manager.start()

    options = manager.browser.launch_options
    assert options["headless"] is False
    assert options["slow_mo"] == 100
    assert options["args"] == CHROMIUM_ARGS


def test_non_chromium_engines_get_no_chromium_args():
    manager, fake = make_manager(BrowserEngine.FIREFOX)
    manager.start()

    assert "args" not in manager.browser.launch_options


def test_unrecognized_configured_engine_launches_chromium(tmp_path, monkeypatch):
    monkeypatch.delenv("BROWSER_TYPE", raising=False)
    config_path = tmp_path / "config.properties"
    config_path.write_text("browser.type=internet-explorer\n", encoding="utf-8")

    manager, fake = make_manager(ConfigLoader(config_path=config_path).browser_engine)
    manager.start()

    assert fake.launched == ["chromium"]


def test_close_releases_in_reverse_order():
    manager, fake = make_manager()
    manager.start()

    errors = manager.close()

    assert errors == []
    assert fake.events == ["close page", "close context", "close browser", "stop playwright"]
    assert manager.page is None
    assert manager.browser is None
    assert manager.playwright is None


def test_close_continues_after_failed_release():
    manager, fake = make_manager(failures={"page", "browser"})
    manager.start()

    errors = manager.close()

    assert [label for label, _ in errors] == ["Page", "Browser"]
    assert fake.events == ["close page", "close context", "close browser", "stop playwright"]
    assert manager.context is None


def test_close_after_partial_start_skips_missing_handles():
    manager, fake = make_manager(failures={"new_context"})

    with pytest.raises(RuntimeError):
        with manager:
            pass

    assert fake.events == ["close browser", "stop playwright"]
    assert manager.close() == []


class StubConfig:
    browser_engine = BrowserEngine.WEBKIT
    headless = True
    wait_timeout = 5000


def test_lifecycle_setup_and_teardown():
    fake = FakePlaywright()
    lifecycle = SessionLifecycle(
        config=StubConfig(),
        manager_factory=partial(BrowserManager, playwright_factory=lambda: fake),
    )

    with lifecycle as session:
        assert fake.launched == ["webkit"]
        assert session.page.default_timeout == 5000
        assert session.page.navigation_timeout == 30000

    assert fake.events == ["close page", "close context", "close browser", "stop playwright"]
    with pytest.raises(RuntimeError):
        lifecycle.page


def test_lifecycle_setup_failure_names_step_and_tears_down():
    fake = FakePlaywright(failures={"new_context"})
    lifecycle = SessionLifecycle(
        config=StubConfig(),
        manager_factory=partial(BrowserManager, playwright_factory=lambda: fake),
    )

    with pytest.raises(SessionSetupError) as exc_info:
        with lifecycle:
            pass

    assert exc_info.value.step == "launch browser"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert fake.events == ["close browser", "stop playwright"]


def test_lifecycle_configuration_failure():
    def broken_config():
        raise OSError("unreadable")

    lifecycle = SessionLifecycle(config_factory=broken_config)

    with pytest.raises(SessionSetupError) as exc_info:
        lifecycle.setup()

    assert exc_info.value.step == "load configuration"
    lifecycle.teardown()


def test_lifecycle_loads_its_own_configuration_during_setup():
    fake = FakePlaywright()
    loads = []

    def load_config():
        loads.append("load")
        return StubConfig()

    lifecycle = SessionLifecycle(
        manager_factory=partial(BrowserManager, playwright_factory=lambda: fake),
        config_factory=load_config,
    )
    assert lifecycle.config is None

    with lifecycle as session:
        assert loads == ["load"]
        assert isinstance(session.config, StubConfig)
        assert fake.launched == ["webkit"]
