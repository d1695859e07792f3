from brodef.browser.models import Browser
from brodef.browser.windows import USER_CHOICE_KEY, WindowsProvider, resolve_progid, windows_identifier
from fakes import FakeFileSystem, FakeRunner

CHROME_64 = r"C:\Program Files\Google\Chrome\Application\chrome.exe"
CHROME_32 = r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe"
FIREFOX_64 = r"C:\Program Files\Mozilla Firefox\firefox.exe"
EDGE = r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe"

REG_QUERY = ("reg", "query", USER_CHOICE_KEY, "/v", "ProgId")


def _reg_output(progid: str) -> str:
    return (
        f"\r\n{USER_CHOICE_KEY}\r\n"
        f"    ProgId    REG_SZ    {progid}\r\n\r\n"
    )


def test_progid_mapping(catalog) -> None:
    assert resolve_progid(_reg_output("MSEdgeHTM"), catalog.windows_progids) == "Edge"
    assert resolve_progid(_reg_output("FirefoxURL-308046B0AF4A39CB"), catalog.windows_progids) == "Firefox"
    assert resolve_progid(_reg_output("IE.HTTP"), catalog.windows_progids) == ""
    assert resolve_progid("", catalog.windows_progids) == ""


def test_identifier_drops_spaces_and_x86_label() -> None:
    assert windows_identifier("Chrome (x86)") == "chrome"
    assert windows_identifier("Firefox") == "firefox"


def test_discovery_marks_registry_default(catalog) -> None:
    runner = FakeRunner({REG_QUERY: _reg_output("FirefoxURL-308046B0AF4A39CB")})
    fs = FakeFileSystem(files={CHROME_32, FIREFOX_64, EDGE})
    provider = WindowsProvider(runner=runner, fs=fs, catalog=catalog)

    assert provider.discover() == [
        Browser("Chrome", CHROME_32, "chrome"),
        Browser("Edge", EDGE, "edge"),
        Browser("Firefox", FIREFOX_64, "firefox", is_default=True),
    ]


def test_both_architectures_register_and_first_wins(catalog) -> None:
    runner = FakeRunner({REG_QUERY: _reg_output("ChromeHTML")})
    fs = FakeFileSystem(files={CHROME_64, CHROME_32})
    provider = WindowsProvider(runner=runner, fs=fs, catalog=catalog)

    browsers = provider.discover()

    assert [b.executable_path for b in browsers] == [CHROME_64, CHROME_32]
    assert [b.name for b in browsers] == ["Chrome", "Chrome"]
    assert [b.is_default for b in browsers] == [True, False]


def test_unknown_progid_marks_nothing(catalog) -> None:
    runner = FakeRunner({REG_QUERY: _reg_output("IE.HTTP")})
    provider = WindowsProvider(runner=runner, fs=FakeFileSystem(files={EDGE}), catalog=catalog)

    browsers = provider.discover()

    assert browsers == [Browser("Edge", EDGE, "edge")]
    assert provider.discover() == browsers


def test_set_default_only_gives_instructions(catalog) -> None:
    runner = FakeRunner()
    provider = WindowsProvider(runner=runner, fs=FakeFileSystem(), catalog=catalog)

    result = provider.set_default(Browser("Edge", EDGE, "edge"))

    assert not result
    assert "1. Open Settings > Apps > Default apps" in result.messages
    assert runner.calls == []
