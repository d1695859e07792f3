"""Pick the browser registry for the running OS and expose its operations."""

from __future__ import annotations

import platform
from typing import List, Optional

from brodef.browser.catalog import Catalog
from brodef.browser.linux import LinuxProvider
from brodef.browser.macos import MacOSProvider
from brodef.browser.models import Browser, SetDefaultResult
from brodef.browser.provider import BrowserProvider, UnsupportedProvider
from brodef.browser.runner import FileSystem, Runner
from brodef.browser.windows import WindowsProvider

_PROVIDERS = {
    "windows": WindowsProvider,
    "macos": MacOSProvider,
    "linux": LinuxProvider,
}


def detect_os(system: Optional[str] = None) -> str:
    """Classify the OS as windows, macos, linux or unsupported."""
    name = (system if system is not None else platform.system()).strip().lower()
    if name == "windows" or name.startswith(("cygwin", "msys")):
        return "windows"
    if name == "darwin":
        return "macos"
    if name == "linux":
        return "linux"
    return "unsupported"


def get_provider(
    system: Optional[str] = None,
    runner: Optional[Runner] = None,
    fs: Optional[FileSystem] = None,
    catalog: Optional[Catalog] = None,
) -> BrowserProvider:
    provider_cls = _PROVIDERS.get(detect_os(system), UnsupportedProvider)
    return provider_cls(runner=runner, fs=fs, catalog=catalog)


def discover_browsers(provider: Optional[BrowserProvider] = None) -> List[Browser]:
    """Return installed browsers sorted by name, with the OS default flagged."""
    return (provider or get_provider()).discover()


def set_default_browser(browser: Browser, provider: Optional[BrowserProvider] = None) -> SetDefaultResult:
    """Try to make browser the default; the result is truthy on success."""
    return (provider or get_provider()).set_default(browser)
