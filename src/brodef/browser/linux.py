"""Linux browser registry backed by fixed paths and xdg-settings."""

from __future__ import annotations

from typing import List, Optional

from brodef.browser.models import Browser, MethodResult, SetDefaultResult
from brodef.browser.provider import BrowserProvider, DefaultMatcher
from brodef.log import logger

DESKTOP_SUFFIX = ".desktop"


class LinuxProvider(BrowserProvider):
    platform = "linux"

    def _collect(self, found: List[Browser]) -> None:
        for name, candidates in self._catalog.linux_paths:
            for path in candidates:
                if self._fs.is_file(path):
                    found.append(Browser(name=name, executable_path=path, identifier=name.lower()))
                    break

    def default_desktop_entry(self) -> str:
        """Return the default browser's desktop entry name without `.desktop`, lowercased."""
        output = self._run("xdg-settings", ["get", "default-web-browser"]).strip()
        if output.endswith(DESKTOP_SUFFIX):
            output = output[: -len(DESKTOP_SUFFIX)]
        return output.lower()

    def _default_matcher(self) -> Optional[DefaultMatcher]:
        entry = self.default_desktop_entry()
        if not entry:
            return None
        return lambda browser: browser.identifier == entry or entry in browser.executable_path

    def desktop_file_for(self, name: str) -> str:
        return self._catalog.desktop_file_for(name)

    def set_default(self, browser: Browser) -> SetDefaultResult:
        desktop_file = self.desktop_file_for(browser.name)
        if not desktop_file:
            logger.warning("No desktop entry known for %s", browser.name)
            return SetDefaultResult.failed("xdg-settings", f"No desktop entry is known for {browser.name}.")

        logger.info("Running xdg-settings set default-web-browser %s", desktop_file)
        output = self._run("xdg-settings", ["set", "default-web-browser", desktop_file])
        # Only stdout is captured, so any output without "error" counts as success.
        if "error" not in output:
            attempt = MethodResult("xdg-settings", True, (f"Set {desktop_file} as default-web-browser.",))
            return SetDefaultResult(success=True, method="xdg-settings", attempts=[attempt])

        return SetDefaultResult.failed("xdg-settings", f"xdg-settings reported: {output.strip()}")
