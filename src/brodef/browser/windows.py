"""Windows browser registry: fixed install paths plus the UserChoice ProgId."""

from __future__ import annotations

import os
from typing import List, Optional, Sequence, Tuple

from brodef.browser.models import Browser, SetDefaultResult
from brodef.browser.provider import BrowserProvider, DefaultMatcher

USER_CHOICE_KEY = (
    r"HKEY_CURRENT_USER\Software\Microsoft\Windows\Shell\Associations"
    r"\UrlAssociations\http\UserChoice"
)
X86_LABEL = "(x86)"


def resolve_progid(text: str, progids: Sequence[Tuple[str, str]]) -> str:
    """Map `reg query` output to a browser display name, or "" if unknown."""
    for marker, name in progids:
        if marker in (text or ""):
            return name
    return ""


def windows_identifier(label: str) -> str:
    return label.lower().replace(" ", "").replace(X86_LABEL, "")


class WindowsProvider(BrowserProvider):
    platform = "windows"

    def _collect(self, found: List[Browser]) -> None:
        for label, raw_path in self._catalog.windows_paths:
            path = os.path.expandvars(raw_path)
            if not self._fs.is_file(path):
                continue
            found.append(
                Browser(
                    name=label.replace(f" {X86_LABEL}", ""),
                    executable_path=path,
                    identifier=windows_identifier(label),
                )
            )

    def default_browser_name(self) -> str:
        output = self._run("reg", ["query", USER_CHOICE_KEY, "/v", "ProgId"])
        return resolve_progid(output, self._catalog.windows_progids)

    def _default_matcher(self) -> Optional[DefaultMatcher]:
        default_name = self.default_browser_name().lower()
        if not default_name:
            return None
        return lambda browser: default_name in browser.name.lower()

    def set_default(self, browser: Browser) -> SetDefaultResult:
        # Windows asks the user to confirm default-app changes; this cannot be scripted.
        return SetDefaultResult.failed(
            "manual",
            f"To set {browser.name} as default on Windows:",
            "1. Open Settings > Apps > Default apps",
            f"2. Search for {browser.name} and set it as default for web browser",
        )
