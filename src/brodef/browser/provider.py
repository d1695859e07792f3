"""Base class for the per-OS browser registries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, List, Optional

from brodef.browser.catalog import Catalog, load_catalog
from brodef.browser.models import Browser, SetDefaultResult
from brodef.browser.runner import FileSystem, Runner, run_command
from brodef.log import logger

DefaultMatcher = Callable[[Browser], bool]


def mark_default(browsers: List[Browser], matcher: Optional[DefaultMatcher]) -> List[Browser]:
    """Flag the first browser accepted by matcher, then sort by name."""
    marked = list(browsers)
    if matcher is not None:
        for index, browser in enumerate(marked):
            if matcher(browser):
                marked[index] = replace(browser, is_default=True)
                break
    return sorted(marked, key=lambda b: b.name)


class BrowserProvider(ABC):
    """Discovers installed browsers and changes the default on one OS family."""

    platform = ""

    def __init__(
        self,
        runner: Optional[Runner] = None,
        fs: Optional[FileSystem] = None,
        catalog: Optional[Catalog] = None,
    ):
        self._run = runner or run_command
        self._fs = fs or FileSystem()
        self._catalog = catalog or load_catalog()

    def discover(self) -> List[Browser]:
        """Return a fresh, name-sorted snapshot of installed browsers. Never raises."""
        found: List[Browser] = []
        try:
            self._collect(found)
        except Exception as exc:
            logger.warning("%s browser discovery failed: %s", self.platform, exc)
            found = self._recover(found)

        try:
            matcher = self._default_matcher()
        except Exception as exc:
            logger.warning("%s default browser lookup failed: %s", self.platform, exc)
            matcher = None
        return mark_default(found, matcher)

    def _recover(self, partial: List[Browser]) -> List[Browser]:
        return partial

    @abstractmethod
    def _collect(self, found: List[Browser]) -> None:
        """Append discovered browsers to found, in discovery order."""

    @abstractmethod
    def _default_matcher(self) -> Optional[DefaultMatcher]:
        """Return a predicate selecting the current default, or None if unknown."""

    @abstractmethod
    def set_default(self, browser: Browser) -> SetDefaultResult:
        """Try to make browser the OS default for http and https."""


class UnsupportedProvider(BrowserProvider):
    """Used when the OS family is not Windows, macOS or Linux."""

    platform = "unsupported"

    def _collect(self, found: List[Browser]) -> None:
        return None

    def _default_matcher(self) -> Optional[DefaultMatcher]:
        return None

    def set_default(self, browser: Browser) -> SetDefaultResult:
        return SetDefaultResult.failed(
            "unsupported",
            "Setting the default browser is not supported on this platform.",
        )
