"""macOS browser registry built on Spotlight metadata and Launch Services.

Discovery enumerates every application bundle with ``mdfind`` and keeps the
ones that look like web browsers:

1. whitelisted bundle ids are always kept;
2. blacklisted ids (mail clients, IDEs, chat apps...) are always dropped;
3. other bundles need a browser-like file name, an ``http``/``https`` entry
   in ``CFBundleURLTypes`` and a Launch Services handler registration.

The default browser is the ``LSHandlerRoleAll`` of the ``http`` handler in the
Launch Services database, read through ``defaults export`` + ``plutil``,
``duti`` or a raw ``defaults read`` dump, in that order.
"""

from __future__ import annotations

import os
import tempfile
import time
from pathlib import Path, PurePosixPath
from typing import Callable, List, Optional

from brodef.browser.catalog import Catalog
from brodef.browser.chain import first_success
from brodef.browser.handlers import (
    lshandlers_dump_registers,
    lsregister_dump_registers,
    parse_duti_bundle_id,
    parse_http_handler_json,
    parse_lshandlers_dump,
    parse_major_version,
    parse_url_schemes,
)
from brodef.browser.models import Browser, MethodResult, SetDefaultResult
from brodef.browser.provider import BrowserProvider, DefaultMatcher
from brodef.browser.runner import FileSystem, Runner
from brodef.log import debug_detail, logger

LAUNCH_SERVICES_DOMAIN = "com.apple.LaunchServices/com.apple.launchservices.secure"
LSREGISTER = (
    "/System/Library/Frameworks/CoreServices.framework/Frameworks"
    "/LaunchServices.framework/Support/lsregister"
)
APP_BUNDLE_QUERY = (
    "kMDItemCFBundleIdentifier = '*' && kMDItemContentTypeTree = 'com.apple.application-bundle'"
)
SETTINGS_URL = "x-apple.systempreferences:com.apple.preference.general"
LEGACY_PREF_PANE = "/System/Library/PreferencePanes/General.prefPane"
SYSTEM_SETTINGS_MIN_MAJOR = 13
SETTLE_DELAY_S = 2.0


class MacOSProvider(BrowserProvider):
    platform = "macos"

    def __init__(
        self,
        runner: Optional[Runner] = None,
        fs: Optional[FileSystem] = None,
        catalog: Optional[Catalog] = None,
        sleep: Optional[Callable[[float], None]] = None,
        home: Optional[Path] = None,
    ):
        super().__init__(runner=runner, fs=fs, catalog=catalog)
        self._sleep = sleep or time.sleep
        self._home = home or Path.home()

    # ---------- Discovery ----------

    def _collect(self, found: List[Browser]) -> None:
        listing = self._run("mdfind", [APP_BUNDLE_QUERY])
        if not listing.strip():
            logger.info("Spotlight returned no applications, checking well-known locations")
            found.extend(self._fallback_browsers())
            return

        seen = set()
        for line in listing.splitlines():
            app_path = line.strip()
            if not app_path.endswith(".app") or not self._fs.is_dir(app_path):
                continue
            bundle_id = self.bundle_identifier(app_path)
            if not bundle_id or bundle_id in seen:
                continue
            if not self.is_eligible(app_path, bundle_id):
                debug_detail(f"Skipping {app_path} ({bundle_id})")
                continue
            seen.add(bundle_id)
            found.append(Browser(self.display_name(app_path), app_path, bundle_id))

    def _recover(self, partial: List[Browser]) -> List[Browser]:
        return self._fallback_browsers()

    def _fallback_browsers(self) -> List[Browser]:
        browsers: List[Browser] = []
        for name, app_path in self._catalog.mac_fallback_apps:
            user_copy = str(self._home / "Applications" / PurePosixPath(app_path).name)
            for candidate in (app_path, user_copy):
                if not self._fs.is_dir(candidate):
                    continue
                bundle_id = self.bundle_identifier(candidate) or name.lower().replace(" ", ".")
                browsers.append(Browser(name, candidate, bundle_id))
                break
        return browsers

    def _mdls(self, app_path: str, attribute: str) -> str:
        value = self._run("mdls", ["-name", attribute, "-r", app_path]).strip()
        if not value or "(null)" in value:
            return ""
        return value

    def bundle_identifier(self, app_path: str) -> str:
        return self._mdls(app_path, "kMDItemCFBundleIdentifier")

    def display_name(self, app_path: str) -> str:
        name = self._mdls(app_path, "kMDItemDisplayName") or PurePosixPath(app_path).stem
        if name.endswith(".app"):
            name = name[: -len(".app")]
        return name

    # ---------- Eligibility ----------

    def is_eligible(self, app_path: str, bundle_id: str) -> bool:
        """Decide whether a bundle belongs in the default-browser list."""
        try:
            if self._catalog.is_known_mac_browser(bundle_id):
                return True
            if self.is_non_browser(app_path, bundle_id):
                return False
            if not self.has_browser_name(app_path):
                return False
            info_plist = f"{app_path}/Contents/Info.plist"
            if not self._fs.is_file(info_plist):
                return False
            if not self.declares_web_schemes(info_plist):
                return False
            return self.is_registered_handler(bundle_id)
        except Exception as exc:
            debug_detail(f"Eligibility check failed for {bundle_id}: {exc}")
            return self._catalog.is_known_mac_browser(bundle_id)

    def is_non_browser(self, app_path: str, bundle_id: str) -> bool:
        lowered = bundle_id.lower()
        if any(lowered.startswith(prefix.lower()) for prefix in self._catalog.mac_non_browser_prefixes):
            return True
        app_name = PurePosixPath(app_path).stem.lower()
        return any(pattern in app_name for pattern in self._catalog.mac_non_browser_names)

    def has_browser_name(self, app_path: str) -> bool:
        app_name = PurePosixPath(app_path).stem.lower()
        return any(keyword in app_name for keyword in self._catalog.mac_browser_keywords)

    def declares_web_schemes(self, info_plist: str) -> bool:
        output = self._run("plutil", ["-extract", "CFBundleURLTypes", "json", "-o", "-", info_plist])
        return parse_url_schemes(output)

    def is_registered_handler(self, bundle_id: str) -> bool:
        """Check Launch Services for an http handler registration of bundle_id."""
        if lsregister_dump_registers(self._run(LSREGISTER, ["-dump"]), bundle_id):
            return True
        if bundle_id in self._run("duti", ["-l", "http"]):
            return True
        handlers = self._run("defaults", ["read", LAUNCH_SERVICES_DOMAIN, "LSHandlers"])
        if lshandlers_dump_registers(handlers, bundle_id):
            return True
        # Without Launch Services evidence only whitelisted browsers pass.
        return self._catalog.is_known_mac_browser(bundle_id)

    # ---------- Default browser ----------

    def default_handler_identifier(self) -> str:
        """Return the bundle id registered as the all-roles http handler, or ""."""
        for lookup in (self._default_from_export, self._default_from_duti, self._default_from_dump):
            bundle_id = lookup()
            if bundle_id:
                return bundle_id
        return ""

    def _default_from_export(self) -> str:
        with tempfile.NamedTemporaryFile(suffix=".plist", delete=False) as tmp:
            tmp_path = tmp.name

        try:
            self._run("defaults", ["export", LAUNCH_SERVICES_DOMAIN, tmp_path])
            handlers = self._run("plutil", ["-extract", "LSHandlers", "json", "-o", "-", tmp_path]).strip()
            if not handlers.startswith("["):
                return ""
            return parse_http_handler_json(handlers)
        finally:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass

    def _default_from_duti(self) -> str:
        return parse_duti_bundle_id(self._run("duti", ["-x", "http"]))

    def _default_from_dump(self) -> str:
        return parse_lshandlers_dump(self._run("defaults", ["read", LAUNCH_SERVICES_DOMAIN, "LSHandlers"]))

    def _default_matcher(self) -> Optional[DefaultMatcher]:
        default_id = self.default_handler_identifier().lower()
        if not default_id:
            return None
        return lambda browser: browser.identifier.lower() == default_id

    # ---------- Setting the default ----------

    def macos_major_version(self) -> Optional[int]:
        return parse_major_version(self._run("sw_vers", ["-productVersion"]))

    def set_default(self, browser: Browser) -> SetDefaultResult:
        bundle_id = browser.identifier
        if not bundle_id:
            return SetDefaultResult.failed(
                "bundle-id", f"Error: Could not determine bundle identifier for {browser.name}"
            )

        logger.info("Setting %s as default browser programmatically...", browser.name)
        major = self.macos_major_version()
        if major is not None and major >= SYSTEM_SETTINGS_MIN_MAJOR:
            logger.info(
                "Note: macOS 13+ has enhanced security restrictions. "
                "Some methods may require additional permissions."
            )

        strategies = [
            ("duti", self._set_with_duti),
            ("defaults", self._set_with_defaults),
            ("lsregister", self._reregister),
            ("system-settings", lambda ident, name: self._open_system_settings(ident, name, major)),
        ]
        return first_success(strategies, bundle_id, browser.name)

    def _set_with_duti(self, bundle_id: str, name: str) -> MethodResult:
        logger.info("Attempting to set default browser using duti...")
        if not self._run("which", ["duti"]).strip():
            return MethodResult("duti", False, (
                "duti command not found. To install duti:",
                "  brew install duti",
                "  or download from: https://github.com/moretension/duti",
            ))

        for target in ("http", "https", "public.html"):
            self._run("duti", ["-s", bundle_id, target, "all"])

        if bundle_id.lower() in self._run("duti", ["-x", "http"]).lower():
            return MethodResult("duti", True, (
                f"✓ Successfully set {name} as default browser using duti",
                "Note: You may need to restart applications for the change to take full effect",
            ))
        return MethodResult("duti", False, ("duti command executed but verification failed",))

    def _set_with_defaults(self, bundle_id: str, name: str) -> MethodResult:
        logger.info("Attempting to set default browser using defaults command...")
        for scheme in ("http", "https"):
            entry = f'{{LSHandlerURLScheme="{scheme}";LSHandlerRoleAll="{bundle_id}";}}'
            self._run("defaults", ["write", LAUNCH_SERVICES_DOMAIN, "LSHandlers", "-array-add", entry])

        self._run(LSREGISTER, ["-kill", "-r", "-domain", "local", "-domain", "system", "-domain", "user"])
        self._sleep(SETTLE_DELAY_S)

        if self.default_handler_identifier().lower() == bundle_id.lower():
            return MethodResult("defaults", True, (
                f"✓ Successfully set {name} as default browser using defaults command",
                "Note: Changes may require a logout/login or system restart to fully take effect",
            ))
        return MethodResult("defaults", False, ("defaults command executed but verification failed",))

    def _reregister(self, bundle_id: str, name: str) -> MethodResult:
        """Re-register the app with Launch Services. Never counts as success."""
        logger.info("Attempting to set default browser using lsregister...")
        listing = self._run("mdfind", [f"kMDItemCFBundleIdentifier == '{bundle_id}'"]).strip()
        if not listing:
            return MethodResult("lsregister", False, ("Could not find application path for lsregister",))

        app_path = listing.splitlines()[0].strip()
        if not app_path or not self._fs.is_dir(app_path):
            return MethodResult("lsregister", False, ("Invalid application path for lsregister",))

        self._run(LSREGISTER, ["-u", app_path])
        self._run(LSREGISTER, [app_path])
        return MethodResult("lsregister", False, ("lsregister method completed app registration",))

    def _open_system_settings(self, bundle_id: str, name: str, major: Optional[int]) -> MethodResult:
        logger.info("All programmatic methods failed. Opening System Settings for manual configuration...")
        if major is not None and major >= SYSTEM_SETTINGS_MIN_MAJOR:
            self._run("open", [SETTINGS_URL])
        else:
            self._run("open", [LEGACY_PREF_PANE])

        return MethodResult("system-settings", False, (
            f"Please manually set {name} as default in System Settings > General > Default web browser",
            f"(Bundle ID: {bundle_id})",
            "",
            "Programmatic setting failed. Possible reasons:",
            "  • System Integrity Protection (SIP) restrictions",
            "  • Insufficient permissions or macOS security policies",
            "  • Missing command-line tools (install: brew install duti)",
            "  • App not properly registered with Launch Services",
            "",
            "To improve programmatic setting success:",
            "  1. Install duti: brew install duti",
            "  2. Ensure the browser app is in /Applications/",
            "  3. Run with admin privileges if necessary",
            "  4. Try logging out and back in after setting",
        ))
