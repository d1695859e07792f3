"""Browser catalog: the product-specific tables used by the providers.

Known install paths, ProgIds, bundle identifiers and desktop entries drift as
browsers change, so they live in ``catalog.json`` next to this module. A user
file at ~/.brodef/catalog.json replaces individual top-level keys.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from brodef.log import logger

PACKAGED_CATALOG_PATH = Path(__file__).with_name("catalog.json")
CATALOG_OVERRIDE_PATH = Path.home() / ".brodef" / "catalog.json"


@dataclass(frozen=True)
class Catalog:
    version: str
    windows_paths: Tuple[Tuple[str, str], ...]
    windows_progids: Tuple[Tuple[str, str], ...]
    linux_paths: Tuple[Tuple[str, Tuple[str, ...]], ...]
    linux_desktop_files: Tuple[Tuple[str, str], ...]
    mac_known_browsers: Tuple[str, ...]
    mac_non_browser_prefixes: Tuple[str, ...]
    mac_non_browser_names: Tuple[str, ...]
    mac_browser_keywords: Tuple[str, ...]
    mac_fallback_apps: Tuple[Tuple[str, str], ...]

    def is_known_mac_browser(self, bundle_id: str) -> bool:
        wanted = bundle_id.lower()
        return any(known.lower() == wanted for known in self.mac_known_browsers)

    def desktop_file_for(self, name: str) -> str:
        wanted = name.lower()
        for key, desktop_file in self.linux_desktop_files:
            if key == wanted:
                return desktop_file
        return ""


def _read_json(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return data


def _load_override(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return _read_json(path)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring catalog override %s: %s", path, exc)
        return {}


def _from_dict(data: Dict[str, Any]) -> Catalog:
    return Catalog(
        version=str(data.get("version", "")),
        windows_paths=tuple(data["windows_paths"].items()),
        windows_progids=tuple(data["windows_progids"].items()),
        linux_paths=tuple((name, tuple(paths)) for name, paths in data["linux_paths"].items()),
        linux_desktop_files=tuple((k.lower(), v) for k, v in data["linux_desktop_files"].items()),
        mac_known_browsers=tuple(data["mac_known_browsers"]),
        mac_non_browser_prefixes=tuple(data["mac_non_browser_prefixes"]),
        mac_non_browser_names=tuple(data["mac_non_browser_names"]),
        mac_browser_keywords=tuple(data["mac_browser_keywords"]),
        mac_fallback_apps=tuple(data["mac_fallback_apps"].items()),
    )


def load_catalog(override_path: Optional[Path] = None) -> Catalog:
    """Load the packaged catalog, with top-level keys replaced by the user override."""
    path = override_path or CATALOG_OVERRIDE_PATH
    data = _read_json(PACKAGED_CATALOG_PATH)
    override = _load_override(path)
    if not override:
        return _from_dict(data)
    try:
        catalog = _from_dict({**data, **override})
    except (AttributeError, KeyError, TypeError) as exc:
        logger.warning("Ignoring catalog override %s: %s", path, exc)
        return _from_dict(data)
    logger.info("Using catalog override %s (version %s)", path, catalog.version or "unknown")
    return catalog
