"""Parsers for Launch Services handler data and bundle manifests.

Each parser tries a structured parse first and falls back to a narrow
line or substring scan only when the structured parse fails. None of them
raise.
"""

from __future__ import annotations

import json
import re
from typing import Dict, List, Optional

URL_SCHEME_KEY = "LSHandlerURLScheme"
ROLE_ALL_KEY = "LSHandlerRoleAll"
WEB_SCHEMES = ("http", "https")

_DUMP_ENTRY = re.compile(r'^\s*"?(?P<key>[A-Za-z]+)"?\s*=\s*"?(?P<value>[^";]*)"?\s*;?\s*$')
_JSON_ENTRY = re.compile(r'^\s*"(?P<key>[A-Za-z]+)"\s*:\s*"(?P<value>[^"]*)"\s*,?\s*$')


# ---------- Bundle manifests ----------


def parse_url_schemes(text: str) -> bool:
    """Return True if CFBundleURLTypes JSON declares an http or https scheme."""
    if not text or not text.strip() or "does not exist" in text:
        return False
    try:
        url_types = json.loads(text)
    except ValueError:
        return '"http"' in text or '"https"' in text
    if not isinstance(url_types, list):
        return False
    for url_type in url_types:
        if not isinstance(url_type, dict):
            continue
        schemes = url_type.get("CFBundleURLSchemes")
        if isinstance(schemes, list) and any(s in WEB_SCHEMES for s in schemes):
            return True
    return False


# ---------- Default handler lookup ----------


def parse_http_handler_json(text: str) -> str:
    """Return the role-all bundle id of the http entry in an LSHandlers JSON array."""
    try:
        handlers = json.loads(text)
    except ValueError:
        return scan_http_handler_json_lines(text)
    if not isinstance(handlers, list):
        return ""
    for handler in handlers:
        if not isinstance(handler, dict):
            continue
        if handler.get(URL_SCHEME_KEY) == "http" and isinstance(handler.get(ROLE_ALL_KEY), str):
            return handler[ROLE_ALL_KEY]
    return ""


def scan_http_handler_json_lines(text: str) -> str:
    """Line scan of LSHandlers JSON text that did not parse as JSON."""
    return _scan_blocks(text, _JSON_ENTRY)


def parse_lshandlers_dump(text: str) -> str:
    """Return the role-all bundle id of the http block in a `defaults read` dump."""
    return _scan_blocks(text, _DUMP_ENTRY)


def parse_duti_bundle_id(text: str) -> str:
    for line in (text or "").splitlines():
        stripped = line.strip()
        if stripped.startswith("Bundle ID:"):
            return stripped[len("Bundle ID:"):].strip()
    return ""


def _iter_blocks(text: str, entry: "re.Pattern[str]") -> List[Dict[str, str]]:
    """Split brace-delimited handler records into key/value dicts.

    Only top-level keys of a record are kept; values inside nested braces
    such as LSHandlerPreferredVersions are ignored.
    """
    blocks: List[Dict[str, str]] = []
    current: Dict[str, str] = {}
    depth = 0
    for line in (text or "").splitlines():
        match = entry.match(line)
        if depth <= 1 and match and match.group("value").strip() not in ("{", "("):
            current[match.group("key")] = match.group("value").strip()
        for char in line:
            if char == "{":
                depth += 1
            elif char == "}" and depth > 0:
                depth -= 1
                if depth == 0:
                    if current:
                        blocks.append(current)
                    current = {}
    if current:
        blocks.append(current)
    return blocks


def _scan_blocks(text: str, entry: "re.Pattern[str]") -> str:
    for block in _iter_blocks(text, entry):
        if block.get(URL_SCHEME_KEY) == "http" and block.get(ROLE_ALL_KEY):
            return block[ROLE_ALL_KEY]
    return ""


# ---------- Handler registration ----------


def lshandlers_dump_registers(text: str, bundle_id: str) -> bool:
    """True if a `defaults read` LSHandlers block maps http(s) to bundle_id."""
    if not text or not bundle_id:
        return False
    wanted = bundle_id.lower()
    for block in _iter_blocks(text, _DUMP_ENTRY):
        if block.get(URL_SCHEME_KEY) not in WEB_SCHEMES:
            continue
        if any(value.lower() == wanted for value in block.values()):
            return True
    return False


def lsregister_dump_registers(text: str, bundle_id: str, context: int = 5) -> bool:
    """True if an http mention sits within `context` lines of bundle_id in an lsregister dump."""
    if not text or not bundle_id:
        return False
    lines = text.splitlines()
    for index, line in enumerate(lines):
        if bundle_id not in line:
            continue
        window = lines[max(0, index - context):index + context + 1]
        if any("http" in candidate.lower() for candidate in window):
            return True
    return False


# ---------- Misc ----------


def parse_major_version(text: str) -> Optional[int]:
    head = (text or "").strip().split(".")[0]
    try:
        return int(head)
    except ValueError:
        return None

