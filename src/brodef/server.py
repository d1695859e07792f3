"""brodef MCP server: browser discovery and default-browser switching as tools.

Lets an AI agent see which browsers are installed, which one handles http/https
links, and ask the OS to change it. Nothing is persisted between calls; every
tool call takes a fresh snapshot of the host.
"""

import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from brodef.browser.detection import discover_browsers, get_provider, set_default_browser
from brodef.browser.models import Browser

mcp = FastMCP("brodef")


def _find_browser(browsers: list, identifier: str) -> Optional[Browser]:
    wanted = identifier.strip().lower()
    for browser in browsers:
        if browser.identifier.lower() == wanted or browser.name.lower() == wanted:
            return browser
    return None


# ── Tools ─────────────────────────────────────────────────────────────────────


@mcp.tool(
    name="list_browsers",
    annotations={
        "title": "List Installed Browsers",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def list_browsers() -> str:
    """List web browsers installed on this machine.

    Browsers are sorted by name. At most one entry has is_default set: the
    application the OS currently opens http/https links with.

    Returns:
        JSON: {"count": int, "default": str|null, "browsers": [{name, executable_path, identifier, is_default}]}
    """
    browsers = discover_browsers(get_provider())
    default = next((b.identifier for b in browsers if b.is_default), None)
    return json.dumps({
        "count": len(browsers),
        "default": default,
        "browsers": [b.to_dict() for b in browsers],
    }, indent=2)


@mcp.tool(
    name="set_default_browser",
    annotations={
        "title": "Set Default Browser",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def set_default_browser_tool(identifier: str) -> str:
    """Make an installed browser the OS default for http/https links.

    On macOS several methods are tried in order (duti, the Launch Services
    database, re-registration) before System Settings is opened for manual
    selection. Linux uses xdg-settings. Windows cannot be changed
    programmatically and returns instructions instead.

    Args:
        identifier: Browser identifier or name as returned by list_browsers
            (e.g., 'com.google.Chrome' on macOS, 'firefox' on Linux/Windows).

    Returns:
        JSON: {"success": bool, "method": str|null, "browser": {...}, "messages": [str]}
        Error: {"error": str, "identifier": str}
    """
    provider = get_provider()
    browser = _find_browser(discover_browsers(provider), identifier)
    if browser is None:
        return json.dumps({
            "error": "No installed browser matches this identifier",
            "identifier": identifier,
        }, indent=2)

    result = set_default_browser(browser, provider)
    return json.dumps({
        "success": result.success,
        "method": result.method,
        "browser": browser.to_dict(),
        "messages": result.messages,
    }, indent=2)


def main():
    mcp.run()


if __name__ == "__main__":
    main()
