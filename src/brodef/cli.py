"""brodef command line: list installed browsers and pick the default one."""

from __future__ import annotations

import platform
from typing import List, Optional, Sequence

import click

from brodef.browser.detection import discover_browsers, get_provider, set_default_browser
from brodef.browser.models import Browser
from brodef.browser.provider import BrowserProvider

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"], ignore_unknown_options=True)

PROMPT = "Press ENTER to exit, or enter a number to set as default"


def format_browser_list(browsers: Sequence[Browser]) -> List[str]:
    lines = ["Installed browsers:"]
    for number, browser in enumerate(browsers, start=1):
        marker = " (default)" if browser.is_default else ""
        lines.append(f"{number}. {browser.name}{marker}")
    return lines


def parse_choice(text: str, count: int) -> Optional[int]:
    """Return a zero-based index for a 1..count choice, else None."""
    try:
        choice = int(text.strip())
    except ValueError:
        return None
    if 1 <= choice <= count:
        return choice - 1
    return None


def _show_list(browsers: Sequence[Browser]) -> None:
    for line in format_browser_list(browsers):
        click.echo(line)


def _apply_choice(provider: BrowserProvider, browser: Browser) -> None:
    click.echo(f"Setting {browser.name} as default browser...")
    result = set_default_browser(browser, provider)
    for line in result.messages:
        click.echo(line)

    if result:
        click.echo(f"✓ {browser.name} has been set as the default browser.")
    elif provider.platform == "macos":
        click.echo("⚠ Programmatic setting failed, but System Settings should now be open for manual configuration.")
        click.echo("Please select your preferred browser in the System Settings window that opened.")
    elif provider.platform == "linux":
        click.echo(f"Attempted to set {browser.name} as default browser.")
        click.echo("If this didn't work, you may need to:")
        click.echo("1. Install xdg-utils package")
        click.echo("2. Set the browser manually in your system settings")
    else:
        click.echo("Please set the default browser manually in your system settings.")


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("args", nargs=-1)
def main(args: Sequence[str]) -> None:
    """List installed browsers, or make browser number ARGS the default.

    Run without arguments for interactive mode.
    """
    click.echo(f"Operating System: {platform.platform()}")

    provider = get_provider()
    browsers = discover_browsers(provider)
    if not browsers:
        click.echo("No browsers found on this system.")
        return

    if len(args) > 1:
        click.echo("Usage: brodef [browser_number]")
        click.echo("Run without arguments for interactive mode.")
        return

    if not args:
        _show_list(browsers)
        click.echo()
        try:
            answer = click.prompt(PROMPT, default="", show_default=False)
        except click.Abort:
            # Closed stdin reads like a blank answer.
            return
        if not answer.strip():
            return
        index = parse_choice(answer, len(browsers))
        if index is None:
            click.echo("Invalid selection.")
            return
        _apply_choice(provider, browsers[index])
        return

    index = parse_choice(args[0], len(browsers))
    if index is None:
        click.echo(f"Invalid browser number. Please choose between 1 and {len(browsers)}.")
        _show_list(browsers)
        return
    _apply_choice(provider, browsers[index])


if __name__ == "__main__":
    main()
