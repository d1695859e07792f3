"""Run set-default strategies in order until one succeeds."""

from __future__ import annotations

from typing import Callable, Sequence, Tuple

from brodef.browser.models import MethodResult, SetDefaultResult
from brodef.log import logger

Strategy = Callable[[str, str], MethodResult]


def first_success(
    strategies: Sequence[Tuple[str, Strategy]],
    identifier: str,
    name: str,
) -> SetDefaultResult:
    """Try each (method, strategy) pair in order; stop at the first success.

    A strategy that raises counts as a failed attempt and the chain moves on.
    """
    result = SetDefaultResult(success=False)
    for method, strategy in strategies:
        try:
            attempt = strategy(identifier, name)
        except Exception as exc:
            logger.warning("%s method failed: %s", method, exc)
            attempt = MethodResult(method, False, (f"{method} method failed: {exc}",))
        result.attempts.append(attempt)
        if attempt.success:
            result.success = True
            result.method = method
            break
    return result
