"""Value types shared by the platform providers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Browser:
    """One installed browser as seen by a single discovery call."""

    name: str
    executable_path: str
    identifier: str
    is_default: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MethodResult:
    """Outcome of one set-default strategy."""

    method: str
    success: bool
    messages: Tuple[str, ...] = ()


@dataclass
class SetDefaultResult:
    """Outcome of a whole set-default attempt, strategy by strategy."""

    success: bool
    method: Optional[str] = None
    attempts: List[MethodResult] = field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        lines: List[str] = []
        for attempt in self.attempts:
            lines.extend(attempt.messages)
        return lines

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def failed(cls, method: str, *messages: str) -> "SetDefaultResult":
        return cls(success=False, attempts=[MethodResult(method, False, tuple(messages))])
