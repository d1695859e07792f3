"""In-memory stand-ins for the command runner and the filesystem."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

Response = Union[str, Callable[[Tuple[str, ...]], str]]


class FakeRunner:
    """Answers commands from canned output keyed by argv prefix.

    The longest registered prefix of (command, *arguments) wins, so a key of
    ("plutil", "-extract", "LSHandlers") matches whatever temp file follows.
    Unknown commands return "", like a missing tool.
    """

    def __init__(self, responses: Optional[Dict[Tuple[str, ...], Response]] = None):
        self.responses: Dict[Tuple[str, ...], Response] = dict(responses or {})
        self.calls: List[Tuple[str, ...]] = []

    def __call__(self, command: str, arguments: Sequence[str] = ()) -> str:
        argv = (command, *arguments)
        self.calls.append(argv)
        for size in range(len(argv), 0, -1):
            response = self.responses.get(argv[:size])
            if response is not None:
                return response(argv) if callable(response) else response
        return ""

    def called(self, *prefix: str) -> bool:
        return any(call[: len(prefix)] == prefix for call in self.calls)


class FakeFileSystem:
    def __init__(self, files: Iterable[str] = (), dirs: Iterable[str] = ()):
        self.files = set(files)
        self.dirs = set(dirs)

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.dirs

    def is_file(self, path: str) -> bool:
        return path in self.files

    def is_dir(self, path: str) -> bool:
        return path in self.dirs
