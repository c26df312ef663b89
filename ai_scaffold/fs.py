"""Filesystem rooted at a directory, addressed with POSIX-style relative paths.

Initializers never touch ``pathlib`` directly: they receive one of these
(project root or home root) and hand it forward-slash paths. Every failing
operation is re-raised as ``FilesystemError`` naming the path and the
operation that was attempted.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from .errors import FilesystemError


class Filesystem:
    def __init__(self, root: Path, label: str = "") -> None:
        self.root = Path(root)
        # Prefix used when reporting paths (``~/`` for the home root).
        self.label = label

    def __repr__(self) -> str:
        return f"Filesystem({str(self.root)!r})"

    def resolve(self, rel: str) -> Path:
        return self.root.joinpath(*PurePosixPath(rel).parts)

    def display(self, rel: str) -> str:
        return f"{self.label}{rel}"

    def exists(self, rel: str) -> bool:
        try:
            return self.resolve(rel).exists()
        except OSError:
            return False

    def is_dir(self, rel: str) -> bool:
        try:
            return self.resolve(rel).is_dir()
        except OSError:
            return False

    def mkdir(self, rel: str) -> None:
        try:
            self.resolve(rel).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError("mkdir", self.display(rel), exc) from exc

    def read_text(self, rel: str) -> str:
        try:
            # newline="" and surrogateescape keep user bytes (CRLF, non-UTF-8)
            # intact across a read and rewrite.
            with open(self.resolve(rel), encoding="utf-8", errors="surrogateescape", newline="") as fh:
                return fh.read()
        except (OSError, UnicodeError) as exc:
            raise FilesystemError("read", self.display(rel), exc) from exc

    def write_text(self, rel: str, content: str) -> None:
        try:
            with open(self.resolve(rel), "w", encoding="utf-8", errors="surrogateescape", newline="") as fh:
                fh.write(content)
        except (OSError, UnicodeError) as exc:
            raise FilesystemError("write", self.display(rel), exc) from exc


def project_fs(root: Path) -> Filesystem:
    return Filesystem(root)


def home_fs(root: Path) -> Filesystem:
    return Filesystem(root, label="~/")
