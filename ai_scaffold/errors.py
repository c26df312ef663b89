"""Exception hierarchy for ai-scaffold."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .initializers import ApplyResult, Kind


class ScaffoldError(Exception):
    """Base class for every error raised by ai-scaffold."""

    # Set by a multi-file initializer that failed after writing some files.
    partial: Optional[ApplyResult] = None


class ConfigError(ScaffoldError):
    """The project configuration file could not be read or is invalid."""


class RegistrationError(ScaffoldError):
    """A provider registration was rejected (empty id, no provider, duplicate)."""


class RenderError(ScaffoldError):
    """A template could not be rendered."""

    def __init__(self, content_id: str, reason: str) -> None:
        super().__init__(f"failed to render {content_id}: {reason}")
        self.content_id = content_id
        self.reason = reason


class FilesystemError(ScaffoldError):
    """An I/O failure, tagged with the offending path and attempted operation."""

    def __init__(self, op: str, path: str, cause: Exception) -> None:
        super().__init__(f"{op} {path}: {getattr(cause, 'strerror', None) or cause}")
        self.op = op
        self.path = path
        self.cause = cause


class OrchestrationError(ScaffoldError):
    """An initializer failed mid-run.

    ``result`` holds everything that was created or updated before the
    failure, so callers can still report partial progress.
    """

    def __init__(
        self,
        key: str,
        phase: Kind,
        result: ApplyResult,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(f"{phase.value} phase failed at {key}: {cause}")
        self.key = key
        self.phase = phase
        self.result = result
        self.cause = cause
