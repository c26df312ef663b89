"""Shared fixtures for ai-scaffold tests."""

from __future__ import annotations

import argparse
import errno
from pathlib import Path
from typing import Any, Optional

import pytest

from ai_scaffold.config import Config, TemplateContext
from ai_scaffold.errors import FilesystemError, RenderError
from ai_scaffold.fs import Filesystem, home_fs, project_fs

# ---------------------------------------------------------------------------
# Doubles
# ---------------------------------------------------------------------------


class StubRenderer:
    """Renderer returning fixed strings; set a field to an exception to fail."""

    def __init__(
        self,
        pointer: Any = "POINTER",
        agents: Any = "AGENTS",
        project: Any = "PROJECT",
        commands: Optional[dict[str, Any]] = None,
    ) -> None:
        self.pointer = pointer
        self.agents = agents
        self.project = project
        self.commands = commands or {}
        self.calls: list[str] = []

    @staticmethod
    def _value(value: Any) -> str:
        if isinstance(value, Exception):
            raise value
        return value

    def render_instruction_pointer(self, ctx: TemplateContext) -> str:
        self.calls.append("instruction-pointer")
        return self._value(self.pointer)

    def render_agents_file(self, ctx: TemplateContext) -> str:
        self.calls.append("agents-file")
        return self._value(self.agents)

    def render_project_file(self, ctx: TemplateContext) -> str:
        self.calls.append("project-file")
        return self._value(self.project)

    def render_command(self, command_id: str, ctx: TemplateContext) -> str:
        self.calls.append(f"command:{command_id}")
        return self._value(self.commands.get(command_id, f"BODY {command_id}"))


class FailingFilesystem(Filesystem):
    """Filesystem whose writes to one path fail with EACCES."""

    def __init__(self, root: Path, fail_on: str, label: str = "") -> None:
        super().__init__(root, label)
        self.fail_on = fail_on

    def write_text(self, rel: str, content: str) -> None:
        if rel == self.fail_on:
            cause = PermissionError(errno.EACCES, "Permission denied")
            raise FilesystemError("write", self.display(rel), cause) from cause
        super().write_text(rel, content)


def render_error(content_id: str = "instruction-pointer") -> RenderError:
    return RenderError(content_id, "boom")


class StaticProvider:
    """Provider returning a fixed list of initializers."""

    def __init__(self, *steps: Any) -> None:
        self.steps = list(steps)

    def initializers(self) -> list:
        return list(self.steps)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project(tmp_path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def home(tmp_path) -> Path:
    root = tmp_path / "home"
    root.mkdir()
    return root


@pytest.fixture
def pfs(project) -> Filesystem:
    return project_fs(project)


@pytest.fixture
def hfs(home) -> Filesystem:
    return home_fs(home)


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def renderer() -> StubRenderer:
    return StubRenderer()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_args(**overrides: Any) -> argparse.Namespace:
    """Create an argparse.Namespace with sensible test defaults."""
    defaults: dict[str, Any] = {
        "project": ".",
        "home": None,
        "dry_run": False,
        "verbose": False,
        "yes": True,
        "tools": None,
        "all": False,
        "command": "init",
    }
    defaults.update(overrides)
    return argparse.Namespace(**defaults)
