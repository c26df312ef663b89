"""Project configuration and the template context derived from it."""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import ConfigError

CONFIG_FILENAME = ".ai-scaffold.json"

DEFAULT_BASE_DIR = "ai-docs"
DEFAULT_NAMESPACE = "scaffold"

# Keys accepted in .ai-scaffold.json; anything else is ignored.
CONFIG_KEYS = ("base_dir", "namespace")


class FilesystemTarget(Enum):
    PROJECT = "project"
    HOME = "home"


@dataclass(frozen=True)
class Config:
    base_dir: str = DEFAULT_BASE_DIR
    namespace: str = DEFAULT_NAMESPACE

    @property
    def specs_dir(self) -> str:
        return posixpath.join(self.base_dir, "specs")

    @property
    def changes_dir(self) -> str:
        return posixpath.join(self.base_dir, "changes")

    @property
    def project_file(self) -> str:
        return posixpath.join(self.base_dir, "project.md")

    @property
    def agents_file(self) -> str:
        return posixpath.join(self.base_dir, "AGENTS.md")

    def template_context(self) -> TemplateContext:
        return TemplateContext(
            base_dir=self.base_dir,
            specs_dir=self.specs_dir,
            changes_dir=self.changes_dir,
            project_file=self.project_file,
            agents_file=self.agents_file,
        )

    @classmethod
    def load(cls, project_root: Path) -> Config:
        """Read ``.ai-scaffold.json`` from *project_root*, falling back to defaults."""
        path = project_root / CONFIG_FILENAME
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigError(f"cannot read {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a JSON object")

        values: dict[str, str] = {}
        for key in CONFIG_KEYS:
            if key not in data:
                continue
            val = data[key]
            if not isinstance(val, str) or not val.strip():
                raise ConfigError(f"{path}: '{key}' must be a non-empty string")
            values[key] = val.strip().strip("/")
        return cls(**values)


@dataclass(frozen=True)
class TemplateContext:
    base_dir: str
    specs_dir: str
    changes_dir: str
    project_file: str
    agents_file: str

    def as_dict(self) -> dict[str, str]:
        return {
            "base_dir": self.base_dir,
            "specs_dir": self.specs_dir,
            "changes_dir": self.changes_dir,
            "project_file": self.project_file,
            "agents_file": self.agents_file,
        }
