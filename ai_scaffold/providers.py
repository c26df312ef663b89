"""Tool integrations as rows of one descriptor table.

Every supported assistant needs the same three things: a command directory,
the command files inside it and, for some tools, an instruction file at the
project root. ``ToolProvider`` turns one ``ToolDescriptor`` row into those
initializers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from .config import Config, FilesystemTarget
from .initializers import (
    DEFAULT_COMMANDS,
    CommandFormat,
    CommandSetInitializer,
    ConfigFileInitializer,
    DirectoryInitializer,
    Initializer,
    SeedFileInitializer,
)
from .templates import AGENTS_FILE, INSTRUCTION_POINTER, PROJECT_FILE


class Provider(Protocol):
    def initializers(self) -> list[Initializer]: ...


@dataclass(frozen=True)
class ToolDescriptor:
    id: str
    name: str
    priority: int
    # "{ns}" is replaced by the configured namespace.
    command_dir: str
    format: CommandFormat = CommandFormat.MARKDOWN
    config_file: Optional[str] = None
    commands_in_home: bool = False

    def command_path(self, namespace: str) -> str:
        return self.command_dir.replace("{ns}", namespace)


MD = CommandFormat.MARKDOWN
TOML = CommandFormat.TOML

TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor("claude-code", "Claude Code", 1, ".claude/commands/{ns}", MD, "CLAUDE.md"),
    ToolDescriptor("cline", "Cline", 2, ".clinerules/commands/{ns}", MD, "CLINE.md"),
    ToolDescriptor("costrict", "CoStrict", 3, ".costrict/commands/{ns}", MD, "COSTRICT.md"),
    ToolDescriptor("qoder", "Qoder", 4, ".qoder/commands/{ns}", MD, "QODER.md"),
    ToolDescriptor("codebuddy", "CodeBuddy", 5, ".codebuddy/commands/{ns}", MD, "CODEBUDDY.md"),
    ToolDescriptor("qwen", "Qwen Code", 6, ".qwen/commands/{ns}", MD, "QWEN.md"),
    ToolDescriptor("antigravity", "Antigravity", 7, ".agent/workflows", MD, "AGENTS.md"),
    ToolDescriptor("gemini", "Gemini CLI", 8, ".gemini/commands/{ns}", TOML),
    ToolDescriptor("cursor", "Cursor", 10, ".cursor/commands/{ns}"),
    ToolDescriptor("aider", "Aider", 12, ".aider/commands/{ns}"),
    ToolDescriptor("continue", "Continue", 13, ".continue/commands/{ns}"),
    ToolDescriptor("tabnine", "Tabnine", 15, ".tabnine/commands/{ns}"),
    ToolDescriptor("windsurf", "Windsurf", 17, ".windsurf/commands/{ns}"),
    ToolDescriptor("kilocode", "Kilocode", 18, ".kilocode/commands/{ns}"),
    ToolDescriptor("codex", "Codex CLI", 19, ".codex/prompts", MD, "AGENTS.md", commands_in_home=True),
    ToolDescriptor("crush", "Crush", 20, ".crush/commands/{ns}", MD, "CRUSH.md"),
    ToolDescriptor("opencode", "OpenCode", 21, ".opencode/command/{ns}"),
)

TOOLS_BY_ID = {t.id: t for t in TOOLS}


class ToolProvider:
    def __init__(self, descriptor: ToolDescriptor, config: Config) -> None:
        self.descriptor = descriptor
        self.config = config

    def __repr__(self) -> str:
        return f"ToolProvider({self.descriptor.id!r})"

    @property
    def command_target(self) -> FilesystemTarget:
        if self.descriptor.commands_in_home:
            return FilesystemTarget.HOME
        return FilesystemTarget.PROJECT

    def initializers(self) -> list[Initializer]:
        d = self.descriptor
        command_dir = d.command_path(self.config.namespace)
        target = self.command_target
        steps: list[Initializer] = [DirectoryInitializer(command_dir, target=target)]
        if d.config_file:
            steps.append(ConfigFileInitializer(d.config_file, INSTRUCTION_POINTER))
        steps.append(CommandSetInitializer(command_dir, d.format, DEFAULT_COMMANDS, target=target))
        return steps


class WorkspaceProvider:
    """The shared spec workspace every tool points at."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def __repr__(self) -> str:
        return "WorkspaceProvider()"

    def initializers(self) -> list[Initializer]:
        c = self.config
        return [
            DirectoryInitializer(c.base_dir, c.specs_dir, c.changes_dir),
            ConfigFileInitializer(c.agents_file, AGENTS_FILE),
            SeedFileInitializer(c.project_file, PROJECT_FILE),
        ]
