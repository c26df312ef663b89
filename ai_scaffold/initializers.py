"""Idempotent create-or-update steps: directories, config files, command sets.

Each initializer has a ``key`` that identifies the artifact it manages. Two
providers asking for the same artifact build initializers with equal keys, and
the orchestrator runs only the first of them.
"""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Mapping, Optional, Protocol

from .config import Config, FilesystemTarget, TemplateContext
from .errors import RenderError, ScaffoldError
from .fs import Filesystem
from .markers import build_frontmatter, merge_region, new_region_file, prepend_frontmatter
from .templates import AGENTS_FILE, INSTRUCTION_POINTER, PROJECT_FILE

GENERATED_HEADER = "# Generated by ai-scaffold -- do not edit directly"


class Renderer(Protocol):
    def render_instruction_pointer(self, ctx: TemplateContext) -> str: ...

    def render_agents_file(self, ctx: TemplateContext) -> str: ...

    def render_project_file(self, ctx: TemplateContext) -> str: ...

    def render_command(self, command_id: str, ctx: TemplateContext) -> str: ...


class Kind(Enum):
    DIRECTORY = "directory"
    CONFIG_FILE = "config-file"
    COMMAND_SET = "command-set"


class CommandFormat(Enum):
    MARKDOWN = "md"
    TOML = "toml"

    @property
    def ext(self) -> str:
        return "." + self.value


@dataclass(frozen=True)
class Command:
    id: str
    description: str


PROPOSAL = Command("proposal", "Scaffold a new change proposal and validate it strictly.")
APPLY = Command("apply", "Implement an approved change and keep its tasks in sync.")
DEFAULT_COMMANDS = (PROPOSAL, APPLY)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class ApplyResult:
    """Paths created or updated, each list an insertion-ordered set."""
    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)

    def add_created(self, path: str) -> None:
        if path not in self.created:
            self.created.append(path)

    def add_updated(self, path: str) -> None:
        if path not in self.updated:
            self.updated.append(path)

    def extend(self, other: ApplyResult) -> None:
        for path in other.created:
            self.add_created(path)
        for path in other.updated:
            self.add_updated(path)

    def merge(self, other: ApplyResult) -> ApplyResult:
        merged = ApplyResult(list(self.created), list(self.updated))
        merged.extend(other)
        return merged

    def is_empty(self) -> bool:
        return not self.created and not self.updated

    def total(self) -> int:
        return len(self.created) + len(self.updated)


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


def normalize_path(path: str) -> str:
    """Clean a relative POSIX path (``./a//b/`` -> ``a/b``)."""
    cleaned = posixpath.normpath(path.replace("\\", "/")).lstrip("/")
    if not path.strip() or cleaned in (".", ""):
        raise ValueError(f"invalid path: {path!r}")
    return cleaned


class Initializer(ABC):
    kind: Kind

    def __init__(self, target: FilesystemTarget = FilesystemTarget.PROJECT) -> None:
        self.target = target

    @property
    def targets_home(self) -> bool:
        return self.target is FilesystemTarget.HOME

    def display(self, path: str) -> str:
        """Path as reported in keys and results; home paths carry ``~/``."""
        return f"~/{path}" if self.targets_home else path

    @property
    @abstractmethod
    def key(self) -> str:
        ...

    @abstractmethod
    def already_applied(self, fs: Filesystem, config: Config) -> bool:
        ...

    @abstractmethod
    def apply(self, fs: Filesystem, config: Config, renderer: Renderer) -> ApplyResult:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"


# ---------------------------------------------------------------------------
# Directory
# ---------------------------------------------------------------------------


class DirectoryInitializer(Initializer):
    kind = Kind.DIRECTORY

    def __init__(
        self,
        *paths: str,
        target: FilesystemTarget = FilesystemTarget.PROJECT,
    ) -> None:
        super().__init__(target)
        if not paths:
            raise ValueError("DirectoryInitializer needs at least one path")
        self.paths = tuple(normalize_path(p) for p in paths)

    @property
    def key(self) -> str:
        return "dir:" + ":".join(self.display(p) for p in self.paths)

    def already_applied(self, fs: Filesystem, config: Config) -> bool:
        return all(fs.is_dir(p) for p in self.paths)

    def apply(self, fs: Filesystem, config: Config, renderer: Renderer) -> ApplyResult:
        result = ApplyResult()
        with _partial_on_error(result):
            for path in self.paths:
                existed = fs.is_dir(path)
                fs.mkdir(path)
                if not existed:
                    result.add_created(self.display(path))
        return result


# ---------------------------------------------------------------------------
# Config file (single managed region)
# ---------------------------------------------------------------------------


class ConfigFileInitializer(Initializer):
    """One file holding one managed region.

    ``content_id`` picks what goes inside the region: the short instruction
    pointer (rendering failures degrade to an empty region) or the full agents
    file (rendering failures propagate).
    """

    kind = Kind.CONFIG_FILE

    def __init__(
        self,
        path: str,
        content_id: str = INSTRUCTION_POINTER,
        target: FilesystemTarget = FilesystemTarget.PROJECT,
    ) -> None:
        super().__init__(target)
        if content_id not in (INSTRUCTION_POINTER, AGENTS_FILE):
            raise ValueError(f"unknown content id: {content_id!r}")
        self.path = normalize_path(path)
        self.content_id = content_id

    @property
    def key(self) -> str:
        return "config:" + self.display(self.path)

    def already_applied(self, fs: Filesystem, config: Config) -> bool:
        return fs.exists(self.path)

    def render(self, config: Config, renderer: Renderer) -> str:
        ctx = config.template_context()
        if self.content_id == AGENTS_FILE:
            return renderer.render_agents_file(ctx)
        try:
            return renderer.render_instruction_pointer(ctx)
        except RenderError:
            return ""

    def apply(self, fs: Filesystem, config: Config, renderer: Renderer) -> ApplyResult:
        content = self.render(config, renderer)
        result = ApplyResult()
        _ensure_parent(fs, self.path)
        if not fs.exists(self.path):
            fs.write_text(self.path, new_region_file(content))
            result.add_created(self.display(self.path))
            return result
        existing = fs.read_text(self.path)
        fs.write_text(self.path, merge_region(existing, content))
        result.add_updated(self.display(self.path))
        return result


class SeedFileInitializer(Initializer):
    """A starter file written once and then left to the user.

    Unlike ``ConfigFileInitializer`` there is no managed region: an existing
    file is never read or rewritten.
    """

    kind = Kind.CONFIG_FILE

    def __init__(
        self,
        path: str,
        content_id: str = PROJECT_FILE,
        target: FilesystemTarget = FilesystemTarget.PROJECT,
    ) -> None:
        super().__init__(target)
        if content_id != PROJECT_FILE:
            raise ValueError(f"unknown content id: {content_id!r}")
        self.path = normalize_path(path)
        self.content_id = content_id

    @property
    def key(self) -> str:
        return "config:" + self.display(self.path)

    def already_applied(self, fs: Filesystem, config: Config) -> bool:
        return fs.exists(self.path)

    def apply(self, fs: Filesystem, config: Config, renderer: Renderer) -> ApplyResult:
        result = ApplyResult()
        if fs.exists(self.path):
            return result
        content = renderer.render_project_file(config.template_context())
        _ensure_parent(fs, self.path)
        fs.write_text(self.path, content + "\n")
        result.add_created(self.display(self.path))
        return result


# ---------------------------------------------------------------------------
# Command set
# ---------------------------------------------------------------------------


def escape_toml_string(value: str, multiline: bool = False) -> str:
    """Escape *value* for a TOML basic string.

    Backslashes and double quotes are always escaped. Newlines and tabs stay
    literal in multiline strings; other control characters become ``\\uXXXX``.
    """
    out = []
    for ch in value:
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\n" if multiline else "\\n")
        elif ch == "\t":
            out.append("\t" if multiline else "\\t")
        elif ord(ch) < 0x20 or ch == "\x7f":
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)


def toml_command(description: str, prompt: str) -> str:
    # A newline right after the opening """ is dropped by TOML parsers, so the
    # prompt value round-trips exactly.
    return (
        f"{GENERATED_HEADER}\n"
        f'description = "{escape_toml_string(description)}"\n'
        f'prompt = """\n{escape_toml_string(prompt, multiline=True)}"""\n'
    )


class CommandSetInitializer(Initializer):
    """Named command files under one directory, Markdown or TOML."""

    kind = Kind.COMMAND_SET

    def __init__(
        self,
        directory: str,
        fmt: CommandFormat = CommandFormat.MARKDOWN,
        commands: Iterable[Command] = DEFAULT_COMMANDS,
        target: FilesystemTarget = FilesystemTarget.PROJECT,
        frontmatter: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(target)
        self.directory = normalize_path(directory)
        self.format = fmt
        self.commands = tuple(commands)
        if not self.commands:
            raise ValueError("CommandSetInitializer needs at least one command")
        self.frontmatter = dict(frontmatter or {})

    @property
    def key(self) -> str:
        return f"commands:{self.display(self.directory)}:{self.format.value}"

    def file_path(self, command: Command) -> str:
        return f"{self.directory}/{command.id}{self.format.ext}"

    def paths(self) -> list[str]:
        return [self.file_path(cmd) for cmd in self.commands]

    def already_applied(self, fs: Filesystem, config: Config) -> bool:
        return all(fs.exists(p) for p in self.paths())

    def frontmatter_for(self, command: Command) -> str:
        if command.id in self.frontmatter:
            return self.frontmatter[command.id].strip()
        return build_frontmatter({"description": command.description})

    def apply(self, fs: Filesystem, config: Config, renderer: Renderer) -> ApplyResult:
        ctx = config.template_context()
        result = ApplyResult()
        fs.mkdir(self.directory)
        with _partial_on_error(result):
            for command in self.commands:
                self._apply_one(fs, command, renderer.render_command(command.id, ctx), result)
        return result

    def _apply_one(self, fs: Filesystem, command: Command, body: str, result: ApplyResult) -> None:
        path = self.file_path(command)
        existed = fs.exists(path)
        if self.format is CommandFormat.TOML:
            fs.write_text(path, toml_command(command.description, body))
        elif existed:
            merged = merge_region(fs.read_text(path), body)
            fs.write_text(path, prepend_frontmatter(merged, self.frontmatter_for(command)))
        else:
            fs.write_text(path, self._new_markdown(command, body))
        if existed:
            result.add_updated(self.display(path))
        else:
            result.add_created(self.display(path))

    def _new_markdown(self, command: Command, body: str) -> str:
        frontmatter = self.frontmatter_for(command)
        if not frontmatter:
            return new_region_file(body)
        return frontmatter + "\n\n" + new_region_file(body)


def _ensure_parent(fs: Filesystem, path: str) -> None:
    parent = posixpath.dirname(path)
    if parent:
        fs.mkdir(parent)


@contextmanager
def _partial_on_error(result: ApplyResult) -> Iterator[None]:
    """Attach what was written so far to a failure raised inside the block."""
    try:
        yield
    except ScaffoldError as exc:
        exc.partial = result
        raise
