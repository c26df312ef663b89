"""Render the bundled Markdown templates.

Templates live in ``ai_scaffold/prompts/`` as package data and use
``string.Template`` placeholders (``$agents_file``, ``$specs_dir``, ...) filled
from a ``TemplateContext``.
"""

from __future__ import annotations

from importlib import resources
from string import Template

from .config import TemplateContext
from .errors import RenderError

INSTRUCTION_POINTER = "instruction-pointer"
AGENTS_FILE = "agents-file"
PROJECT_FILE = "project-file"

_TEMPLATE_FILES = {
    INSTRUCTION_POINTER: "instruction_pointer.md",
    AGENTS_FILE: "agents.md",
    PROJECT_FILE: "project.md",
}

COMMAND_TEMPLATES = {
    "proposal": "commands/proposal.md",
    "apply": "commands/apply.md",
}


class TemplateRenderer:
    """Pure renderer: the same (content id, context) always gives the same text."""

    def __init__(self, package: str = "ai_scaffold") -> None:
        self.package = package

    def render_instruction_pointer(self, ctx: TemplateContext) -> str:
        return self._render(INSTRUCTION_POINTER, _TEMPLATE_FILES[INSTRUCTION_POINTER], ctx)

    def render_agents_file(self, ctx: TemplateContext) -> str:
        return self._render(AGENTS_FILE, _TEMPLATE_FILES[AGENTS_FILE], ctx)

    def render_project_file(self, ctx: TemplateContext) -> str:
        return self._render(PROJECT_FILE, _TEMPLATE_FILES[PROJECT_FILE], ctx)

    def render_command(self, command_id: str, ctx: TemplateContext) -> str:
        name = COMMAND_TEMPLATES.get(command_id)
        if name is None:
            raise RenderError(f"command:{command_id}", "unknown command")
        return self._render(f"command:{command_id}", name, ctx)

    def _render(self, content_id: str, name: str, ctx: TemplateContext) -> str:
        try:
            source = resources.files(self.package).joinpath("prompts", *name.split("/"))
            text = source.read_text(encoding="utf-8")
        except (OSError, ModuleNotFoundError) as exc:
            raise RenderError(content_id, f"template {name} not found") from exc
        try:
            rendered = Template(text).substitute(ctx.as_dict())
        except KeyError as exc:
            raise RenderError(content_id, f"unknown placeholder ${exc.args[0]}") from exc
        except ValueError as exc:
            raise RenderError(content_id, str(exc)) from exc
        return rendered.rstrip("\n")
