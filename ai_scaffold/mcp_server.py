"""MCP server exposing ai-scaffold operations as structured tools."""

from __future__ import annotations

import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP

from .config import Config
from .errors import OrchestrationError, ScaffoldError
from .fs import home_fs, project_fs
from .orchestrator import Orchestrator
from .providers import Provider, WorkspaceProvider
from .registry import build_registry
from .templates import TemplateRenderer

mcp = FastMCP(
    "ai-scaffold",
    instructions="Set up spec-driven workflow files (instruction files and slash commands) "
    "for Claude Code, Cursor, Gemini CLI, Codex and other AI coding tools.",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@contextmanager
def _capture_output():
    old_out, old_err = sys.stdout, sys.stderr
    sys.stdout = buf_out = io.StringIO()
    sys.stderr = buf_err = io.StringIO()
    try:
        yield buf_out, buf_err
    finally:
        sys.stdout, sys.stderr = old_out, old_err


def _orchestrator(project: str, home: Optional[str]) -> tuple[Config, Orchestrator]:
    project_root = Path(project).expanduser()
    home_root = Path(home).expanduser() if home else Path.home()
    config = Config.load(project_root)
    orch = Orchestrator(project_fs(project_root), home_fs(home_root), config, TemplateRenderer())
    return config, orch


# ---------------------------------------------------------------------------
# Read-only tools
# ---------------------------------------------------------------------------


@mcp.tool()
def scaffold_list_tools() -> dict[str, Any]:
    """List every supported AI tool, sorted by priority."""
    registry = build_registry(Config())
    return {
        "tools": [
            {
                "id": r.id,
                "name": r.name,
                "priority": r.priority,
                "format": r.provider.descriptor.format.value,
                "config_file": r.provider.descriptor.config_file,
            }
            for r in registry.all()
        ],
    }


@mcp.tool()
def scaffold_status(project: str, home: Optional[str] = None) -> dict[str, Any]:
    """Report which tools are fully configured in a project.

    Args:
        project: Project root directory.
        home: Home directory for home-level files (defaults to the user's home).
    """
    try:
        config, orch = _orchestrator(project, home)
    except ScaffoldError as e:
        return {"success": False, "error": str(e)}
    registry = build_registry(config)
    workspace = orch.plan([WorkspaceProvider(config)])
    return {
        "success": True,
        "base_dir": config.base_dir,
        "workspace_ready": all(s.already_applied for s in workspace),
        "tools": {
            r.id: all(s.already_applied for s in orch.plan([r.provider]))
            for r in registry.all()
        },
    }


# ---------------------------------------------------------------------------
# Init tool
# ---------------------------------------------------------------------------


@mcp.tool()
def scaffold_init(
    tools: list[str],
    project: str,
    home: Optional[str] = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Create or update the workspace and the files for the given tools.

    Args:
        tools: Tool ids to configure (e.g. ["claude-code", "cursor"]).
        project: Project root directory.
        home: Home directory for home-level files (defaults to the user's home).
        dry_run: Return the planned steps without writing anything.
    """
    try:
        config, orch = _orchestrator(project, home)
    except ScaffoldError as e:
        return {"success": False, "error": str(e)}
    registry = build_registry(config)

    unknown = [t for t in tools if t not in registry]
    if unknown:
        return {"success": False, "error": f"unknown tool(s): {', '.join(unknown)}"}

    providers: list[Provider] = [WorkspaceProvider(config)]
    providers.extend(registry.get(t).provider for t in tools)

    with _capture_output():
        if dry_run:
            steps = orch.plan(providers)
            return {
                "success": True,
                "dry_run": True,
                "steps": [
                    {"key": s.key, "kind": s.kind.value, "already_applied": s.already_applied}
                    for s in steps
                ],
            }
        try:
            result = orch.run(providers)
        except OrchestrationError as e:
            return {
                "success": False,
                "error": str(e),
                "created": e.result.created,
                "updated": e.result.updated,
            }
    return {"success": True, "created": result.created, "updated": result.updated}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
