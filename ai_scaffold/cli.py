"""ai-scaffold command-line interface."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from .config import Config
from .console import C, error, log, section_header, summary_line
from .errors import ConfigError, OrchestrationError
from .fs import home_fs, project_fs
from .initializers import ApplyResult
from .orchestrator import Orchestrator, PlannedStep
from .providers import Provider, WorkspaceProvider
from .registry import Registry, build_registry
from .templates import TemplateRenderer

try:
    import curses

    _HAS_CURSES = True
except ImportError:
    _HAS_CURSES = False


# ---------------------------------------------------------------------------
# CLI setup
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-scaffold",
        description="Set up spec-driven workflow files for AI coding assistants.",
    )
    parser.add_argument("--project", default=".", metavar="PATH", help="Project root (default: cwd)")
    parser.add_argument("--home", default=None, metavar="PATH", help="Home directory for home-level files")
    parser.add_argument("--dry-run", action="store_true", help="Preview changes without writing")
    parser.add_argument("--verbose", action="store_true", help="Detailed output")
    parser.add_argument("--yes", action="store_true", help="Skip prompts and accept defaults")

    sub = parser.add_subparsers(dest="command")
    init_p = sub.add_parser("init", help="Create or update files for the selected tools")
    init_p.add_argument("--tools", default=None, help="Comma-separated tool ids (e.g. claude-code,cursor)")
    init_p.add_argument("--all", action="store_true", help="Configure every supported tool")
    sub.add_parser("list", help="List supported tools")
    sub.add_parser("status", help="Show which tools are already configured")

    return parser


# ---------------------------------------------------------------------------
# Interactive selection
# ---------------------------------------------------------------------------


def _curses_multi_select(
    stdscr: Any,
    prompt: str,
    options: list[tuple[str, str]],
    defaults: Optional[list[str]],
) -> list[str]:
    """Interactive multi-select using curses. Called via curses.wrapper."""
    curses.curs_set(0)
    curses.use_default_colors()
    selected = set(defaults or [])
    cursor = 0
    hint = "(↑↓ navigate, Space toggle, a all, Enter confirm, q abort)"

    while True:
        stdscr.clear()
        max_y, max_x = stdscr.getmaxyx()
        stdscr.addnstr(0, 0, prompt, max_x - 1)
        stdscr.addnstr(1, 0, hint, max_x - 1)

        for i, (oid, label) in enumerate(options):
            if i + 3 >= max_y:
                break
            marker = "x" if oid in selected else " "
            prefix = ">" if i == cursor else " "
            stdscr.addnstr(i + 3, 0, f"  {prefix} [{marker}] {label}", max_x - 1)

        stdscr.refresh()
        key = stdscr.getch()

        if key == curses.KEY_UP and cursor > 0:
            cursor -= 1
        elif key == curses.KEY_DOWN and cursor < len(options) - 1:
            cursor += 1
        elif key == ord(" "):
            selected ^= {options[cursor][0]}
        elif key == ord("a"):
            all_ids = {o for o, _ in options}
            selected = set() if selected == all_ids else all_ids
        elif key in (curses.KEY_ENTER, 10, 13):
            return [o for o, _ in options if o in selected]
        elif key == ord("q") or key == 27:
            return list(defaults or [])


def _fallback_multi_select(
    prompt: str,
    options: list[tuple[str, str]],
    defaults: Optional[list[str]],
) -> list[str]:
    """Comma-separated number input for non-TTY environments."""
    print(f"\n{prompt}")
    for i, (oid, label) in enumerate(options, 1):
        marker = "*" if defaults and oid in defaults else " "
        print(f"  {i}. [{marker}] {label}")
    if defaults:
        print("\n  (* = already configured, press Enter to accept)")
    raw = input("\n  Select (comma-separated numbers, or 'all'): ").strip()
    if not raw:
        return defaults or []
    if raw.lower() == "all":
        return [oid for oid, _ in options]
    selected = []
    for part in raw.split(","):
        part = part.strip()
        if part.isdigit():
            idx = int(part) - 1
            if 0 <= idx < len(options) and options[idx][0] not in selected:
                selected.append(options[idx][0])
    return selected


def multi_select(
    prompt: str,
    options: list[tuple[str, str]],
    defaults: Optional[list[str]] = None,
    auto_accept: bool = False,
) -> list[str]:
    """Multi-select with fallback chain: auto_accept -> curses -> comma-separated."""
    if not options:
        return []

    if auto_accept:
        print(f"\n{prompt}")
        for oid in (defaults or []):
            label = next((lbl for o, lbl in options if o == oid), oid)
            print(f"  {C.DIM}[auto]{C.RESET} {label}")
        return defaults or []

    if _HAS_CURSES and sys.stdin.isatty() and sys.stdout.isatty():
        try:
            return curses.wrapper(_curses_multi_select, prompt, options, defaults)
        except curses.error:
            pass

    return _fallback_multi_select(prompt, options, defaults)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _load(args: argparse.Namespace) -> tuple[Config, Registry, Orchestrator]:
    project_root = Path(args.project).expanduser()
    home_root = Path(args.home).expanduser() if args.home else Path.home()
    try:
        config = Config.load(project_root)
    except ConfigError as exc:
        error(str(exc))
        sys.exit(1)
    orchestrator = Orchestrator(
        project_fs(project_root),
        home_fs(home_root),
        config,
        TemplateRenderer(),
        verbose=args.verbose,
    )
    return config, build_registry(config), orchestrator


def is_configured(orchestrator: Orchestrator, provider: Provider) -> bool:
    return all(step.already_applied for step in orchestrator.plan([provider]))


def configured_tools(registry: Registry, orchestrator: Orchestrator) -> list[str]:
    return [r.id for r in registry.all() if is_configured(orchestrator, r.provider)]


def parse_tool_list(raw: str) -> list[str]:
    ids: list[str] = []
    for part in raw.split(","):
        part = part.strip()
        if part and part not in ids:
            ids.append(part)
    return ids


def print_result(result: ApplyResult) -> None:
    for path in result.created:
        log(f"{C.GREEN}Created{C.RESET} {path}")
    for path in result.updated:
        log(f"{C.YELLOW}Updated{C.RESET} {path}")


def print_plan(steps: list[PlannedStep]) -> None:
    for step in steps:
        action = "update" if step.already_applied else "create"
        log(f"{C.MAGENTA}[dry-run]{C.RESET} Would {action} {C.BOLD}{step.key}{C.RESET}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_init(args: argparse.Namespace) -> None:
    config, registry, orchestrator = _load(args)

    if args.all:
        tool_ids = registry.ids()
    elif args.tools:
        tool_ids = parse_tool_list(args.tools)
        unknown = [t for t in tool_ids if t not in registry]
        if unknown:
            error(f"unknown tool(s) {', '.join(unknown)}. Options: {', '.join(registry.ids())}")
            sys.exit(1)
    else:
        options = [(r.id, f"{r.name:14s} {C.DIM}({r.id}){C.RESET}") for r in registry.all()]
        tool_ids = multi_select(
            "Which AI tools should be configured?",
            options,
            defaults=configured_tools(registry, orchestrator),
            auto_accept=args.yes,
        )
    if not tool_ids:
        print(f"  {C.DIM}No tools selected. Aborted.{C.RESET}")
        return

    providers: list[Provider] = [WorkspaceProvider(config)]
    providers.extend(registry.get(t).provider for t in tool_ids)

    if args.dry_run:
        section_header("Plan")
        steps = orchestrator.plan(providers)
        print_plan(steps)
        section_header("Summary")
        pending = sum(1 for s in steps if not s.already_applied)
        summary_line("Steps", len(steps), f"{pending} new")
        print(f"  {C.MAGENTA}(dry-run){C.RESET}")
        print()
        return

    section_header(f"Initializing {config.base_dir}")
    try:
        result = orchestrator.run(providers)
    except OrchestrationError as exc:
        print_result(exc.result)
        error(str(exc))
        sys.exit(1)
    print_result(result)

    section_header("Summary")
    summary_line("Tools", len(tool_ids), ", ".join(tool_ids))
    summary_line("Created", len(result.created))
    summary_line("Updated", len(result.updated))
    print()


def cmd_list(args: argparse.Namespace) -> None:
    config, registry, _ = _load(args)
    regs = registry.all()
    section_header(f"Tools ({len(regs)})")
    for r in regs:
        d = r.provider.descriptor
        config_file = d.config_file or "-"
        where = "~/" if d.commands_in_home else ""
        print(
            f"  {C.BOLD}{r.id:12s}{C.RESET} {r.name:14s} {C.DIM}[{d.format.value:4s}]{C.RESET}  "
            f"{where}{d.command_path(config.namespace)}  {C.DIM}{config_file}{C.RESET}"
        )
    print()


def cmd_status(args: argparse.Namespace) -> None:
    config, registry, orchestrator = _load(args)

    section_header("Workspace")
    ready = is_configured(orchestrator, WorkspaceProvider(config))
    state = f"{C.GREEN}ready{C.RESET}" if ready else f"{C.DIM}not initialized{C.RESET}"
    print(f"  {C.BOLD_WHITE}{config.base_dir}{C.RESET} -> {state}")

    configured = configured_tools(registry, orchestrator)
    section_header(f"Tools ({len(configured)}/{registry.count()} configured)")
    for r in registry.all():
        mark = f"{C.GREEN}configured{C.RESET}" if r.id in configured else f"{C.DIM}-{C.RESET}"
        print(f"  {C.BOLD}{r.id:12s}{C.RESET} {r.name:14s} {mark}")
    print()


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.command == "init":
        cmd_init(args)
    elif args.command == "list":
        cmd_list(args)
    elif args.command == "status":
        cmd_status(args)


if __name__ == "__main__":
    main()
