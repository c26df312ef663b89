"""Tests for the tool descriptor table and providers."""

from ai_scaffold.config import Config
from ai_scaffold.initializers import (
    CommandFormat,
    CommandSetInitializer,
    ConfigFileInitializer,
    DirectoryInitializer,
)
from ai_scaffold.orchestrator import Orchestrator
from ai_scaffold.providers import TOOLS, TOOLS_BY_ID, ToolProvider, WorkspaceProvider
from ai_scaffold.templates import AGENTS_FILE, INSTRUCTION_POINTER


class TestToolTable:
    def test_ids_unique(self):
        ids = [t.id for t in TOOLS]
        assert len(ids) == len(set(ids)) == 17

    def test_gemini_uses_toml(self):
        assert TOOLS_BY_ID["gemini"].format is CommandFormat.TOML
        assert TOOLS_BY_ID["gemini"].config_file is None

    def test_codex_commands_live_in_home(self):
        codex = TOOLS_BY_ID["codex"]
        assert codex.commands_in_home
        assert codex.config_file == "AGENTS.md"


class TestToolProvider:
    def test_claude_initializers(self):
        steps = ToolProvider(TOOLS_BY_ID["claude-code"], Config()).initializers()
        assert [type(s) for s in steps] == [
            DirectoryInitializer,
            ConfigFileInitializer,
            CommandSetInitializer,
        ]
        assert [s.key for s in steps] == [
            "dir:.claude/commands/scaffold",
            "config:CLAUDE.md",
            "commands:.claude/commands/scaffold:md",
        ]
        assert steps[1].content_id == INSTRUCTION_POINTER

    def test_namespace_applied(self):
        steps = ToolProvider(TOOLS_BY_ID["cursor"], Config(namespace="acme")).initializers()
        assert steps[0].key == "dir:.cursor/commands/acme"

    def test_no_config_file(self):
        steps = ToolProvider(TOOLS_BY_ID["cursor"], Config()).initializers()
        assert not any(isinstance(s, ConfigFileInitializer) for s in steps)

    def test_codex_splits_targets(self):
        steps = ToolProvider(TOOLS_BY_ID["codex"], Config()).initializers()
        keys = [s.key for s in steps]
        assert keys == ["dir:~/.codex/prompts", "config:AGENTS.md", "commands:~/.codex/prompts:md"]
        assert steps[0].targets_home
        assert not steps[1].targets_home

    def test_shared_agents_md_deduplicates(self, pfs, hfs, config, renderer):
        orch = Orchestrator(pfs, hfs, config, renderer)
        providers = [ToolProvider(TOOLS_BY_ID[t], config) for t in ("antigravity", "codex")]
        result = orch.run(providers)
        assert result.created.count("AGENTS.md") == 1
        assert "~/.codex/prompts/proposal.md" in result.created


class TestWorkspaceProvider:
    def test_initializers(self):
        steps = WorkspaceProvider(Config(base_dir="specs-home")).initializers()
        assert steps[0].key == "dir:specs-home:specs-home/specs:specs-home/changes"
        assert steps[1].key == "config:specs-home/AGENTS.md"
        assert steps[1].content_id == AGENTS_FILE
        assert steps[2].key == "config:specs-home/project.md"

    def test_apply(self, pfs, hfs, config, renderer, project):
        orch = Orchestrator(pfs, hfs, config, renderer)
        result = orch.run([WorkspaceProvider(config)])
        assert result.created == [
            "ai-docs",
            "ai-docs/specs",
            "ai-docs/changes",
            "ai-docs/AGENTS.md",
            "ai-docs/project.md",
        ]
        assert (project / "ai-docs" / "changes").is_dir()

    def test_project_file_left_alone_on_rerun(self, pfs, hfs, config, renderer, project):
        orch = Orchestrator(pfs, hfs, config, renderer)
        orch.run([WorkspaceProvider(config)])
        project_md = project / "ai-docs" / "project.md"
        project_md.write_text("# Acme\n\nOur own description.\n")
        second = orch.run([WorkspaceProvider(config)])
        assert project_md.read_text() == "# Acme\n\nOur own description.\n"
        assert "ai-docs/project.md" not in second.created
        assert "ai-docs/project.md" not in second.updated
