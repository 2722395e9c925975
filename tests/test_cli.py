"""Tests for the click commands, run through CliRunner."""

import pytest
from click.testing import CliRunner

from briefing_canvas.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the CLI at an empty temp config so the user's file is never read."""
    path = tmp_path / "config.yaml"
    monkeypatch.setenv("BRIEFING_CANVAS_CONFIG", str(path))
    return path


class TestAsk:
    def test_instant_renders_canvas(self, runner, config_file):
        result = runner.invoke(cli, ["ask", "Show pending approvals", "--instant"])
        assert result.exit_code == 0, result.output
        assert "Approvals" in result.output
        assert "Showing today's pending approvals." in result.output

    def test_reports_parsed_visit(self, runner, config_file):
        result = runner.invoke(cli, ["ask", "supplier visit from Mr Sharma on Friday at 3 pm", "--instant"])
        assert result.exit_code == 0, result.output
        assert "Visit parsed:" in result.output
        assert "Sharma" in result.output

    def test_reports_module(self, runner, config_file):
        result = runner.invoke(cli, ["ask", "open finance module", "--instant"])
        assert "Module:" in result.output
        assert "Finance" in result.output

    def test_bad_config_is_a_clean_error(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("settle_delay: -3\n")
        result = runner.invoke(cli, ["ask", "hello", "--instant", "--config", str(path)])
        assert result.exit_code == 1
        assert "settle_delay" in result.output

    def test_verbose_flag(self, runner, config_file):
        result = runner.invoke(cli, ["-v", "ask", "hello there", "--instant"])
        assert result.exit_code == 0, result.output


class TestChat:
    def test_commands(self, runner, config_file):
        result = runner.invoke(
            cli,
            ["chat", "--instant"],
            input="Show pending approvals\n/clear-planner\n/reset\n/quit\n",
        )
        assert result.exit_code == 0, result.output
        assert "Approvals" in result.output
        assert "Planner cleared" in result.output
        assert "Canvas cleared" in result.output

    def test_eof_exits(self, runner, config_file):
        result = runner.invoke(cli, ["chat", "--instant"], input="")
        assert result.exit_code == 0


class TestDataCommands:
    def test_calendar(self, runner):
        result = runner.invoke(cli, ["calendar", "ekadashi fasting schedule", "--date", "2026-01-14"])
        assert result.exit_code == 0, result.output
        assert "05:00 AM" in result.output

    def test_actions(self, runner):
        result = runner.invoke(cli, ["actions", "approve the invoice"])
        assert result.exit_code == 0
        lines = [line for line in result.output.splitlines() if line.strip()]
        assert len(lines) == 10
        assert all(line.startswith("[·] ") for line in lines)

    def test_follow_up_actions(self, runner):
        result = runner.invoke(cli, ["actions", "season progress", "--follow-up", "summary"])
        assert "[·] Review current progress and status" in result.output


class TestConfigCommands:
    def test_init_then_show(self, runner, tmp_path):
        path = tmp_path / "cfg" / "config.yaml"
        result = runner.invoke(cli, ["config", "init", "--path", str(path)])
        assert result.exit_code == 0, result.output
        assert path.exists()

        result = runner.invoke(cli, ["config", "show", "--path", str(path)])
        assert result.exit_code == 0
        assert "reveal_tick" in result.output

    def test_init_refuses_overwrite(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("reveal_tick: 0.5\n")
        result = runner.invoke(cli, ["config", "init", "--path", str(path)])
        assert result.exit_code == 1
        assert "already exists (use --force to overwrite)" in result.output
        assert path.read_text() == "reveal_tick: 0.5\n"

    def test_init_force_overwrites(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("reveal_tick: 0.5\n")
        result = runner.invoke(cli, ["config", "init", "--path", str(path), "--force"])
        assert result.exit_code == 0, result.output
        assert "reveal_tick: 0.02" in path.read_text()
