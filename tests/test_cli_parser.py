"""Tests for bench CLI command parsing."""

import pytest

from cli.models import ReadCommand, RunCommand, StatusCommand, TickCommand, WriteCommand
from cli.parser import ParseError, parse_command


class TestParseCommand:
    """Test parsing of each command."""

    def test_tick_default_count(self):
        assert parse_command("tick") == TickCommand(count=1)

    def test_tick_with_count(self):
        assert parse_command("tick 5") == TickCommand(count=5)

    @pytest.mark.parametrize("line", ["tick 0", "tick -1", "tick many", "tick 1 2"])
    def test_tick_invalid(self, line):
        with pytest.raises(ParseError):
            parse_command(line)

    def test_run(self):
        assert parse_command("run 2.5") == RunCommand(seconds=2.5)

    @pytest.mark.parametrize("line", ["run", "run soon", "run 0", "run 1 2"])
    def test_run_invalid(self, line):
        with pytest.raises(ParseError):
            parse_command(line)

    def test_read_default_surface(self):
        assert parse_command("read Screen1") == ReadCommand(block="Screen1", surface=0)

    def test_read_quoted_block_and_surface(self):
        assert parse_command("read 'Wall LCD' 2") == ReadCommand(block="Wall LCD", surface=2)

    def test_read_invalid(self):
        with pytest.raises(ParseError):
            parse_command("read")

    def test_write_default_surface(self):
        assert parse_command("write Cockpit hello world") == WriteCommand(
            block="Cockpit", text="hello world", surface=0
        )

    def test_write_with_surface(self):
        assert parse_command("write Cockpit 1 'Fuel: 80%'") == WriteCommand(
            block="Cockpit", text="Fuel: 80%", surface=1
        )

    def test_write_number_only_is_text(self):
        assert parse_command("write Cockpit 42") == WriteCommand(block="Cockpit", text="42", surface=0)

    def test_write_line_breaks(self):
        cmd = parse_command("write Cockpit 'A\\nB'")

        assert cmd.text == "A\nB"

    def test_write_requires_text(self):
        with pytest.raises(ParseError):
            parse_command("write Cockpit")

    def test_status(self):
        assert parse_command("status") == StatusCommand()

    def test_command_name_case_insensitive(self):
        assert parse_command("TICK") == TickCommand()

    def test_empty_command(self):
        with pytest.raises(ParseError, match="Empty command"):
            parse_command("   ")

    def test_unknown_command(self):
        with pytest.raises(ParseError, match="Unknown command"):
            parse_command("launch")

    def test_unbalanced_quotes(self):
        with pytest.raises(ParseError, match="Invalid syntax"):
            parse_command("write Cockpit 'unclosed")
