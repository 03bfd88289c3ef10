"""Tests for the bench host, layout loading and command handlers."""

import json

import pytest
from pydantic import ValidationError

from cli.bench import Bench, BenchError
from cli.commands import handle_read, handle_run, handle_status, handle_tick, handle_write
from cli.layout import HostLayout, load_layout
from cli.models import ReadCommand, RunCommand, StatusCommand, TickCommand, WriteCommand
from cli.repl import dispatch_command
from relay.exceptions import MalformedConfigError


LAYOUT = {
    "grids": [
        {
            "name": "Ship",
            "blocks": [
                {
                    "name": "Relay",
                    "type": "program",
                    "custom_data": "[transmitter]\nblock=Cockpit\nsurface=1\ntag=hud\n",
                },
                {"name": "Cockpit", "type": "panel", "surfaces": ["speed", "fuel"]},
                {"name": "Door", "type": "terminal"},
            ],
        },
        {
            "name": "Station",
            "blocks": [
                {
                    "name": "Relay",
                    "type": "program",
                    "custom_data": "[receiver]\nblock=Screen1\ntag=hud\n\n[receiver]\nblock=Screen2\ntag=hud\n",
                },
                {"name": "Screen1"},
                {"name": "Screen2"},
            ],
        },
        {
            "name": "Derelict",
            "blocks": [{"name": "Old Panel", "surfaces": ["dusty"]}],
        },
    ]
}


@pytest.fixture
def layout():
    return HostLayout.model_validate(LAYOUT)


@pytest.fixture
def bench(layout):
    return Bench(layout)


class TestLayout:
    """Test host layout validation and loading."""

    def test_defaults(self, layout):
        screen = layout.grids[1].blocks[1]

        assert screen.type == "panel"
        assert screen.surfaces == [""]
        assert screen.running is True

    def test_duplicate_block_names_rejected(self):
        with pytest.raises(ValidationError):
            HostLayout.model_validate({"grids": [{"name": "G", "blocks": [{"name": "A"}, {"name": "A"}]}]})

    def test_unknown_block_type_rejected(self):
        with pytest.raises(ValidationError):
            HostLayout.model_validate({"grids": [{"name": "G", "blocks": [{"name": "A", "type": "turret"}]}]})

    def test_load_layout_reads_custom_data_file(self, tmp_path):
        (tmp_path / "relay.ini").write_text("[transmitter]\nblock=Cockpit\n")
        layout_path = tmp_path / "layout.json"
        layout_path.write_text(json.dumps({
            "grids": [{"name": "G", "blocks": [
                {"name": "PB", "type": "program", "custom_data_file": "relay.ini"},
                {"name": "Cockpit"},
            ]}]
        }))

        layout = load_layout(layout_path)

        assert layout.grids[0].blocks[0].custom_data == "[transmitter]\nblock=Cockpit\n"

    def test_load_layout_invalid_json(self, tmp_path):
        layout_path = tmp_path / "layout.json"
        layout_path.write_text("{ not json")

        with pytest.raises(ValidationError):
            load_layout(layout_path)


class TestBench:
    """Test the simulated multi-grid host."""

    def test_relays_booted_per_grid(self, bench):
        assert bench.grids["Ship"].program_name == "Relay"
        assert bench.grids["Station"].loop is not None
        assert bench.grids["Derelict"].loop is None
        assert len(bench.loops()) == 2

    def test_tick_replicates_across_grids(self, bench):
        report = bench.tick()

        assert report.transmitted == 1
        assert report.writes == 2
        _, screen = bench.find_surface("Station/Screen2", 0)
        assert screen.read_text() == "fuel"

    def test_tick_sums_reports(self, bench):
        report = bench.tick(3)

        assert report.transmitted == 1
        assert report.unchanged == 2

    def test_find_surface_unqualified(self, bench):
        grid_name, surface = bench.find_surface("Cockpit", 1)

        assert grid_name == "Ship"
        assert surface.read_text() == "fuel"

    def test_find_surface_qualified_program_block(self, bench):
        grid_name, _ = bench.find_surface("Station/Relay", 0)

        assert grid_name == "Station"

    @pytest.mark.parametrize("name,index,message", [
        ("Nowhere", 0, "Unknown block"),
        ("Moon/Cockpit", 0, "Unknown grid"),
        ("Door", 0, "no text surfaces"),
        ("Cockpit", 5, "no surface 5"),
        ("Relay", 0, r"several grids \(Ship, Station\)"),
    ])
    def test_find_surface_errors(self, bench, name, index, message):
        with pytest.raises(BenchError, match=message):
            bench.find_surface(name, index)

    def test_block_names(self, bench):
        assert bench.block_names() == ["Cockpit", "Old Panel", "Relay", "Screen1", "Screen2"]

    def test_malformed_program_config_is_fatal(self):
        layout = HostLayout.model_validate({"grids": [{"name": "G", "blocks": [
            {"name": "PB", "type": "program", "custom_data": "[a]\nk=v\n[b]"},
        ]}]})

        with pytest.raises(MalformedConfigError):
            Bench(layout)

    def test_stopped_program_gives_no_relay(self):
        layout = HostLayout.model_validate({"grids": [{"name": "G", "blocks": [
            {"name": "PB", "type": "program", "running": False},
        ]}]})

        assert Bench(layout).loops() == []


class TestCommandHandlers:
    """Test command handlers against the bench."""

    def test_write_tick_read(self, bench):
        assert handle_write(WriteCommand(block="Cockpit", surface=1, text="Fuel: 42%"), bench) == "Wrote 9 chars"

        summary = handle_tick(TickCommand(count=1), bench)
        output = handle_read(ReadCommand(block="Screen1"), bench)

        assert "sent 1" in summary
        assert "written 2" in summary
        assert output == "[Station/Screen1#0]\nFuel: 42%"

    def test_read_ambiguous_block(self, bench):
        output = handle_read(ReadCommand(block="Relay"), bench)

        assert output.startswith("Error: Block Relay exists on several grids")

    def test_read_unknown_block(self, bench):
        assert handle_read(ReadCommand(block="Nowhere"), bench) == "Error: Unknown block: Nowhere"

    def test_write_unknown_block(self, bench):
        assert handle_write(WriteCommand(block="Nowhere", text="x"), bench).startswith("Error:")

    def test_tick_without_relays(self):
        bench = Bench(HostLayout.model_validate({"grids": [{"name": "G", "blocks": []}]}))

        assert handle_tick(TickCommand(), bench) == "No relay is running on any grid"

    def test_run_drives_scheduler(self, bench):
        bench.scheduler.interval = 0.01

        output = handle_run(RunCommand(seconds=0.05), bench)

        assert output.startswith("Ran ")
        assert bench.scheduler.ticks >= 1
        _, screen = bench.find_surface("Screen1", 0)
        assert screen.read_text() == "fuel"

    def test_status(self, bench):
        bench.tick()

        output = handle_status(StatusCommand(), bench)

        assert "Ship: relay on Relay, 1 cycle(s)" in output
        assert "tx hud <- Cockpit#1" in output
        assert "rx hud -> Screen1#0, Screen2#0" in output
        assert "Derelict: no relay" in output
        assert "messages sent: 1" in output

    def test_dispatch(self, bench):
        assert dispatch_command(StatusCommand(), bench) == handle_status(StatusCommand(), bench)
        assert dispatch_command(object(), bench).startswith("Unknown command type")
