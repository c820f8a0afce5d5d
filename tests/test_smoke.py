"""Smoke tests: imports work, CLI --help works."""

from click.testing import CliRunner

from epic_layout.__main__ import main


def test_import():
    import epic_layout

    assert epic_layout.layout_epic is not None
    assert epic_layout.DEFAULT_LAYOUT_CONFIG.cell_width == 160


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Lay out a GitHub epic" in result.output
