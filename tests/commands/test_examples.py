"""Tests for --examples flag on CLI commands.

Parametrized to cover all commands that define examples text.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from xrdctl.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["xrdctl inspect host-meta.xml"]),
    (["convert", "--examples"], ["--to json --output host-meta.json"]),
    (["inspect", "--examples"], ["xrdctl --json inspect"]),
    (["resolve", "--examples"], ["--resource acct:bob@example.com"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples_flag(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


@pytest.mark.parametrize("command", ["convert", "inspect", "resolve"])
def test_examples_listed_in_help(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, [command, "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output


@pytest.mark.parametrize("args", [["--help"], ["convert", "--help"], ["resolve", "--help"]])
def test_help_points_at_examples(cli_runner: CliRunner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert "Run with --examples for sample invocations." in result.output


def test_examples_are_indented_consistently(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["inspect", "--examples"])
    lines = result.output.splitlines()[2:]
    assert lines == ["  xrdctl inspect host-meta.xml", "  xrdctl --json inspect bob.jrd"]
