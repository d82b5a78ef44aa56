"""Tests for the scr4tch CLI."""

from collections.abc import Iterator

import pytest
from loguru import logger
from typer.testing import CliRunner

from scr4tch.cli import app, describe
from scr4tch.models.block import Block

runner = CliRunner()


@pytest.fixture(autouse=True)
def _drop_cli_log_sinks() -> Iterator[None]:
    """The CLI callback points loguru at the runner's stderr; detach it afterwards."""
    yield
    logger.remove()


def test_outline_prints_the_block_tree() -> None:
    result = runner.invoke(app, ["outline", "welcome"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "Welcome to SCR4TCH"
    assert "  0. Text Block: Notes are built from blocks." in lines
    assert "  2. Accordion: h2 Under the fold" in lines
    assert "    1. Code Block: python" in lines


def test_outline_with_ids() -> None:
    result = runner.invoke(app, ["outline", "plan", "--ids"])
    assert result.exit_code == 0
    assert "[id=" in result.output
    assert "Columns: 2:1" in result.output


def test_outline_unknown_sample_fails() -> None:
    result = runner.invoke(app, ["outline", "nope"])
    assert result.exit_code == 1


def test_check_passes_for_every_sample() -> None:
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 0
    for name in ("welcome", "plan", "scratch"):
        assert f"{name}: ok after" in result.output


def test_check_single_sample_without_edits() -> None:
    result = runner.invoke(app, ["--verbose", "check", "--sample", "scratch", "--no-shuffle"])
    assert result.exit_code == 0
    assert "scratch: ok after 0 edits" in result.output


def test_samples_lists_names() -> None:
    result = runner.invoke(app, ["samples"])
    assert result.exit_code == 0
    assert "plan" in result.output
    assert "Project plan" in result.output


def test_search_finds_matching_samples() -> None:
    result = runner.invoke(app, ["search", "ROADMAP"])
    assert result.exit_code == 0
    assert result.output.split() == ["plan"]


def test_search_without_hits_fails() -> None:
    result = runner.invoke(app, ["search", "zebra-crossing"])
    assert result.exit_code == 1


def test_describe() -> None:
    assert describe(Block.table(2, 3)) == "Table: 2x3"
    assert describe(Block.list_block()) == "Bullet List: 1 items"
    assert describe(Block.text()) == "Text Block"
