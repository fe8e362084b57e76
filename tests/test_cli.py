"""Tests for the command-line interface."""

import asyncio
import tempfile

import pytest
from click.testing import CliRunner

from skillshare.cli import main
from skillshare.registry.index import RegistryIndexManager
from skillshare.store.file_store import FileStore

WALLET = "0xAAA1111111111111111111111111111111111111"


@pytest.fixture(autouse=True)
def _no_env_wallet(monkeypatch):
    monkeypatch.delenv("SKILLSHARE_WALLET", raising=False)


def _ids(store_dir: str) -> list[str]:
    return asyncio.run(RegistryIndexManager(FileStore(store_dir)).load_index())


def test_submit_list_and_stats():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(
            main,
            ["-s", tmpdir, "submit", "-c", "Programming", "-d", "Python", "-w", WALLET],
        )
        assert result.exit_code == 0, result.output
        assert "Encrypted skill submitted securely!" in result.output
        assert len(_ids(tmpdir)) == 1

        result = runner.invoke(main, ["-s", tmpdir, "list"])
        assert result.exit_code == 0
        assert "Programming" in result.output

        result = runner.invoke(main, ["-s", tmpdir, "list", "-c", "Cooking"])
        assert "No matching skills found" in result.output

        result = runner.invoke(main, ["-s", tmpdir, "stats"])
        assert result.exit_code == 0
        assert "100%" in result.output


def test_submit_without_wallet_fails():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(main, ["-s", tmpdir, "submit", "-c", "Cooking"])
        assert result.exit_code == 1
        assert "Please connect wallet first" in result.output
        assert _ids(tmpdir) == []


def test_wallet_from_environment(monkeypatch):
    monkeypatch.setenv("SKILLSHARE_WALLET", WALLET)
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(main, ["-s", tmpdir, "submit", "-c", "Other"])
        assert result.exit_code == 0, result.output


def test_rate_and_learn():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        runner.invoke(main, ["-s", tmpdir, "submit", "-c", "Cooking", "-w", WALLET])
        (skill_id,) = _ids(tmpdir)

        result = runner.invoke(main, ["-s", tmpdir, "rate", skill_id, "4", "-w", WALLET])
        assert result.exit_code == 0, result.output
        assert "FHE rating completed successfully!" in result.output

        result = runner.invoke(main, ["-s", tmpdir, "learn", skill_id])
        assert result.exit_code == 0
        assert "FHE matching initiated" in result.output


def test_rate_unknown_skill():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(main, ["-s", tmpdir, "rate", "nope", "3", "-w", WALLET])
        assert result.exit_code == 1
        assert "Skill not found" in result.output


def test_index_command():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(main, ["-s", tmpdir, "index"])
        assert "Registry index is empty" in result.output

        runner.invoke(main, ["-s", tmpdir, "submit", "-c", "Language", "-w", WALLET])
        result = runner.invoke(main, ["-s", tmpdir, "index"])
        assert _ids(tmpdir)[0] in result.output
