"""
Integration tests for the build_resume.py command line interface.
"""

import importlib.util
import json
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from vitae.contexts.layout import DEFAULT_LAYOUT_SETTINGS

SCRIPT_PATH = Path(__file__).parents[2] / "scripts" / "build_resume.py"

runner = CliRunner()


@pytest.fixture
def cli(tmp_path, monkeypatch):
    """The script module, logging under tmp_path."""
    spec = importlib.util.spec_from_file_location("build_resume", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
    yield module
    logger.remove()


@pytest.mark.integration
def test_no_command_shows_help(cli):
    result = runner.invoke(cli.app, [])

    assert result.exit_code == 0
    assert "render" in result.output
    assert "migrate" in result.output


@pytest.mark.integration
def test_render_and_check(cli, fixtures_path, tmp_path):
    output = tmp_path / "jane.pdf"

    result = runner.invoke(
        cli.app,
        ["render", str(fixtures_path / "jane_doe.json"), "-o", str(output), "--check", "--today", "2025-11-14"],
    )

    assert result.exit_code == 0, result.output
    assert "Render succeeded" in result.output
    assert "Validation passed" in result.output
    assert output.exists()
    assert list((tmp_path / "logs").glob("render_*/render.log"))


@pytest.mark.integration
def test_render_invalid_document(cli, tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")

    result = runner.invoke(cli.app, ["render", str(broken), "-o", str(tmp_path / "out.pdf")])

    assert result.exit_code == 1
    assert not (tmp_path / "out.pdf").exists()


@pytest.mark.integration
def test_render_with_bad_config(cli, fixtures_path, tmp_path):
    config = tmp_path / "layout.yaml"
    config.write_text("not_a_setting: 1\n")

    result = runner.invoke(
        cli.app,
        ["render", str(fixtures_path / "jane_doe.json"), "-o", str(tmp_path / "out.pdf"), "-c", str(config)],
    )

    assert result.exit_code == 1


@pytest.mark.integration
def test_layout_command(cli, fixtures_path):
    result = runner.invoke(cli.app, ["layout", str(fixtures_path / "jane_doe.json"), "--today", "2025-11-14"])

    assert result.exit_code == 0, result.output
    assert "1 page(s), 2 links" in result.output
    assert "Status - Graduated" in result.output
    assert "-> mailto:jane@x.com" in result.output


@pytest.mark.integration
def test_validate_command(cli, fixtures_path, tmp_path):
    document = str(fixtures_path / "jane_doe.json")
    output = tmp_path / "jane.pdf"
    runner.invoke(cli.app, ["render", document, "-o", str(output), "--today", "2025-11-14"])

    passed = runner.invoke(cli.app, ["validate", document, str(output), "--today", "2025-11-14"])
    missing = runner.invoke(cli.app, ["validate", document, str(tmp_path / "missing.pdf")])

    assert passed.exit_code == 0, passed.output
    assert missing.exit_code == 1
    assert "PDF not found" in missing.output


@pytest.mark.integration
def test_migrate_command(cli, legacy_resume_path, tmp_path):
    output = tmp_path / "migrated.json"

    result = runner.invoke(cli.app, ["migrate", str(legacy_resume_path), "-o", str(output)])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["version"] == "1.0.0"
    assert data["contacts"][0] == {"name": "Github", "url": "https://github.com/samr"}
    assert data["experience"][0]["favorite"] is True


@pytest.mark.integration
def test_watch_generator_skips_unloadable_document(cli, fixtures_path, tmp_path):
    """Test that a half-written document keeps the previous preview."""
    document = tmp_path / "resume.json"
    document.write_text((fixtures_path / "jane_doe.json").read_text(encoding="utf-8"), encoding="utf-8")
    generate = cli._preview_generator(document, DEFAULT_LAYOUT_SETTINGS)

    assert generate().startswith(b"%PDF")

    document.write_text('{"name": "Jane', encoding="utf-8")
    assert generate() is None
