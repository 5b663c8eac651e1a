"""Tests for the propreg command line."""

from pathlib import Path

import yaml
from click.testing import CliRunner

from propreg import __version__
from propreg.cli import main
from propreg.utils.hashing import digest


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_hash_prints_digest():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("a.jpg").write_bytes(b"\x01\x02")
        result = runner.invoke(main, ["hash", "a.jpg"])

    assert result.exit_code == 0
    assert digest(b"\x01\x02") in result.output


def test_hash_requires_existing_file():
    result = CliRunner().invoke(main, ["hash", "does-not-exist.jpg"])
    assert result.exit_code != 0


def test_seed_lists_properties():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("house.jpg").write_bytes(b"house")
        Path("car.jpg").write_bytes(b"car")
        with open("seed.yaml", "w") as f:
            yaml.dump(
                {
                    "properties": [
                        {"id": "p1", "category": "RealEstate", "image": "house.jpg"},
                        {"id": "p2", "category": "Car", "image": "car.jpg"},
                    ]
                },
                f,
            )
        result = runner.invoke(main, ["seed", "seed.yaml"])

    assert result.exit_code == 0
    assert "2 properties" in result.output
    assert "p1" in result.output
    assert "p2" in result.output


def test_seed_reports_manifest_errors():
    runner = CliRunner()
    with runner.isolated_filesystem():
        with open("seed.yaml", "w") as f:
            yaml.dump({"properties": [{"id": "p1", "image": "missing.jpg"}]}, f)
        result = runner.invoke(main, ["seed", "seed.yaml"])

    assert result.exit_code == 1
    assert "missing required field" in result.output


def test_serve_passes_port_zero_through(monkeypatch):
    calls = {}

    def fake_run(app, **kwargs):
        calls.update(kwargs)

    monkeypatch.setattr("uvicorn.run", fake_run)
    result = CliRunner().invoke(main, ["serve", "--host", "0.0.0.0", "--port", "0"])

    assert result.exit_code == 0, result.output
    assert calls["port"] == 0
    assert calls["host"] == "0.0.0.0"
