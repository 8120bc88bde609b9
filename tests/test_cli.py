"""CLI tests for setupconf subcommands."""

import json
import sys

import pytest

from setupconf import cli
from conftest import set_mtime


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["setupconf"] + args)
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    return excinfo.value.code


def _common(project):
    return [str(project), "--package-db", str(project.parent / "package.conf.d")]


def test_no_command_prints_help(monkeypatch, capsys):
    assert _run_cli([], monkeypatch) == 1
    assert "usage: setupconf" in capsys.readouterr().out


def test_check_ok(project, monkeypatch, capsys):
    assert _run_cli(["check"] + _common(project), monkeypatch) == 0
    out = capsys.readouterr().out
    assert out.startswith("[OK] ")
    assert "setup-config" in out


def test_check_stale(project, monkeypatch, capsys):
    set_mtime(project / "demo.cabal", 3000)
    assert _run_cli(["check"] + _common(project), monkeypatch) == 1
    assert capsys.readouterr().out.startswith("[STALE] ")


def test_check_json(project, monkeypatch, capsys):
    assert _run_cli(["check", "--json"] + _common(project), monkeypatch) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["valid"] is True
    assert payload["setup_config"].endswith("setup-config")


def test_world_json(project, monkeypatch, capsys):
    assert _run_cli(["world", "--json"] + _common(project), monkeypatch) == 0
    payload = json.loads(capsys.readouterr().out)
    assert set(payload) == {
        "artifact_mtime",
        "artifact_mtime_ns",
        "artifact_path",
        "descriptor_mtime",
        "descriptor_mtime_ns",
        "descriptor_path",
        "package_cache_mtime",
        "package_cache_mtime_ns",
        "package_cache_path",
    }
    assert payload["artifact_mtime"].startswith("1970-01-01T00:33:20")
    assert payload["artifact_mtime_ns"] == 2000 * 1_000_000_000


def test_deps(project, monkeypatch, capsys):
    assert _run_cli(["deps"] + _common(project), monkeypatch) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split("\t")[0] for line in lines] == ["base-4.8.1.0", "containers-0.5.6.2", "hspec-2.1.10"]
    assert lines[0].split("\t")[1] == "base-4.8.1.0-4f7206fd964c629946bb89db72c80011"


def test_deps_json_with_own_package(project, monkeypatch, capsys):
    args = ["deps", "--json", "--own-package", "base-4.8.1.0"] + _common(project)
    assert _run_cli(args, monkeypatch) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [dep["package"]["name"] for dep in payload] == ["containers", "demo", "hspec"]


def test_flags(project, monkeypatch, capsys):
    assert _run_cli(["flags"] + _common(project), monkeypatch) == 0
    assert capsys.readouterr().out.splitlines() == ["-debug", "+fast-math", "-examples"]


def test_quiet_suppresses_output(project, monkeypatch, capsys):
    assert _run_cli(["flags", "--quiet"] + _common(project), monkeypatch) == 0
    assert capsys.readouterr().out == ""


def test_missing_package_db_is_an_error(project, monkeypatch, capsys):
    assert _run_cli(["check", str(project)], monkeypatch) == 1
    assert "Error: No package database given" in capsys.readouterr().err


def test_cradle_file_option(project, monkeypatch, capsys, tmp_path):
    cradle_file = tmp_path / "elsewhere.json"
    cradle_file.write_text(
        json.dumps({"root_dir": "demo", "package_db": "package.conf.d"}),
        encoding="utf-8",
    )
    assert _run_cli(["flags", "--cradle", str(cradle_file)], monkeypatch) == 0
    assert "+fast-math" in capsys.readouterr().out


def test_failed_regeneration_reports_error(project, monkeypatch, capsys):
    set_mtime(project / "demo.cabal", 3000)
    (project / "setupconf.json").write_text(
        json.dumps({
            "package_db": "../package.conf.d",
            "configure_command": [sys.executable, "-c", "import sys; sys.exit(2)"],
        }),
        encoding="utf-8",
    )
    assert _run_cli(["deps", str(project)], monkeypatch) == 1
    err = capsys.readouterr().err
    assert "Error: cache was invalid, regeneration was attempted" in err
