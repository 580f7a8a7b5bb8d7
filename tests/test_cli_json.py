import json

import pytest
from typer.testing import CliRunner

from calcguard import __version__
from calcguard.main import app

pytestmark = pytest.mark.integration

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run commands from a project root without a local config."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_check_json_output(workdir, stylesheet_dir):
    result = runner.invoke(app, ["check", str(stylesheet_dir / "broken.css"), "--json"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["command"] == "check"
    assert payload["status"] == "issues"
    assert payload["files_checked"] == 1
    assert payload["issue_count"] == 2

    diagnostics = payload["results"][str(stylesheet_dir / "broken.css")]["diagnostics"]
    assert [d["column"] for d in diagnostics] == [20, 21]
    assert all(d["rule"] == "function-calc-no-unspaced-operator" for d in diagnostics)


def test_check_clean_file(workdir, stylesheet_dir):
    result = runner.invoke(app, ["check", str(stylesheet_dir / "clean.css")])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["status"] == "success"
    assert payload["results"] == {}


def test_check_directory(workdir, stylesheet_dir):
    result = runner.invoke(app, ["check", str(stylesheet_dir), "--json"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["files_checked"] == 2
    assert payload["files_with_issues"] == 1

    recursive = runner.invoke(app, ["check", str(stylesheet_dir), "-r", "--json"])
    recursive_payload = json.loads(recursive.stdout)
    assert recursive_payload["files_checked"] == 3
    assert recursive_payload["issue_count"] == 3


def test_check_function_option(workdir, tmp_path):
    path = tmp_path / "min.css"
    path.write_text("a { width: min(1px-1px); }\n")

    default = runner.invoke(app, ["check", str(path), "--json"])
    assert default.exit_code == 0

    result = runner.invoke(app, ["check", str(path), "--function", "min", "--json"])
    assert result.exit_code == 1
    assert json.loads(result.stdout)["issue_count"] == 2


def test_check_uses_local_config(workdir, tmp_path):
    config_dir = tmp_path / ".calcguard"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(json.dumps({"rule": {"function_names": ["max"]}}))
    path = tmp_path / "max.css"
    path.write_text("a { width: max(1px+1px); }\n")

    result = runner.invoke(app, ["check", str(path), "--json"])
    assert result.exit_code == 1
    assert json.loads(result.stdout)["issue_count"] == 2


def test_check_disabled_by_config(workdir, tmp_path, stylesheet_dir):
    config_dir = tmp_path / ".calcguard"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(json.dumps({"rule": {"enabled": False}}))

    result = runner.invoke(app, ["check", str(stylesheet_dir / "broken.css")])
    assert result.exit_code == 0


def test_invalid_config(workdir, tmp_path, stylesheet_dir):
    config_dir = tmp_path / ".calcguard"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(json.dumps({"rule": {"function_names": []}}))

    result = runner.invoke(app, ["check", str(stylesheet_dir / "broken.css")])
    assert result.exit_code == 2
    payload = json.loads(result.stdout)
    assert payload["status"] == "error"
    assert payload["code"] == "CONFIG_ERROR"


def test_non_object_config(workdir, tmp_path, stylesheet_dir):
    config_dir = tmp_path / ".calcguard"
    config_dir.mkdir()
    (config_dir / "config.json").write_text("[1, 2]")

    result = runner.invoke(app, ["fix", str(stylesheet_dir / "broken.css")])
    assert result.exit_code == 2
    assert json.loads(result.stdout)["code"] == "CONFIG_ERROR"
    assert (stylesheet_dir / "broken.css").read_text() == "a { width: calc(1px+1px); }\n"


def test_check_human_output(workdir, stylesheet_dir):
    result = runner.invoke(app, ["--human", "check", str(stylesheet_dir / "broken.css")])
    assert result.exit_code == 1
    assert "2 issue(s) found" in result.stdout


def test_fix_json_output(workdir, stylesheet_dir):
    path = stylesheet_dir / "broken.css"
    result = runner.invoke(app, ["fix", str(path), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["command"] == "fix"
    assert payload["status"] == "success"
    assert payload["fix_count"] == 2
    assert payload["files_fixed"] == 1
    assert path.read_text() == "a { width: calc(1px + 1px); }\n"

    again = runner.invoke(app, ["check", str(path), "--json"])
    assert again.exit_code == 0


def test_fix_preview(workdir, stylesheet_dir):
    result = runner.invoke(app, ["fix", str(stylesheet_dir), "-r", "--preview", "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["preview"] is True
    assert payload["fix_count"] == 3
    assert (stylesheet_dir / "broken.css").read_text() == "a { width: calc(1px+1px); }\n"


def test_fix_human_output(workdir, stylesheet_dir):
    result = runner.invoke(app, ["-H", "fix", str(stylesheet_dir)])
    assert result.exit_code == 0
    assert "Applied 2 fix(es) to 1 file(s)" in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == __version__
