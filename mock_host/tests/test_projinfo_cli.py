import pytest
from typer.testing import CliRunner
from mock_host.cli import app

runner = CliRunner()

WORKSPACE = """
name: Demo
projects:
  - name: App
    directory: /src/App
    instance_id: 11111111-1111-1111-1111-111111111111
    type_id: 22222222-2222-2222-2222-222222222222
  - folder: Libs
    projects:
      - name: Core
        directory: /src/Libs/Core
  - opaque: Miscellaneous Files
"""


@pytest.fixture
def workspace(tmp_path):
    path = tmp_path / "workspace.yaml"
    path.write_text(WORKSPACE)
    return path


@pytest.fixture
def logfile(tmp_path):
    return str(tmp_path / "projinfo.log")


def test_help():
    """Test the help command displays usage information."""
    result = runner.invoke(app, ["--help"])
    print(result.output)
    assert result.exit_code == 0
    assert "Usage" in result.output
    assert "run" in result.output and "tree" in result.output


def test_run_prints_report(workspace, logfile):
    """Test one pass over a workspace file."""
    result = runner.invoke(app, ["--logfile", logfile, "run", str(workspace)])
    print(result.output)
    assert result.exit_code == 0
    assert "\tProject name: App\n\tProject dir : /src/App\n" in result.output
    assert "Project id  : 11111111-1111-1111-1111-111111111111" in result.output
    assert "\tProject name: Core\n" in result.output
    assert "Miscellaneous Files" not in result.output
    assert "Visited 3 projects: 2 reported, 1 skipped, 0 faults" in result.output


def test_run_writes_log(workspace, logfile):
    runner.invoke(app, ["--logfile", logfile, "--verbose", "run", str(workspace)])
    with open(logfile) as f:
        content = f.read()
    assert "Project info pass completed" in content
    assert "Reporting project 'App'" in content


def test_run_in_background_with_channel(workspace, logfile):
    result = runner.invoke(app, ["--logfile", logfile, "run", str(workspace), "--channel", "Build", "--background"])
    print(result.output)
    assert result.exit_code == 0
    assert "\tProject name: App\n" in result.output


def test_run_with_settings_file(workspace, logfile, tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text('channel_name: Projects\ncompletion_marker: "-- done --\\n"\n')
    result = runner.invoke(app, ["--logfile", logfile, "run", str(workspace), "--settings", str(settings)])
    print(result.output)
    assert result.exit_code == 0
    assert "-- done --" in result.output


def test_run_closed_workspace(tmp_path, logfile):
    """Provider unreachable: nothing written, exit code 1."""
    path = tmp_path / "closed.yaml"
    path.write_text("name: Demo\nopen: false\nprojects:\n  - name: App\n")
    result = runner.invoke(app, ["--logfile", logfile, "run", str(path)])
    print(result.output)
    assert result.exit_code == 1
    assert "Project name" not in result.output
    assert "Pass aborted" in result.output


def test_run_invalid_workspace(tmp_path, logfile):
    path = tmp_path / "bad.yaml"
    path.write_text("- not\n- a mapping\n")
    result = runner.invoke(app, ["--logfile", logfile, "run", str(path)])
    print(result.output)
    assert result.exit_code == 2


def test_run_missing_workspace(tmp_path, logfile):
    result = runner.invoke(app, ["--logfile", logfile, "run", str(tmp_path / "missing.yaml")])
    assert result.exit_code != 0


def test_tree(workspace, logfile):
    result = runner.invoke(app, ["--logfile", logfile, "tree", str(workspace)])
    print(result.output)
    assert result.exit_code == 0
    assert "Demo (3 projects)" in result.output
    for label in ("App", "Libs/", "Core", "Miscellaneous Files"):
        assert label in result.output
