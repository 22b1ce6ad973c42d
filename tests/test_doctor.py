"""Tests for the doctor commands."""

from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


def test_doctor_with_snapshot_and_no_engine(monkeypatch, tmp_path, snapshot_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PODSPECT_SNAPSHOT_PATH", str(snapshot_path))
    monkeypatch.setenv("PODSPECT_ENGINE_URL", f"unix://{tmp_path / 'missing.sock'}")
    monkeypatch.setenv("PODSPECT_ARTIFACTS_DIR", str(tmp_path))

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "Snapshot" in result.output
    assert "OPTIONAL" in result.output
    assert "Artifacts dir" in result.output


def test_setup_engine_writes_user_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

    result = runner.invoke(
        app,
        ["doctor", "setup-engine"],
        input="http://localhost:2375\n/v1.41\n/srv/artifacts\n",
    )

    assert result.exit_code == 0, result.output
    env = (tmp_path / "xdg" / "podspect" / ".env").read_text(encoding="utf-8")
    assert "PODSPECT_ENGINE_URL=http://localhost:2375" in env
    assert "PODSPECT_ARTIFACTS_DIR=/srv/artifacts" in env


def test_doctor_honours_global_snapshot_option(monkeypatch, tmp_path, snapshot_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("PODSPECT_SNAPSHOT_PATH", raising=False)
    monkeypatch.setenv("PODSPECT_ENGINE_URL", f"unix://{tmp_path / 'missing.sock'}")
    monkeypatch.setenv("PODSPECT_ARTIFACTS_DIR", str(tmp_path))

    plain = runner.invoke(app, ["doctor", "run"])
    assert "Snapshot" not in plain.output
    assert "OPTIONAL" not in plain.output

    result = runner.invoke(app, ["--snapshot", str(snapshot_path), "doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "Snapshot" in result.output
    assert "OPTIONAL" in result.output
