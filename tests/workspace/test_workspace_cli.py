from __future__ import annotations

from study_aid.config import CONFIG_TEMPLATE
from study_aid.workspace import cli


def test_init_creates_workspace_and_config(
    capsys, _isolated_environment
):
    code = cli.main([])

    captured = capsys.readouterr()
    assert code == 0
    assert "Workspace ready" in captured.out
    assert "(written)" in captured.out
    for name in ("config", "logs", "summaries", "quizzes"):
        assert (_isolated_environment / name).is_dir()
    config_file = _isolated_environment / "config" / "study_aid.toml"
    assert config_file.read_text(encoding="utf-8") == CONFIG_TEMPLATE


def test_init_supports_custom_path(tmp_path, capsys):
    target = tmp_path / "custom"

    code = cli.main(["--path", str(target)])

    captured = capsys.readouterr()
    assert code == 0
    assert target.is_dir()
    assert str(target) in captured.out


def test_init_keeps_existing_config_unless_forced(tmp_path, capsys):
    target = tmp_path / "ws"
    config_file = target / "config" / "study_aid.toml"
    cli.main(["--path", str(target), "--quiet"])
    config_file.write_text("# edited\n", encoding="utf-8")

    assert cli.main(["--path", str(target)]) == 0
    out = capsys.readouterr().out
    assert "(exists)" in out
    assert config_file.read_text(encoding="utf-8") == "# edited\n"

    assert cli.main(["--path", str(target), "--force", "--quiet"]) == 0
    assert config_file.read_text(encoding="utf-8") == CONFIG_TEMPLATE


def test_init_quiet_mode(capsys):
    code = cli.main(["--quiet"])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out == ""


def test_init_reports_workspace_errors(tmp_path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    code = cli.main(["--path", str(blocker)])

    assert code == 1
    assert "Error:" in capsys.readouterr().err
