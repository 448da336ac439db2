import pytest

from highlightd import highlightctl


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HIGHLIGHTD_HOME", str(tmp_path))
    (tmp_path / "etc").mkdir()
    return tmp_path


def test_no_command(capsys) -> None:
    assert highlightctl.run([]) == 0

    assert "COMMAND" in capsys.readouterr().out


def test_languages(capsys, home) -> None:
    (home / "etc" / "settings.yaml").write_text("service.languages: [rust, python]\n")

    assert highlightctl.run(["--no-color", "languages"]) == 0

    assert capsys.readouterr().out.split() == ["python", "rust"]


def test_languages_all(capsys) -> None:
    assert highlightctl.run(["--no-color", "languages", "--all"]) == 0

    assert "rust" in capsys.readouterr().out.split()


def test_settings(capsys) -> None:
    assert highlightctl.run(["--no-color", "settings", "service.port"]) == 0

    assert capsys.readouterr().out == "service.port: 8001\n"


def test_invalid_settings(capsys, home) -> None:
    (home / "etc" / "settings.yaml").write_text("service.port: eighty\n")

    assert highlightctl.run(["--no-color", "settings"]) == 1

    assert "service.port" in capsys.readouterr().err


def test_highlight_unknown_file(tmp_path) -> None:
    missing = str(tmp_path / "missing.rs")

    assert highlightctl.run(["--no-color", "highlight", missing]) == 1
