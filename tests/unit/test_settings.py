import pytest

from highlightd import base


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HIGHLIGHTD_HOME", str(tmp_path))
    (tmp_path / "etc").mkdir()
    return tmp_path


def test_defaults(home) -> None:
    settings = base.load_settings()

    assert settings["service.host"] == "localhost"
    assert settings["service.port"] == 8001
    assert settings["service.languages"] == ["rust"]
    assert settings["service.enabled"] is True
    assert settings["paths.runtime"] is None


def test_settings_dir(home) -> None:
    assert base.settings_dir() == str(home / "etc")


def test_site_settings_nested(home) -> None:
    (home / "etc" / "settings.yaml").write_text(
        "service:\n  port: 9001\n  languages: [rust, python]\n"
    )

    settings = base.load_settings()

    assert settings["service.port"] == 9001
    assert settings["service.languages"] == ["rust", "python"]
    assert settings["service.host"] == "localhost"


def test_site_settings_dotted(home) -> None:
    (home / "etc" / "settings.yaml").write_text("service.host: 127.0.0.1\n")

    assert base.load_settings()["service.host"] == "127.0.0.1"


def test_overrides_win(home) -> None:
    (home / "etc" / "settings.yaml").write_text("service.port: 9001\n")

    settings = base.load_settings(
        overrides={"service.port": 9002, "service.host": None}
    )

    assert settings["service.port"] == 9002
    assert settings["service.host"] == "localhost"


def test_unknown_setting(home) -> None:
    (home / "etc" / "settings.yaml").write_text("service.colour: blue\n")

    with pytest.raises(base.InvalidConfiguration) as excinfo:
        base.load_settings()

    assert "service.colour" in str(excinfo.value)


@pytest.mark.parametrize(
    "content",
    [
        "service.port: eighty\n",
        "service.enabled: 1\n",
        "service.languages: rust\n",
        "service.languages: [rust, 1]\n",
        "- just\n- a list\n",
        "service: [unbalanced\n",
    ],
)
def test_invalid_settings(home, content: str) -> None:
    (home / "etc" / "settings.yaml").write_text(content)

    with pytest.raises(base.InvalidConfiguration):
        base.load_settings()


def test_settings_are_read_only(home) -> None:
    settings = base.load_settings()

    with pytest.raises(TypeError):
        settings["service.port"] = 1  # type: ignore


def test_default_settings_have_descriptions() -> None:
    for key, (description, _) in base.default_settings().items():
        assert description, key
