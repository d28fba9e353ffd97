from pathlib import Path

import pytest

from ghrepos.config import ClientConfig, ConfigError, load_config


def test_defaults() -> None:
    assert load_config(env={}) == ClientConfig()


def test_yaml_file(tmp_path: Path) -> None:
    p = tmp_path / "ghrepos.yaml"
    p.write_text(
        "api_base: https://ghe.example/api/v3/\ntoken: from-file\nper_page: 50\nread_only: true\n",
        encoding="utf-8",
    )
    cfg = load_config(p, env={})
    assert cfg.api_base == "https://ghe.example/api/v3"
    assert cfg.token == "from-file"
    assert cfg.per_page == 50
    assert cfg.read_only is True


def test_environment_overrides_file(tmp_path: Path) -> None:
    p = tmp_path / "ghrepos.yaml"
    p.write_text("token: from-file\n", encoding="utf-8")
    cfg = load_config(p, env={"GITHUB_TOKEN": "from-env", "GITHUB_API_URL": "http://localhost:8080"})
    assert cfg.token == "from-env"
    assert cfg.api_base == "http://localhost:8080"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(tmp_path / "nope.yaml", env={})


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "unknown_key: 1\n",
        "per_page: 500\n",
        "per_page: many\n",
        "read_only: maybe\n",
        "api_base: ftp://example\n",
        "token: [unclosed\n",
    ],
)
def test_invalid_files(tmp_path: Path, text: str) -> None:
    p = tmp_path / "bad.yaml"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(p, env={})
