from pathlib import Path

import pytest

from upsound_mcp.config.load import ConfigError, load_config
from upsound_mcp.config.model import DEFAULT_BASE_URL, DEFAULT_USER_AGENT


def _config_file(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "upsound.yaml"
    path.write_text(body.strip(), encoding="utf-8")
    return path


def test_defaults_with_empty_environment():
    config = load_config(environ={})
    assert config.base_url == DEFAULT_BASE_URL
    assert config.user_agent == DEFAULT_USER_AGENT
    assert config.respect_robots_txt is True
    assert config.robots_url == "https://api.upsound.com/api/robots.txt"
    assert config.audit_dir == ""


def test_yaml_file_overrides_defaults(tmp_path: Path):
    path = _config_file(
        tmp_path,
        """
base_url: http://127.0.0.1:8089/
timeout_sec: 5
respect_robots_txt: false
audit_dir: audit
log_level: debug
""",
    )
    config = load_config(path, environ={})
    assert config.base_url == "http://127.0.0.1:8089"
    assert config.timeout_sec == 5.0
    assert config.respect_robots_txt is False
    assert config.audit_dir == "audit"
    assert config.log_level == "DEBUG"


def test_environment_overrides_file(tmp_path: Path):
    path = _config_file(tmp_path, "base_url: http://file.test\nrespect_robots_txt: true")
    config = load_config(
        path,
        environ={"UPSOUND_BASE_URL": "https://env.test/api", "UPSOUND_IGNORE_ROBOTS_TXT": "1"},
    )
    assert config.base_url == "https://env.test/api"
    assert config.respect_robots_txt is False


def test_cli_flag_wins(tmp_path: Path):
    path = _config_file(tmp_path, "respect_robots_txt: true")
    config = load_config(path, ignore_robots_txt=True, environ={"UPSOUND_IGNORE_ROBOTS_TXT": "false"})
    assert config.respect_robots_txt is False


def test_missing_file_rejected(tmp_path: Path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml", environ={})


def test_unknown_key_rejected(tmp_path: Path):
    path = _config_file(tmp_path, "base_url: https://x.test\nretries: 3")
    with pytest.raises(ConfigError, match="retries"):
        load_config(path, environ={})


def test_non_mapping_rejected(tmp_path: Path):
    path = _config_file(tmp_path, "- a\n- b")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(path, environ={})


@pytest.mark.parametrize(
    ("env", "message"),
    [
        ({"UPSOUND_TIMEOUT_SEC": "soon"}, "UPSOUND_TIMEOUT_SEC"),
        ({"UPSOUND_TIMEOUT_SEC": "0"}, "positive"),
        ({"UPSOUND_BASE_URL": "ftp://x"}, "http"),
        ({"UPSOUND_IGNORE_ROBOTS_TXT": "maybe"}, "boolean"),
        ({"UPSOUND_LOG_LEVEL": "loud"}, "UPSOUND_LOG_LEVEL"),
    ],
)
def test_bad_environment_values_rejected(env, message):
    with pytest.raises(ConfigError, match=message):
        load_config(environ=env)
