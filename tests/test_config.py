import pytest

from aish.config import DEFAULT_BASE_URL, DEFAULT_MODEL, ConfigError, load_config


def test_defaults(monkeypatch):
    monkeypatch.setattr("aish.config.getpass.getuser", lambda: "carol")
    monkeypatch.setattr("aish.config.socket.gethostname", lambda: "laptop")
    config = load_config({})
    assert config.api_key == ""
    assert config.base_url == DEFAULT_BASE_URL
    assert config.model == DEFAULT_MODEL
    assert config.os_name == "ubuntu"
    assert config.username == "carol"
    assert config.hostname == "laptop"
    assert config.command is None
    assert config.log_file is None
    assert config.guard is False


def test_fallback_identity(monkeypatch):
    def no_user():
        raise KeyError("uid")

    monkeypatch.setattr("aish.config.getpass.getuser", no_user)
    monkeypatch.setattr("aish.config.socket.gethostname", lambda: "")
    config = load_config({})
    assert config.username == "root"
    assert config.hostname == "server"


def test_reads_environment():
    config = load_config(
        {
            "OPENAI_API_KEY": "sk-test",
            "OPENAI_BASE_URL": "http://localhost:1234/v1/",
            "OPENAI_MODEL": "local-model",
            "PROMPT_OS": "Alpine Linux",
            "AISH_USERNAME": "dave",
            "AISH_HOSTNAME": "box",
            "AISH_COMMAND": "whoami",
            "LOG_FILE": "/tmp/aish.log",
            "LOG_LEVEL": "debug",
            "AISH_TEMPERATURE": "0.7",
            "AISH_GUARD": "yes",
        }
    )
    assert config.api_key == "sk-test"
    assert config.base_url == "http://localhost:1234/v1"
    assert config.model == "local-model"
    assert config.os_name == "Alpine Linux"
    assert config.username == "dave"
    assert config.hostname == "box"
    assert config.command == "whoami"
    assert config.log_file == "/tmp/aish.log"
    assert config.log_level == "DEBUG"
    assert config.temperature == 0.7
    assert config.guard is True


def test_empty_values_count_as_unset():
    config = load_config({"OPENAI_MODEL": "", "AISH_COMMAND": "  ", "AISH_USERNAME": "x", "AISH_HOSTNAME": "y"})
    assert config.model == DEFAULT_MODEL
    assert config.command is None


def test_overrides_win_over_environment():
    config = load_config(
        {"OPENAI_MODEL": "env-model", "AISH_USERNAME": "env-user", "AISH_HOSTNAME": "h"},
        model="flag-model",
        username=None,
    )
    assert config.model == "flag-model"
    assert config.username == "env-user"


def test_bad_temperature():
    with pytest.raises(ConfigError):
        load_config({"AISH_TEMPERATURE": "hot", "AISH_USERNAME": "x", "AISH_HOSTNAME": "y"})


def test_config_is_immutable():
    config = load_config({"AISH_USERNAME": "x", "AISH_HOSTNAME": "y"})
    with pytest.raises(Exception):
        config.model = "other"
