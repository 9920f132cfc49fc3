import pytest

from jsonconv.config import AppConfig, load_config


def test_defaults():
    config = load_config()
    assert config == AppConfig()
    assert config.max_depth == 500
    assert config.root_tag == "root"
    assert config.invalid_names == "sanitize"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JSONCONV_LOG_LEVEL", "debug")
    monkeypatch.setenv("JSONCONV_LOG_JSON", "yes")
    monkeypatch.setenv("JSONCONV_MAX_DEPTH", "0")
    monkeypatch.setenv("JSONCONV_XML_INDENT", "4")
    monkeypatch.setenv("JSONCONV_ROOT_TAG", "document")
    monkeypatch.setenv("JSONCONV_INVALID_NAMES", "ERROR")
    monkeypatch.setenv("JSONCONV_VARIABLE_NAME", "payload")

    config = load_config()
    assert config.log_level == "DEBUG"
    assert config.log_json is True
    assert config.max_depth == 1
    assert config.xml_indent == 4
    assert config.root_tag == "document"
    assert config.invalid_names == "error"
    assert config.variable_name == "payload"


def test_blank_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("JSONCONV_MAX_DEPTH", "  ")
    assert load_config().max_depth == 500


@pytest.mark.parametrize(
    "key, value",
    [
        ("JSONCONV_MAX_DEPTH", "deep"),
        ("JSONCONV_LOG_JSON", "maybe"),
        ("JSONCONV_INVALID_NAMES", "ignore"),
        ("JSONCONV_VARIABLE_NAME", "not-an-identifier"),
    ],
)
def test_invalid_values_raise(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError, match=key):
        load_config()
