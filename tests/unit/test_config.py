import pytest

from sqlexpand.config import DEFAULT_EXPANSION_CONFIG, ExpansionConfig


def test_expansion_config_defaults() -> None:
    config = ExpansionConfig()
    assert config.strict_type_count is False
    assert config.placeholder_separator == ", "
    assert config.empty_array_placeholder is True
    assert config == DEFAULT_EXPANSION_CONFIG


def test_expansion_config_replace() -> None:
    config = ExpansionConfig(placeholder_separator=",")
    strict = config.replace(strict_type_count=True)

    assert strict.strict_type_count is True
    assert strict.placeholder_separator == ","
    assert config.strict_type_count is False


def test_expansion_config_replace_unknown_option() -> None:
    with pytest.raises(TypeError, match="separator"):
        ExpansionConfig().replace(separator=",")


def test_expansion_config_hash_method() -> None:
    assert ExpansionConfig().hash() == ExpansionConfig().hash()
    assert ExpansionConfig().hash() != ExpansionConfig(strict_type_count=True).hash()


def test_expansion_config_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(ExpansionConfig())
