from pathlib import Path

import pytest

from prefix_store.alphabet import BYTES, TEXT
from prefix_store.config import (
    ConfigBoolParsingError,
    ConfigNotFoundError,
    ConfigValueError,
    StoreConfig,
    load_config_file,
    parse_bool,
    parse_encoding,
    parse_max_key_length,
)

# Test data for valid configurations
VALID_CONFIG = """
# Prefix store configuration
keys_path = {keys_path}
max_key_length = 128
alphabet = bytes
log_queries = true
encoding = latin-1
"""

MINIMAL_CONFIG = """
keys_path = {keys_path}
max_key_length = 64
"""

MISSING_KEY_CONFIG = """
keys_path = {keys_path}
log_queries = false
"""

INVALID_BOOL_CONFIG = """
keys_path = {keys_path}
max_key_length = 128
log_queries = maybe
"""

INVALID_LENGTH_CONFIG = """
keys_path = {keys_path}
max_key_length = {max_key_length}
"""

INVALID_ALPHABET_CONFIG = """
keys_path = {keys_path}
max_key_length = 128
alphabet = {alphabet}
"""


@pytest.fixture
def data_file(tmp_path):
    data_file = tmp_path / "keys.txt"
    data_file.touch()
    return data_file


def write_config(tmp_path, content):
    config_path = tmp_path / "config.txt"
    config_path.write_text(content, encoding="utf-8")
    return config_path


# Test parse_bool function
@pytest.mark.parametrize(
    "value, expected",
    [
        ("true", True),
        ("True", True),
        ("TRUE", True),
        ("1", True),
        ("yes", True),
        ("false", False),
        ("False", False),
        ("FALSE", False),
        ("0", False),
        ("no", False),
    ],
)
def test_parse_bool_valid(value, expected):
    """Test valid boolean values."""
    assert parse_bool("test_key", value) == expected


@pytest.mark.parametrize("value", ["maybe", "2", "yess", "tru", "invalid"])
def test_parse_bool_invalid(value):
    """Test invalid boolean values."""
    with pytest.raises(ConfigBoolParsingError) as excinfo:
        parse_bool("test_key", value)
    assert "Invalid boolean value for key 'test_key'" in str(excinfo.value)


@pytest.mark.parametrize("value, expected", [("0", 0), ("128", 128)])
def test_parse_max_key_length_valid(value, expected):
    assert parse_max_key_length(value) == expected


@pytest.mark.parametrize("value", ["-1", "abc", "1.5", ""])
def test_parse_max_key_length_invalid(value):
    with pytest.raises(ConfigValueError) as excinfo:
        parse_max_key_length(value)
    assert "Invalid value for 'max_key_length'" in str(excinfo.value)


# Test StoreConfig class
def test_store_config_defaults(data_file):
    """Test StoreConfig initialization and default values."""
    config = StoreConfig(keys_path=data_file, max_key_length=32)

    assert config.keys_path == data_file
    assert config.max_key_length == 32
    assert config.alphabet is TEXT
    assert config.log_queries is False
    assert config.encoding == "utf-8"


def test_store_config_repr(data_file):
    """Test the string representation of StoreConfig."""
    config = StoreConfig(
        keys_path=data_file,
        max_key_length=32,
        alphabet=BYTES,
        log_queries=True,
    )

    repr_str = repr(config)
    assert "Prefix store configuration settings" in repr_str
    assert str(data_file) in repr_str
    assert "Max key length: 32" in repr_str
    assert "Alphabet: bytes" in repr_str
    assert "Log queries: YES" in repr_str


# Test load_config_file function
def test_load_valid_config(tmp_path, data_file):
    """Test loading a valid configuration file."""
    config_path = write_config(
        tmp_path,
        VALID_CONFIG.format(keys_path=data_file),
    )

    config = load_config_file(config_path)

    assert config.keys_path == data_file
    assert config.max_key_length == 128
    assert config.alphabet is BYTES
    assert config.log_queries is True
    assert config.encoding == "latin-1"


def test_load_minimal_config_uses_defaults(tmp_path, data_file):
    config_path = write_config(
        tmp_path,
        MINIMAL_CONFIG.format(keys_path=data_file),
    )

    config = load_config_file(config_path)

    assert config.max_key_length == 64
    assert config.alphabet is TEXT
    assert config.log_queries is False
    assert config.encoding == "utf-8"


def test_load_config_relative_keys_path(tmp_path, data_file):
    """Relative key files are looked up next to the config file."""
    config_path = write_config(
        tmp_path,
        MINIMAL_CONFIG.format(keys_path=data_file.name),
    )

    config = load_config_file(config_path)

    assert config.keys_path == tmp_path / data_file.name


def test_load_config_missing_file():
    """Test loading a configuration from a non-existent file."""
    with pytest.raises(FileNotFoundError) as excinfo:
        load_config_file(Path("/non/existent/path"))
    assert "Missing required configuration file" in str(excinfo.value)


def test_load_config_missing_key(tmp_path, data_file):
    """Test configuration with a missing required key."""
    config_path = write_config(
        tmp_path,
        MISSING_KEY_CONFIG.format(keys_path=data_file),
    )

    with pytest.raises(ConfigNotFoundError) as excinfo:
        load_config_file(config_path)
    assert "Missing required configuration: 'max_key_length'" in str(
        excinfo.value,
    )


def test_load_config_missing_keys_path(tmp_path):
    config_path = write_config(tmp_path, "max_key_length = 8\n")

    with pytest.raises(ConfigNotFoundError) as excinfo:
        load_config_file(config_path)
    assert "'keys_path'" in str(excinfo.value)


def test_load_config_invalid_bool(tmp_path, data_file):
    """Test configuration with an invalid boolean value."""
    config_path = write_config(
        tmp_path,
        INVALID_BOOL_CONFIG.format(keys_path=data_file),
    )

    with pytest.raises(ConfigBoolParsingError) as excinfo:
        load_config_file(config_path)
    assert "Invalid boolean value for key 'log_queries'" in str(excinfo.value)


@pytest.mark.parametrize("max_key_length", ["abc", "-5"])
def test_load_config_invalid_max_key_length(tmp_path, data_file, max_key_length):
    config_path = write_config(
        tmp_path,
        INVALID_LENGTH_CONFIG.format(
            keys_path=data_file,
            max_key_length=max_key_length,
        ),
    )

    with pytest.raises(ConfigValueError):
        load_config_file(config_path)


@pytest.mark.parametrize("alphabet", ["runes", "tuple"])
def test_load_config_invalid_alphabet(tmp_path, data_file, alphabet):
    config_path = write_config(
        tmp_path,
        INVALID_ALPHABET_CONFIG.format(keys_path=data_file, alphabet=alphabet),
    )

    with pytest.raises(ConfigValueError):
        load_config_file(config_path)


def test_load_config_case_insensitivity(tmp_path, data_file):
    """Test that keys are case-insensitive."""
    config_content = f"""
    KEYS_PATH = {data_file}
    MAX_KEY_LENGTH = 16
    LOG_QUERIES = 1
    """
    config_path = write_config(tmp_path, config_content)

    config = load_config_file(config_path)

    assert config.keys_path == data_file
    assert config.max_key_length == 16
    assert config.log_queries is True


def test_load_config_missing_keys_file(tmp_path):
    """Test that FileNotFoundError is raised if keys_path doesn't exist."""
    non_existent = tmp_path / "non_existent.txt"
    config_path = write_config(
        tmp_path,
        MINIMAL_CONFIG.format(keys_path=non_existent),
    )

    with pytest.raises(FileNotFoundError) as excinfo:
        load_config_file(config_path)
    assert f"The required file {non_existent} doesn't exist" in str(
        excinfo.value,
    )


def test_load_config_invalid_line_format(tmp_path, data_file):
    """Test that malformed lines are ignored."""
    config_content = f"""
    keys_path = {data_file}
    invalid_line_without_equals
    max_key_length = 8
    another_invalid line
    """
    config_path = write_config(tmp_path, config_content)

    config = load_config_file(config_path)

    assert config.keys_path == data_file
    assert config.max_key_length == 8


@pytest.mark.parametrize("value", ["utf-8", "latin-1", "UTF8"])
def test_parse_encoding_valid(value):
    assert parse_encoding(value) == value


def test_load_config_unknown_encoding(tmp_path, data_file):
    config_path = write_config(
        tmp_path,
        MINIMAL_CONFIG.format(keys_path=data_file) + "encoding = nope\n",
    )

    with pytest.raises(ConfigValueError) as excinfo:
        load_config_file(config_path)
    assert "Invalid value for 'encoding': 'nope'" in str(excinfo.value)
