"""Configuration parser for the prefix store."""

import codecs
from pathlib import Path
from typing import Optional, cast

from .alphabet import TEXT, Alphabet, get_alphabet


class ConfigBoolParsingError(Exception):
    """Raised when the parsing of bool strings in
    the config file was not successful.
    """


class ConfigNotFoundError(Exception):
    """Raised when any of the required configuration settings is not
    provided.
    """


class ConfigValueError(Exception):
    """Raised when a configuration value cannot be interpreted."""


class StoreConfig:
    """A class to save prefix store configuration settings."""

    def __init__(
        self,
        keys_path: Path,
        max_key_length: int,
        alphabet: Alphabet = TEXT,
        log_queries: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the store configuration.

        Args:
            keys_path (Path): The file holding one key per line.
            max_key_length (int): The longest key, in symbols, the
            trie accepts.
            alphabet (Alphabet): Whether keys are text or bytes.
            log_queries (bool): Whether every query gets logged.
            encoding (str): The text encoding of `keys_path`.

        """
        self.keys_path = keys_path
        self.max_key_length = max_key_length
        self.alphabet = alphabet
        self.log_queries = log_queries
        self.encoding = encoding

    def __repr__(self) -> str:
        """Return a string representation of the configuration object.

        Returns:
            str: A formatted string representing the configuration settings.

        """
        return f"""
                Prefix store configuration settings:
                Keys path: {self.keys_path}
                Max key length: {self.max_key_length}
                Alphabet: {self.alphabet.name}
                Log queries: {"YES" if self.log_queries else "NO"}
                Encoding: {self.encoding}
            """


def parse_bool(key: str, val: str) -> bool:
    """Parse given values into boolean ones (True or False).

    Args:
        key (str): The key to parse the boolean for.
        val (str): The value to be parsed to boolean.

    Raises:
        ConfigBoolParsingError: If an error occured
        while parsing the value to boolean.

    Returns:
        bool: True or False depending on the output of the parser.

    """
    if val.strip().lower() in {"true", "1", "yes"}:
        return True
    if val.strip().lower() in {"false", "0", "no"}:
        return False

    raise ConfigBoolParsingError(
        f"Invalid boolean value for key '{key}' in the configuration file. "
        "Expected 'true', 'false', '1', '0', 'yes', or 'no' "
        "(case-insensitive).",
    )


def parse_max_key_length(val: str) -> int:
    """Parse the key length limit.

    Args:
        val (str): The raw value from the configuration file.

    Raises:
        ConfigValueError: If the value is not a non-negative integer.

    Returns:
        int: The parsed limit.

    """
    try:
        max_key_length = int(val)
    except ValueError as e:
        raise ConfigValueError(
            f"Invalid value for 'max_key_length': '{val}'. "
            "Expected a non-negative integer.",
        ) from e

    if max_key_length < 0:
        raise ConfigValueError(
            f"Invalid value for 'max_key_length': '{val}'. "
            "Expected a non-negative integer.",
        )
    return max_key_length


def parse_encoding(val: str) -> str:
    """Check that a text encoding is known to Python.

    Args:
        val (str): The raw value from the configuration file.

    Raises:
        ConfigValueError: If no codec has that name.

    Returns:
        str: The encoding name, unchanged.

    """
    try:
        codecs.lookup(val)
    except LookupError as e:
        raise ConfigValueError(
            f"Invalid value for 'encoding': '{val}'. "
            "Expected a text encoding name such as 'utf-8'.",
        ) from e
    return val


def load_config_file(config_file_path: Path) -> StoreConfig:
    """Load and parse the configuration file.

    Args:
        config_file_path (Path): Path to the config file.

    Raises:
        ConfigNotFoundError: If required settings are missing.
        ConfigBoolParsingError: If a boolean setting is invalid.
        ConfigValueError: If any other setting is invalid.
        FileNotFoundError: If a file does not exist.

    Returns:
        StoreConfig: Parsed config object.

    """
    if not config_file_path.exists():
        raise FileNotFoundError(
            f"Missing required configuration file: '{config_file_path}'. "
            "Please ensure the file exists and the path is correct.",
        )

    keys_path: Optional[Path] = None
    max_key_length: Optional[int] = None
    alphabet = TEXT
    log_queries = False
    encoding = "utf-8"

    # Open and read the configuration file line by line
    with config_file_path.open("r", encoding="utf-8") as file:
        for line in file:
            line = line.strip()

            # Skip blank lines and comments
            if not line or line.startswith("#"):
                continue

            key, sep, value = line.partition("=")
            if sep != "=":
                continue

            key = key.strip().lower()
            value = value.strip()

            if key == "keys_path":
                keys_path = Path(value)
            elif key == "max_key_length":
                max_key_length = parse_max_key_length(value)
            elif key == "alphabet":
                alphabet = _parse_alphabet(value)
            elif key == "log_queries":
                log_queries = parse_bool("log_queries", value)
            elif key == "encoding":
                encoding = parse_encoding(value)

    required = {
        "keys_path": keys_path,
        "max_key_length": max_key_length,
    }

    for key, val in required.items():
        if val is None:
            raise ConfigNotFoundError(
                f"Missing required configuration: '{key}'. "
                f"Please ensure the config file includes a valid line for "
                f"'{key}'.",
            )

    # Relative key files are resolved against the config file's directory
    keys_path = cast("Path", keys_path)
    if not keys_path.is_absolute():
        keys_path = config_file_path.parent / keys_path

    if not keys_path.exists():
        raise FileNotFoundError(
            f"The required file {keys_path} doesn't exist.",
        )

    return StoreConfig(
        keys_path,
        cast("int", max_key_length),
        alphabet,
        log_queries,
        encoding,
    )


def _parse_alphabet(value: str) -> Alphabet:
    try:
        alphabet = get_alphabet(value)
    except ValueError as e:
        raise ConfigValueError(str(e)) from e

    # Key files hold lines of text or raw bytes, never tuples
    if alphabet.name not in {"text", "bytes"}:
        raise ConfigValueError(
            f"Invalid value for 'alphabet': '{value}'. "
            "Expected 'text' or 'bytes'.",
        )
    return alphabet
