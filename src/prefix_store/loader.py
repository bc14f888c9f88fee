"""Load keys from a data file into a prefix trie."""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .alphabet import BYTES
from .config import ConfigValueError, StoreConfig
from .trie import KeyTooLongError, PrefixTrie


class LoadReport:
    """Counters describing the outcome of loading a key file."""

    def __init__(self) -> None:
        self.inserted = 0
        self.duplicates = 0
        self.rejected = 0
        self.ignored = 0

    @property
    def total(self) -> int:
        """int: The number of lines read from the file."""
        return self.inserted + self.duplicates + self.rejected + self.ignored

    def __repr__(self) -> str:
        return (
            f"LoadReport(inserted={self.inserted}, "
            f"duplicates={self.duplicates}, rejected={self.rejected}, "
            f"ignored={self.ignored})"
        )


def _read_lines(
    data_path: Path,
    binary: bool,
    encoding: str,
) -> Iterator[Any]:
    if binary:
        with data_path.open("rb") as file:
            for line in file:
                yield line.rstrip(b"\r\n")
    else:
        with data_path.open("r", encoding=encoding, newline="") as file:
            for line in file:
                yield line.rstrip("\r\n")


def load_keys(
    trie: PrefixTrie,
    data_path: Path,
    encoding: str = "utf-8",
) -> LoadReport:
    """Insert all the lines of the data file into a trie structure.

    Each line is one key, without its line terminator. Keys longer than
    the trie's limit are skipped with a warning instead of aborting the
    load.

    Args:
        trie (PrefixTrie): The trie to fill.
        data_path (Path): The path of the data file to read.
        encoding (str): The text encoding of the file, used by text tries.

    Raises:
        FileNotFoundError: If the file specified by `data_path` does not exist.
        ConfigValueError: If the file cannot be decoded with `encoding`.

    Returns:
        LoadReport: How many lines were inserted, duplicated, rejected
        or ignored.

    """
    report = LoadReport()
    binary = trie.alphabet is BYTES
    try:
        for lineno, key in enumerate(
            _read_lines(data_path, binary, encoding),
            start=1,
        ):
            if not key:
                report.ignored += 1
                continue
            try:
                if trie.insert(key):
                    report.inserted += 1
                else:
                    report.duplicates += 1
            except KeyTooLongError as e:
                report.rejected += 1
                logging.warning(
                    "Skipping line %d of %s: %s",
                    lineno,
                    data_path,
                    e,
                )

    except FileNotFoundError as e:
        raise FileNotFoundError(f"File not found: {data_path}") from e

    except UnicodeDecodeError as e:
        raise ConfigValueError(
            f"Cannot decode {data_path} with encoding '{encoding}': {e}",
        ) from e

    logging.info("Loaded keys from %s: %r", data_path, report)
    return report


def build_trie(config: StoreConfig) -> tuple[PrefixTrie, LoadReport]:
    """Build a trie from the settings of a configuration file.

    Args:
        config (StoreConfig): The parsed configuration.

    Raises:
        FileNotFoundError: If the configured key file does not exist.

    Returns:
        tuple[PrefixTrie, LoadReport]: The filled trie and the load
        report.

    """
    trie = PrefixTrie(config.max_key_length, config.alphabet)
    report = load_keys(trie, config.keys_path, config.encoding)
    return trie, report
