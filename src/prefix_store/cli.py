"""This module provides the command-line entry point for the prefix store."""

import argparse
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import psutil

from .alphabet import BYTES
from .config import (
    ConfigBoolParsingError,
    ConfigNotFoundError,
    ConfigValueError,
    StoreConfig,
    load_config_file,
)
from .loader import build_trie
from .logger import LOG_FILE_PATH, log_query, setup_logging
from .trie import PrefixTrie

CONFIG_PATH = Path("config.txt")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the `prefix-store` command.

    Returns:
        argparse.ArgumentParser: The configured parser.

    """
    parser = argparse.ArgumentParser(
        prog="prefix-store",
        description="Load a key file into a prefix trie and query it.",
    )
    parser.add_argument(
        "--config_path",
        type=Path,
        default=CONFIG_PATH,
        help="Path to the config file (default: ./config.txt).",
    )
    parser.add_argument(
        "--log_file",
        type=Path,
        default=LOG_FILE_PATH,
        help="Path to the log file (default: logs/prefix_store.log).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    exists_parser = subparsers.add_parser(
        "exists",
        help="Check whether each key was stored.",
    )
    exists_parser.add_argument("keys", nargs="+")

    prefix_parser = subparsers.add_parser(
        "prefix",
        help="List every stored key starting with a prefix.",
    )
    prefix_parser.add_argument("prefix")
    prefix_parser.add_argument(
        "--sort",
        action="store_true",
        help="Print the matches in sorted order.",
    )
    prefix_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Print at most this many matches.",
    )

    subparsers.add_parser("stats", help="Show trie and process statistics.")
    return parser


def _to_key(config: StoreConfig, text: str) -> Any:
    if config.alphabet is BYTES:
        return text.encode(config.encoding)
    return text


def _to_display(config: StoreConfig, key: Any) -> str:
    if config.alphabet is BYTES:
        return key.decode(config.encoding, errors="replace")
    return key


def _record(
    config: StoreConfig,
    operation: str,
    query: str,
    result_count: int,
    start_time: float,
) -> None:
    if not config.log_queries:
        return
    execution_time_ms = (time.perf_counter() - start_time) * 1000
    log_query(
        datetime.now().isoformat(),
        operation,
        query,
        result_count,
        execution_time_ms,
    )


def run_exists(trie: PrefixTrie, config: StoreConfig, keys: list[str]) -> None:
    """Print, for every key, whether it is stored in the trie."""
    for text in keys:
        start_time = time.perf_counter()
        found = trie.exists(_to_key(config, text))
        _record(config, "exists", text, int(found), start_time)
        print(f"{text}\t{found}")


def run_prefix(
    trie: PrefixTrie,
    config: StoreConfig,
    prefix: str,
    sort: bool = False,
    limit: Optional[int] = None,
) -> None:
    """Print every stored key starting with `prefix`, one per line."""
    start_time = time.perf_counter()
    matches = trie.collect_with_prefix(_to_key(config, prefix))
    _record(config, "prefix", prefix, len(matches), start_time)

    if sort:
        matches.sort()
    if limit is not None:
        matches = matches[: max(limit, 0)]
    for key in matches:
        print(_to_display(config, key))


def run_stats(trie: PrefixTrie, config: StoreConfig) -> None:
    """Print the size of the trie and the memory used by this process."""
    rss = psutil.Process().memory_info().rss
    print(f"Keys: {len(trie)}")
    print(f"Max key length: {trie.max_key_length}")
    print(f"Alphabet: {trie.alphabet.name}")
    print(f"Keys file: {config.keys_path}")
    print(f"Process RSS: {rss / 1024 / 1024:.2f} MiB")


def main(argv: Optional[list[str]] = None) -> int:
    """Run the prefix store command.

    Args:
        argv (list[str], optional): Command-line arguments, without the
        program name. Defaults to `sys.argv[1:]`.

    Returns:
        int: The process exit status.

    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file)

    try:
        config = load_config_file(args.config_path)
        trie, _report = build_trie(config)
    except (
        FileNotFoundError,
        ConfigNotFoundError,
        ConfigBoolParsingError,
        ConfigValueError,
    ) as e:
        print(f"[PREFIX STORE] {e}", file=sys.stderr)
        return 1

    try:
        if args.command == "exists":
            run_exists(trie, config, args.keys)
        elif args.command == "prefix":
            run_prefix(trie, config, args.prefix, args.sort, args.limit)
        else:
            run_stats(trie, config)
    except UnicodeEncodeError as e:
        # Bytes stores encode arguments with the configured encoding
        print(
            f"[PREFIX STORE] Cannot encode query with encoding "
            f"'{config.encoding}': {e}",
            file=sys.stderr,
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
