import logging
import random

import pytest

from prefix_store.alphabet import BYTES
from prefix_store.trie import PrefixTrie
from tests.trie_constants import DATASET


@pytest.fixture
def rng():
    """A seeded random generator, so failures can be reproduced."""
    return random.Random(20240601)


@pytest.fixture
def populated_trie():
    trie = PrefixTrie(128)
    for key in DATASET:
        trie.insert(key)
    return trie


@pytest.fixture
def populated_byte_trie():
    trie = PrefixTrie(128, BYTES)
    for key in DATASET:
        trie.insert(key.encode("utf-8"))
    return trie


@pytest.fixture
def keys_file(tmp_path):
    file_path = tmp_path / "keys.txt"
    with file_path.open("w", encoding="utf-8") as f:
        for item in DATASET:
            f.write(f"{item}\n")
    return file_path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo any handler changes a test makes to the root logger."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)
