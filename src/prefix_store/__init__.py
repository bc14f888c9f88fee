"""In-memory prefix trie with exact lookups and prefix searches."""

from .alphabet import BYTES, TEXT, TUPLE, Alphabet, get_alphabet
from .trie import KeyTooLongError, PrefixTrie, TrieNode

__all__ = [
    "BYTES",
    "TEXT",
    "TUPLE",
    "Alphabet",
    "KeyTooLongError",
    "PrefixTrie",
    "TrieNode",
    "get_alphabet",
]
