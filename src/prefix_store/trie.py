"""This module represents the implementation of a prefix trie that's
used for fast existence checks and prefix searches over stored keys.
"""

from collections.abc import Iterable, Iterator
from typing import Any, Optional

from .alphabet import TEXT, Alphabet


class KeyTooLongError(Exception):
    """Raised when a key longer than the trie's limit is inserted."""

    def __init__(self, max_key_length: int, key_length: int) -> None:
        """Initialize the error.

        Args:
            max_key_length (int): The limit configured on the trie.
            key_length (int): The length of the rejected key, in symbols.

        """
        super().__init__(
            f"max size of key should be {max_key_length} "
            f"({key_length} > {max_key_length})",
        )
        self.max_key_length = max_key_length
        self.key_length = key_length


class TrieNode:
    """Represent a node in the trie structure."""

    __slots__ = ("children", "terminal")

    def __init__(self) -> None:
        """Initialize a new Trie node.

        Attributes:
            children (dict): A dictionary mapping symbols to
            their corresponding child TrieNode instances.
            terminal (bool): Indicates whether an inserted
            key ends at this node.

        """
        self.children: dict[Any, TrieNode] = {}
        self.terminal = False


class PrefixTrie:
    """Represents the prefix trie data structure.

    The trie is generic over its symbol type through an `Alphabet`:
    text tries are indexed by code points, byte tries by byte values.
    Key length is always measured in symbols.
    """

    def __init__(self, max_key_length: int, alphabet: Alphabet = TEXT) -> None:
        """Initialize the root node of the Trie.

        Args:
            max_key_length (int): The maximum length, in symbols, of any
            key accepted by `insert`.
            alphabet (Alphabet): The kind of keys stored in the trie.

        Raises:
            ValueError: If `max_key_length` is not a non-negative integer.

        """
        if (
            isinstance(max_key_length, bool)
            or not isinstance(max_key_length, int)
            or max_key_length < 0
        ):
            raise ValueError(
                "max_key_length must be a non-negative integer, "
                f"got {max_key_length!r}",
            )
        self.root = TrieNode()
        self._max_key_length = max_key_length
        self._alphabet = alphabet
        self._size = 0

    @property
    def max_key_length(self) -> int:
        return self._max_key_length

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    def insert(self, key: Any) -> bool:
        """Insert a new key into the trie.

        Inserting the empty key is a no-op: empty keys are never stored.

        Args:
            key (Any): The key to be inserted into the trie.

        Raises:
            KeyTooLongError: If the key is longer than `max_key_length`.
            TypeError: If the key does not belong to the trie's alphabet.

        Returns:
            bool: True if the key was newly added, False if it was
            already present or empty.

        """
        self._alphabet.check(key)
        if len(key) > self._max_key_length:
            raise KeyTooLongError(self._max_key_length, len(key))

        node = self.root
        for symbol in key:
            child = node.children.get(symbol)
            if child is None:
                child = node.children[symbol] = TrieNode()
            node = child

        # Nothing was walked, so nothing is stored
        if node is self.root:
            return False

        newly_added = not node.terminal
        node.terminal = True
        if newly_added:
            self._size += 1
        return newly_added

    def insert_many(self, keys: Iterable[Any]) -> int:
        """Insert every key of an iterable, in order.

        Args:
            keys (Iterable): The keys to be inserted.

        Raises:
            KeyTooLongError: On the first over-length key. The keys
            before it stay inserted.

        Returns:
            int: How many keys were newly added.

        """
        return sum(1 for key in keys if self.insert(key))

    def exists(self, key: Any) -> bool:
        """Check for the existence of a given key in the trie.

        Args:
            key (Any): The key to search for in the trie.

        Returns:
            bool: True if the exact `key` was inserted, False otherwise.

        """
        self._alphabet.check(key)
        # Insert never accepts such keys, so there is nothing to walk
        if len(key) > self._max_key_length:
            return False

        node = self._subtrie(key)
        return node is not None and node.terminal

    def _subtrie(self, key: Any) -> Optional[TrieNode]:
        """Return the node reached by walking `key` from the root.

        Args:
            key (Any): The path to walk.

        Returns:
            Optional[TrieNode]: The node at the end of the path, or None
            if some symbol along the path has no child.

        """
        if len(key) > self._max_key_length:
            return None

        node = self.root
        for symbol in key:
            node = node.children.get(symbol)
            if node is None:
                return None
        return node

    def iter_with_prefix(self, prefix: Any) -> Iterator[Any]:
        """Lazily yield every stored key that starts with `prefix`.

        The subtrie under `prefix` is traversed depth first with an
        explicit stack. A single scratch buffer holds the current path:
        a symbol is pushed before descending and popped after the child
        is exhausted. Each yielded key is a fresh copy of the buffer.
        Order across sibling branches is not guaranteed.
        The trie must not be mutated while the iterator is being consumed.

        Args:
            prefix (Any): The prefix to search for.

        Yields:
            Any: Stored keys, of the alphabet's key type, starting
            with `prefix` (including `prefix` itself if stored).

        """
        self._alphabet.check(prefix)
        subtrie = self._subtrie(prefix)
        if subtrie is None:
            return

        join = self._alphabet.join
        buffer = list(prefix)
        if subtrie.terminal:
            yield join(buffer)

        stack = [iter(subtrie.children.items())]
        while stack:
            for symbol, child in stack[-1]:
                buffer.append(symbol)
                if child.terminal:
                    yield join(buffer)
                stack.append(iter(child.children.items()))
                break
            else:
                stack.pop()
                # The subtrie root's own iterator has no symbol in the buffer
                if stack:
                    buffer.pop()

    def collect_with_prefix(self, prefix: Any) -> list[Any]:
        """Return every stored key that starts with `prefix`.

        Args:
            prefix (Any): The prefix to search for.

        Returns:
            list: The matching keys, in no particular order. Empty if
            the prefix is longer than `max_key_length` or no stored
            key starts with it.

        """
        return list(self.iter_with_prefix(prefix))

    def __contains__(self, key: Any) -> bool:
        return self.exists(key)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        return self.iter_with_prefix(self._alphabet.empty)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(alphabet={self._alphabet.name!r}, "
            f"max_key_length={self._max_key_length}, size={self._size})"
        )
