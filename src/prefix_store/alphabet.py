"""Symbol alphabets the prefix trie can be parameterised with.

An alphabet tells the trie which key types it accepts and how to turn a
list of symbols back into a key of that type. Iterating a ``str`` yields
one-character strings (code points), iterating ``bytes`` yields ints
(0-255), so the same trie algorithms work for both.
"""

from typing import Any, Callable


class Alphabet:
    """Describe one kind of key the trie can store."""

    __slots__ = ("name", "key_types", "join", "empty")

    def __init__(
        self,
        name: str,
        key_types: tuple[type, ...],
        join: Callable[[list[Any]], Any],
        empty: Any,
    ) -> None:
        """Initialize an alphabet.

        Args:
            name (str): Short name used in configuration files.
            key_types (tuple[type, ...]): Types accepted as keys.
            join (Callable): Builds a fresh key from a list of symbols.
            empty (Any): The empty key of this alphabet.

        """
        self.name = name
        self.key_types = key_types
        self.join = join
        self.empty = empty

    def check(self, key: Any) -> None:
        """Reject keys that do not belong to this alphabet.

        Args:
            key (Any): The key to check.

        Raises:
            TypeError: If `key` is not one of the accepted key types.

        """
        if not isinstance(key, self.key_types):
            accepted = ", ".join(t.__name__ for t in self.key_types)
            raise TypeError(
                f"{self.name} keys must be of type {accepted}, "
                f"got {type(key).__name__}",
            )

    def __repr__(self) -> str:
        return f"Alphabet({self.name!r})"


def _join_text(symbols: list[str]) -> str:
    return "".join(symbols)


TEXT = Alphabet("text", (str,), _join_text, "")
BYTES = Alphabet("bytes", (bytes, bytearray), bytes, b"")
TUPLE = Alphabet("tuple", (tuple, list), tuple, ())

_ALPHABETS = {alphabet.name: alphabet for alphabet in (TEXT, BYTES, TUPLE)}


def get_alphabet(name: str) -> Alphabet:
    """Look up an alphabet by its name.

    Args:
        name (str): One of "text", "bytes" or "tuple" (case-insensitive).

    Raises:
        ValueError: If no alphabet has that name.

    Returns:
        Alphabet: The matching alphabet.

    """
    try:
        return _ALPHABETS[name.strip().lower()]
    except KeyError as e:
        raise ValueError(
            f"Unknown alphabet '{name}'. "
            f"Expected one of: {', '.join(sorted(_ALPHABETS))}.",
        ) from e
