"""Benchmark the prefix trie operations."""

import gc
import json
import random
import time
import tracemalloc
from pathlib import Path
from typing import Callable

import matplotlib.pyplot as plt
import psutil

from prefix_store.trie import PrefixTrie

MAX_KEY_LENGTH = 128
KEY_SIZES = [8, 16, 32, 64, 128]
PREFIX_KEY_COUNTS = [10, 50, 100, 200]
ITERATIONS = 10000
LETTER_RUNES = "aãbãcãdãefghãiãjãkãlmãnopãqrãsããtuãvwãxãyz"
RESULTS_DIR = (
    Path(__file__).parent.parent / "static" / "benchmarks" / "prefix_trie"
)

rng = random.Random(0)


def random_key(size: int) -> str:
    """Build a random key of `size` code points.

    Args:
        size (int): The number of code points in the key.

    Returns:
        str: The random key.

    """
    return "".join(rng.choice(LETTER_RUNES) for _ in range(size))


def time_per_call_ns(func: Callable[[], object], iterations: int) -> float:
    """Measure the average duration of calling `func`.

    Args:
        func (Callable): The operation under test.
        iterations (int): How many times to call it.

    Returns:
        float: Average nanoseconds per call.

    """
    start = time.perf_counter_ns()
    for _ in range(iterations):
        func()
    return (time.perf_counter_ns() - start) / iterations


def benchmark_insert() -> dict[int, float]:
    results: dict[int, float] = {}
    for size in KEY_SIZES:
        trie = PrefixTrie(MAX_KEY_LENGTH)
        key = random_key(size)
        results[size] = time_per_call_ns(lambda: trie.insert(key), ITERATIONS)
        print(f"insert    size={size:<4} {results[size]:10.1f} ns/op")
    return results


def benchmark_exists() -> dict[int, float]:
    results: dict[int, float] = {}
    for size in KEY_SIZES:
        trie = PrefixTrie(MAX_KEY_LENGTH)
        key = random_key(size)
        trie.insert(key)
        results[size] = time_per_call_ns(lambda: trie.exists(key), ITERATIONS)
        print(f"exists    size={size:<4} {results[size]:10.1f} ns/op")
    return results


def benchmark_prefix_search() -> dict[str, float]:
    """Search for keys sharing their first symbol.

    Returns:
        dict[str, float]: ns/op keyed by "<key size>_<key count>".

    """
    results: dict[str, float] = {}
    for count in PREFIX_KEY_COUNTS:
        for size in KEY_SIZES:
            trie = PrefixTrie(MAX_KEY_LENGTH)
            for _ in range(count):
                trie.insert("a" + random_key(size - 1))
            label = f"{size}_{count}"
            results[label] = time_per_call_ns(
                lambda: trie.collect_with_prefix("a"),
                ITERATIONS // 100,
            )
            print(f"prefix    {label:<8} {results[label]:12.1f} ns/op")
    return results


def measure_memory(key_count: int = 20000) -> dict[str, float]:
    """Measure the memory used by a trie of random keys.

    Args:
        key_count (int): How many keys to insert.

    Returns:
        dict[str, float]: Traced peak and RSS growth, in MiB.

    """
    gc.collect()
    process = psutil.Process()
    rss_before = process.memory_info().rss
    tracemalloc.start()
    try:
        trie = PrefixTrie(MAX_KEY_LENGTH)
        for _ in range(key_count):
            trie.insert(random_key(1 + rng.randrange(MAX_KEY_LENGTH - 1)))
        _current, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    rss_after = process.memory_info().rss

    memory = {
        "keys": float(len(trie)),
        "traced_peak_mib": peak / 1024 / 1024,
        "rss_growth_mib": (rss_after - rss_before) / 1024 / 1024,
    }
    print(
        f"memory    keys={key_count} traced peak "
        f"{memory['traced_peak_mib']:.2f} MiB, RSS growth "
        f"{memory['rss_growth_mib']:.2f} MiB",
    )
    return memory


def plot(results: dict[str, float], title: str, file_name: str) -> None:
    """Save a bar chart of ns/op per benchmark case."""
    labels = [str(label) for label in results]
    y_values = list(results.values())

    plt.figure(figsize=(10, 5))
    x = range(len(labels))
    plt.bar(x, y_values, color="steelblue")
    plt.xticks(x, labels, rotation=45)
    plt.xlabel("Case")
    plt.ylabel("Time (ns/op)")
    plt.title(title)

    for i, v in enumerate(y_values):
        plt.text(i, v, f"{v:.0f}", ha="center", va="bottom", fontsize=7)

    plt.tight_layout()
    plt.savefig(RESULTS_DIR / file_name)
    plt.close("all")


def main() -> None:
    """Main function."""
    RESULTS_DIR.mkdir(parents=True, exist_ok=True)

    print("\n--- Benchmark Running ---")
    insert_results = benchmark_insert()
    exists_results = benchmark_exists()
    prefix_results = benchmark_prefix_search()
    memory = measure_memory()

    plot(
        {str(k): v for k, v in insert_results.items()},
        "insert by key size",
        "benchmark_insert.png",
    )
    plot(
        {str(k): v for k, v in exists_results.items()},
        "exists by key size",
        "benchmark_exists.png",
    )
    plot(
        prefix_results,
        "collect_with_prefix by key size and key count",
        "benchmark_prefix_search.png",
    )

    results_json_path = RESULTS_DIR / "results.json"
    with open(results_json_path, "w", encoding="utf-8") as f:
        json.dump(
            {
                "insert": insert_results,
                "exists": exists_results,
                "prefix_search": prefix_results,
                "memory": memory,
            },
            f,
            indent=4,
        )
    print(f"--- Results written to {results_json_path} ---\n")


if __name__ == "__main__":
    main()
