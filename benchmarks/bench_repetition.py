"""
Benchmark: trampolined repetition over inputs of increasing size.

Time per item should stay flat as the input grows: cursors share the
input text and the loop accumulates into cons cells.

Usage:
    python benchmarks/bench_repetition.py
"""

import timeit
from combparse.Char import char, digit, letter, string
from combparse.Combinators import many1, sep_by
from combparse.Prim import many, run_parser


def bench_many_char(sizes: list[int], repeats: int = 5) -> dict[int, float]:
    """Benchmark many(char('a')) on strings of increasing size."""
    parser = many(char("a"))
    results = {}
    for n in sizes:
        data = "a" * n
        t = timeit.timeit(lambda: run_parser(parser, data), number=repeats)
        results[n] = t / repeats
    return results


def bench_string_match(sizes: list[int], repeats: int = 5) -> dict[int, float]:
    """Benchmark string() matching at the start of a large input."""
    results = {}
    for n in sizes:
        target = "hello"
        data = target + "x" * n
        parser = string(target)
        t = timeit.timeit(lambda: run_parser(parser, data), number=repeats)
        results[n] = t / repeats
    return results


def bench_csv_line(sizes: list[int], repeats: int = 5) -> dict[int, float]:
    """Benchmark sep_by(many1(letter()), char(',')) on n five-letter fields."""
    parser = sep_by(many1(letter()), char(","))
    results = {}
    for n in sizes:
        data = ",".join("abcde" for _ in range(n))
        t = timeit.timeit(lambda: run_parser(parser, data), number=repeats)
        results[n] = t / repeats
    return results


def bench_alternation(sizes: list[int], repeats: int = 5) -> dict[int, float]:
    """Benchmark many(digit() | letter()), which backtracks once per letter."""
    parser = many(digit() | letter())
    results = {}
    for n in sizes:
        data = "a1" * (n // 2)
        t = timeit.timeit(lambda: run_parser(parser, data), number=repeats)
        results[n] = t / repeats
    return results


def format_time(seconds: float) -> str:
    if seconds < 1e-3:
        return f"{seconds * 1e6:8.1f} us"
    elif seconds < 1:
        return f"{seconds * 1e3:8.2f} ms"
    else:
        return f"{seconds:8.3f}  s"


def print_results(name: str, results: dict[int, float]) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {name}")
    print(f"{'=' * 60}")
    print(f"  {'Size':>10}  {'Time':>12}  {'us / item':>12}")
    print(f"  {'-'*10}  {'-'*12}  {'-'*12}")

    for size, elapsed in results.items():
        print(f"  {size:>10,}  {format_time(elapsed)}  {elapsed * 1e6 / size:>12.2f}")


def main() -> None:
    sizes = [1_000, 5_000, 10_000, 50_000, 100_000]
    csv_sizes = [200, 1_000, 5_000, 10_000, 20_000]

    print("combparse repetition benchmark")
    print("=" * 60)

    suites = [
        ("many(char('a'))", bench_many_char, sizes),
        ("sep_by (CSV-like)", bench_csv_line, csv_sizes),
        ("string() match", bench_string_match, sizes),
        ("many(digit() | letter())", bench_alternation, sizes),
    ]

    for name, fn, sz in suites:
        results = fn(sz)
        print_results(name, results)

    print()


if __name__ == "__main__":
    main()
