import argparse
import random
import string
import sys
import time
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from turbobloom import (
    DEFAULT_FALSE_POS,
    BloomError,
    BloomFilter,
    __version__,
    console,
    load_config,
    optimal_num_bits,
    optimal_num_hashes,
)

ALPHANUMERIC = string.ascii_letters + string.digits


def _dist_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "not installed"


def random_str(rng: random.Random, length: int = 30) -> str:
    return "".join(rng.choices(ALPHANUMERIC, k=length))


def cmd_info(args: argparse.Namespace) -> int:
    config = load_config()
    table = Table(title="turbobloom - Info")
    table.add_column("Component", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("turbobloom", __version__)
    table.add_row("mmh3 (H1)", _dist_version("mmh3"))
    table.add_row("xxhash (H2)", _dist_version("xxhash"))
    table.add_row("numpy", _dist_version("numpy"))
    table.add_row("Default approx items", str(config.approx_items))
    table.add_row("Default fp probability", str(config.fp_prob))
    table.add_row(
        "Seeds (murmur / xx)", f"{config.murmur_seed} / {config.xx_seed}"
    )
    console.print(table)
    return 0


def cmd_size(args: argparse.Namespace) -> int:
    num_bits = optimal_num_bits(args.items, args.probability)
    num_hashes = optimal_num_hashes(num_bits, args.items)
    table = Table(title=f"Sizing for n={args.items}, p={args.probability}")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Bits (m)", str(num_bits))
    table.add_row("Hashes (k)", str(num_hashes))
    table.add_row("Bytes", str((num_bits + 7) // 8))
    table.add_row("Bits per item", f"{num_bits / args.items:.2f}")
    console.print(table)
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    bf = BloomFilter.new(100)
    bf.set("foo")
    bf.set("bar")
    console.print(
        Panel(
            f"has('foo') = {bf.has('foo')}\n"
            f"has('bar') = {bf.has('bar')}\n"
            f"has('baz') = {bf.has('baz')}\n"
            f"num_items_approx() = {bf.num_items_approx():.2f}",
            title=repr(bf),
            border_style="cyan",
        )
    )
    return 0


def cmd_bench(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed)
    bf = BloomFilter(args.items, args.probability)
    members = {random_str(rng) for _ in range(args.items)}
    start = time.perf_counter()
    for item in members:
        bf.set(item)
    insert_secs = time.perf_counter() - start

    # Random strings can collide with members; those are skipped.
    absent: List[str] = []
    while len(absent) < args.queries:
        item = random_str(rng)
        if item not in members:
            absent.append(item)
    start = time.perf_counter()
    false_positives = sum(1 for item in absent if bf.has(item))
    query_secs = time.perf_counter() - start

    table = Table(title=f"Benchmark: {bf!r}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Inserted", str(len(members)))
    table.add_row(
        "Inserts / sec", f"{len(members) / max(insert_secs, 1e-9):,.0f}"
    )
    table.add_row("Queries", str(len(absent)))
    table.add_row(
        "Queries / sec", f"{len(absent) / max(query_secs, 1e-9):,.0f}"
    )
    table.add_row("Observed fp rate", f"{false_positives / len(absent):.4%}")
    table.add_row("Configured fp rate", f"{args.probability:.4%}")
    table.add_row("Estimated items", f"{bf.num_items_approx():,.1f}")
    console.print(table)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="turbobloom - Bloom filters with enhanced double hashing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="\nExamples:\n  turbobloom size 5000              Sizing for 5000 items at p=0.01\n  turbobloom size 5000 -p 0.001     Sizing at p=0.001\n  turbobloom bench -n 10000         Insert/query benchmark\n        ",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("info", help="Show library and default settings")
    size_parser = subparsers.add_parser(
        "size", help="Compute optimal bit and hash counts"
    )
    size_parser.add_argument("items", type=int, help="Expected item count")
    size_parser.add_argument(
        "-p",
        "--probability",
        type=float,
        default=DEFAULT_FALSE_POS,
        help="False positive probability",
    )
    subparsers.add_parser("demo", help="Run the foo/bar/baz example")
    bench_parser = subparsers.add_parser(
        "bench", help="Measure throughput and false positive rate"
    )
    bench_parser.add_argument(
        "-n", "--items", type=int, default=10000, help="Items to insert"
    )
    bench_parser.add_argument(
        "-p",
        "--probability",
        type=float,
        default=DEFAULT_FALSE_POS,
        help="False positive probability",
    )
    bench_parser.add_argument(
        "--queries", type=int, default=10000, help="Absent items to query"
    )
    bench_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for the items"
    )
    bench_parser.add_argument(
        "--debug", action="store_true", help="Print filter sizing diagnostics"
    )
    args = parser.parse_args(argv)

    commands = {
        "info": cmd_info,
        "size": cmd_size,
        "demo": cmd_demo,
        "bench": cmd_bench,
    }
    if args.command is None:
        args.command = "info"
    if args.command == "bench" and args.queries <= 0:
        parser.error("--queries must be positive")
    if getattr(args, "debug", False):
        BloomFilter.set_debug(True)
    try:
        status = commands[args.command](args)
    except BloomError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(2)
    sys.exit(status)


if __name__ == "__main__":
    main()
