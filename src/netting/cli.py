"""Командная строка: неттинг матрицы требований из файла.

    python -m src.netting.cli matrix.txt --stats --claims 0 --encode-out table.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from src.netting.config import NettingConfig
from src.netting.errors import InputError
from src.netting.loader import matrix_dimension, read_matrix_tokens
from src.netting.table import NettingTable

logger = logging.getLogger(__name__)


def cmd_net(args: argparse.Namespace) -> int:
    try:
        values = read_matrix_tokens(args.file)
    except InputError as exc:
        print(f"[fatal] {exc}", file=sys.stderr)
        return 1

    config = NettingConfig(max_passes=None if args.until_stable else int(args.passes))

    print(f"Input graph has {matrix_dimension(values)} nodes.\n")
    table = NettingTable.from_matrix(values, config=config)
    print(table.to_text(), end="")

    result = table.optimize()
    print(f"Number of cycles in graph: {result.cycles_found} ")
    print(f"{result.cycles_skipped} cycles were skipped.")
    if result.passes > 1:
        print(f"{result.passes} optimization passes were run.")
    print(table.to_text(), end="")

    if args.stats:
        print(table.stats_json())
    if args.claims is not None:
        print(table.claims_json(int(args.claims)))
    if args.encode_out is not None:
        out_path = Path(args.encode_out)
        try:
            out_path.write_bytes(table.to_bytes())
        except OSError as exc:
            print(f"[fatal] Cannot write {str(out_path)!r}: {exc}", file=sys.stderr)
            return 1
        print("[info] wrote", out_path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="netting", description="Multilateral netting of a bilateral claims matrix."
    )
    p.add_argument("file", nargs="?", default=None, help="Whitespace-separated N×N claims matrix.")
    p.add_argument("--passes", type=int, default=1, help="Cycle cancellation passes (default: 1).")
    p.add_argument(
        "--until-stable",
        action="store_true",
        help="Repeat cancellation passes until no cycle remains (overrides --passes).",
    )
    p.add_argument("--stats", action="store_true", help="Print the stats payload after optimization.")
    p.add_argument("--claims", type=int, default=None, help="Print mirrored claims of this counterparty.")
    p.add_argument("--encode-out", type=Path, default=None, help="Write the optimized graph payload here.")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING).",
    )
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.file is None:
        p.print_usage()
        print("Provide a file name as a command line argument.")
        return 0
    if args.passes < 1:
        p.error(f"--passes must be >= 1, got {args.passes}")

    return cmd_net(args)


if __name__ == "__main__":
    sys.exit(main())
