"""Command-line interface for pagecheck."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from analyze.theme import analyze_theme
from contract.report import format_text, write_jsonl
from rules import ALL_CHECKS
from rules.config import ConfigError, load_config, with_bounds
from verify.verify import verify_determinism


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Theme root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pagecheck")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Check Liquid templates")
    _add_common_paths(check_parser)
    check_parser.add_argument(
        "--out",
        default=None,
        help="Also write diagnostics as JSONL to this file",
    )
    check_parser.add_argument(
        "--min-size",
        type=int,
        default=None,
        help="Override the smallest allowed page size",
    )
    check_parser.add_argument(
        "--max-size",
        type=int,
        default=None,
        help="Override the largest allowed page size",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of diagnostics"
    )
    _add_common_paths(verify_parser)

    subparsers.add_parser("list-checks", help="List available checks")

    return parser


def _handle_check(
    root: Path,
    out: str | None,
    min_size: int | None,
    max_size: int | None,
) -> int:
    try:
        config = with_bounds(load_config(root), min_size=min_size, max_size=max_size)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    records = analyze_theme(root=root, config=config)
    for record in records:
        sys.stdout.write(f"{format_text(record)}\n")

    if out is not None:
        out_path = Path(out).expanduser().resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        write_jsonl(out_path, records)

    return 1 if records else 0


def _handle_verify(root: Path) -> int:
    try:
        result = verify_determinism(root=root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except NotADirectoryError as exc:
        sys.stderr.write(f"root: {root}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for mismatch in result.mismatches:
            sys.stderr.write(f"mismatch: {mismatch}\n")
        return 1
    return 0


def _handle_list_checks() -> int:
    for check in ALL_CHECKS:
        meta = check.meta
        sys.stdout.write(f"{meta.code}\t{meta.severity.value}\t{meta.name}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if args.command == "list-checks":
        return _handle_list_checks()

    root = Path(args.root).expanduser().resolve()

    if args.command == "check":
        return _handle_check(root, args.out, args.min_size, args.max_size)

    if args.command == "verify":
        return _handle_verify(root)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
