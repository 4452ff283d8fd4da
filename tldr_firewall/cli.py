# tldr_firewall/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from .config import ExportConfig
from .constants import MSG_NO_ROWS
from .csv_format import to_csv_string
from .io import load_config, read_document_text
from .pipeline import parse_tldr_text
from .validate import ValidateConfig, split_issues, validate_extraction
from .writer import default_filename, write_csv


def _fail(message: str) -> NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tldr-firewall",
        description="Export firewall rules drawn in a tldraw (.tldr) diagram to CSV.",
    )
    parser.add_argument("input", type=Path, help="Path to the .tldr diagram file")
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output CSV path, or '-' to print to stdout (no BOM).",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path("."),
        help="Directory for the dated default file name when --out is not given",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML export settings (bom, filename_template, strict, ignore, escalate).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help=(
            "Fail the export on diagnostic warnings (e.g., arrows bound at one end, "
            "arrows attached to unmarked shapes). Errors always fail."
        ),
    )
    parser.add_argument(
        "--no-bom",
        dest="bom",
        action="store_false",
        default=None,
        help="Do not prefix the CSV file with a UTF-8 BOM",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parsing details to stderr",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        cfg = load_config(args.config) if args.config else ExportConfig()
        text = read_document_text(args.input)
    except (OSError, ValueError, TypeError) as e:
        _fail(str(e))

    cfg = cfg.with_overrides(strict=args.strict, bom=args.bom)

    result = parse_tldr_text(text)
    if not result.success or result.extraction is None:
        _fail(result.error or "parse failed")

    issues = validate_extraction(
        result.extraction, ValidateConfig(ignore=cfg.ignore, escalate=cfg.escalate)
    )
    errors, warnings = split_issues(issues)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if errors or (cfg.strict and warnings):
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        raise SystemExit(2)

    rows = result.data
    if not rows:
        _fail(MSG_NO_ROWS)

    print(f"{len(rows)}개의 방화벽 규칙이 분석되었습니다.", file=sys.stderr)

    if args.out == "-":
        sys.stdout.write(to_csv_string(rows) + "\n")
        return

    out_path = Path(args.out) if args.out else args.out_dir / default_filename(cfg.filename_template)
    write_csv(out_path, rows, bom=cfg.bom)
    print(f"wrote {out_path}", file=sys.stderr)


if __name__ == "__main__":
    main()
