from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

import pptx2text
from pptx2text.extractors.data_types import PptxContent
from pptx2text.extractors.render import to_structured


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pptx2text",
        description="Extract presentation content and emit plain text to stdout (or JSON with --json).",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the presentation to extract.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the structured slide rendering as JSON instead of plain text.",
    )
    return parser


def _serialize_results(results: list[PptxContent]) -> dict | list[dict]:
    if len(results) == 1:
        return to_structured(results[0])
    return [to_structured(result) for result in results]


def _serialize_full_text(results: list[PptxContent]) -> str:
    return "\n\n".join(result.get_full_text().rstrip() for result in results).rstrip()


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args, unknown = parser.parse_known_args(argv)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code

    if unknown:
        unknown_str = " ".join(unknown)
        print(
            f"pptx2text: warning: unsupported arguments: {unknown_str}",
            file=sys.stderr,
        )
        return 1

    try:
        results = list(pptx2text.read_file(args.path))
        if not results:
            raise RuntimeError(f"No extraction results for {args.path}")
        if args.json:
            json.dump(_serialize_results(results), sys.stdout, ensure_ascii=False)
            sys.stdout.write("\n")
        else:
            sys.stdout.write(_serialize_full_text(results))
            sys.stdout.write("\n")
        return 0
    except Exception as exc:
        print(f"pptx2text: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
