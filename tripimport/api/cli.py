"""
Terminal entrypoint for the paste-import pipeline.

Architectural role:
- Runs one paste import from a file or stdin without an HTTP server.
- Delegates all handling to `tripimport.core.engine.handle_paste_import`.

Request lifecycle:
1. Read pasted text from the FILE argument, or stdin when absent.
2. Build the request envelope (`text`, optional `tripContext.destination`).
3. Run the selected variant with the credential from `provider_config.load_key`.
4. Print `{"items": [...]}` to stdout (exit 0), or the diagnostic to stderr (exit 1).

Usage:
    python -m tripimport.api.cli notes.txt
    python -m tripimport.api.cli --mode plan --destination Lisbon < notes.txt
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tripimport.core.engine import handle_paste_import
from tripimport.llm.provider_config import VARIANTS, load_key


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Turn pasted travel text into trip items.")
    parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=None,
        help="File holding the pasted text. Reads stdin when omitted.",
    )
    parser.add_argument(
        "--mode",
        choices=sorted(VARIANTS),
        default="extract",
        help="extract: literal extraction. plan: generate a day of recommendations.",
    )
    parser.add_argument(
        "--destination",
        type=str,
        default=None,
        help="Trip destination placed in tripContext.destination.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log pipeline progress to stderr.",
    )
    return parser.parse_args(argv)


def build_body(text: str, destination: Optional[str]) -> dict:
    body = {"text": text, "existingItems": []}
    if destination:
        body["tripContext"] = {"destination": destination}
    return body


def main(argv: Optional[List[str]] = None, post=None) -> int:
    """Run one import and return the process exit code."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    if args.file is not None:
        text = args.file.read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    options = {"config": VARIANTS[args.mode], "api_key": load_key()}
    if post is not None:
        options["post"] = post

    result = handle_paste_import("POST", build_body(text, args.destination), **options)

    if not result.ok:
        print(f"Error ({result.status_code}): {result.content}", file=sys.stderr)
        return 1

    print(json.dumps(result.content, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
