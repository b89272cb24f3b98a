"""bas2c CLI entry point."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .assembler import StrayClosePolicy
from .repl import BasicREPL
from .session import DEFAULT_OUTPUT, TranslationSession, read_source_lines

LOG = logging.getLogger("bas2c.cli")


def _report(payload: Mapping[str, Any], message: str, json_output: bool) -> None:
    if json_output:
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        print(message)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Translate BASIC-like scripts to C")
    parser.add_argument("source", nargs="?", help="BASIC source file (default: read stdin / interactive prompt)")
    parser.add_argument("-o", "--output", type=Path, default=Path(DEFAULT_OUTPUT), help="Destination C file")
    parser.add_argument(
        "-c",
        "--command",
        help="Translate a program given as a string (newline separated lines)",
    )
    parser.add_argument(
        "--stray-endfunction",
        choices=[policy.value for policy in StrayClosePolicy],
        default=StrayClosePolicy.IGNORE.value,
        help="Handling of ENDFUNCTION outside a function (default ignore)",
    )
    parser.add_argument(
        "--history",
        type=Path,
        default=Path.home() / ".bas2c-history",
        help="Path to prompt history file (interactive mode)",
    )
    parser.add_argument("--json", action="store_true", help="Emit a JSON summary when done")
    parser.add_argument("--log-level", default=os.environ.get("BAS2C_LOG", "WARNING"), help="Logging level (default WARNING)")
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    session = TranslationSession(
        output_path=args.output,
        stray_close=StrayClosePolicy(args.stray_endfunction),
    )
    try:
        with session:
            if args.command is not None:
                session.feed_lines(args.command.splitlines())
            elif args.source and args.source != "-":
                with open(args.source, "r", encoding="utf-8") as fh:
                    session.feed_lines(read_source_lines(fh))
            else:
                BasicREPL(session, history_path=str(args.history)).run()
    except OSError as exc:
        LOG.debug("translation aborted", exc_info=True)
        _report({"status": "error", "error": str(exc)}, f"error: {exc}", args.json)
        return 1
    result: Dict[str, Any] = {"status": "ok", "result": session.summary()}
    _report(result, f"Translation complete. Output written to {args.output}", args.json)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
