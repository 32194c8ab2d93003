"""Command line runner.

    formcheck RULES RECORD [--format text|json] [--log-level LEVEL] [--json-logs]

Validates one record (YAML or JSON file holding a mapping) against a rule
set and exits 0 when valid, 1 when any field failed and 2 on a
configuration error.
"""
from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping
from typing import Sequence

from formcheck import __version__
from formcheck.core.config import settings
from formcheck.core.errors import ConfigurationError, invalid_rule_set, raise_error, raise_result
from formcheck.core.logging import bind_context, clear_context, cli_logger, configure_logging
from formcheck.validation.schema import load_rule_set, read_document

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_CONFIG = 2

log = cli_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formcheck",
        description="Validate a record against a rule set",
    )
    parser.add_argument("rules", help="Rule set file (YAML or JSON)")
    parser.add_argument("record", help="Record file (YAML or JSON mapping of field -> value)")
    parser.add_argument("--format", choices=("text", "json"), default="text", help="Output format")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Log level (default: %(default)s)")
    parser.add_argument("--json-logs", action="store_true", default=settings.LOG_JSON, help="Emit JSON logs on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_record(path: str) -> Mapping:
    record = raise_result(read_document(path))
    if not isinstance(record, Mapping):
        raise_error(invalid_rule_set("record must be a mapping of field -> value", path, origin="cli").error)
    return record


def render(errors: Mapping, fmt: str) -> str:
    if fmt == "json":
        return json.dumps({str(k): v for k, v in errors.items()}, ensure_ascii=False, indent=2)
    if not errors:
        return "All fields valid."
    return "\n".join(f"{alias}: {message}" for alias, message in errors.items())


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, json_logs=args.json_logs)

    bind_context(rules=args.rules, record=args.record)
    try:
        rule_set = load_rule_set(args.rules)
        record = load_record(args.record)
        errors = rule_set.validate_record(record)
    except ConfigurationError as e:
        log.error("configuration_error", error_id=e.error.error_id, category=e.code.category)
        if args.format == "json":
            print(json.dumps(e.error.to_dict(), ensure_ascii=False, default=str), file=sys.stderr)
        else:
            print(f"formcheck: {e.error.message}", file=sys.stderr)
        return EXIT_CONFIG
    else:
        log.info("record_checked", fields=len(rule_set.fields), failed=len(errors))
        print(render(errors, args.format))
        return EXIT_INVALID if errors else EXIT_OK
    finally:
        clear_context()


if __name__ == "__main__":
    sys.exit(main())
