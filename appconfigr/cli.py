from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from appconfigr.core import AppConfigr
from appconfigr.errors import ConfigError
from appconfigr.formats import available_formats
from appconfigr.observability import configure_logging


logger = logging.getLogger(__name__)

_SECRET_MARKERS = ("api_key", "token", "secret", "password")


def _looks_secret(name: str) -> bool:
    return any(p in name.lower() for p in _SECRET_MARKERS)


def _secret_values(config: AppConfigr, names: Sequence[str]) -> frozenset[str]:
    """Values substituted from variables whose names look like secrets."""

    out: set[str] = set()
    for doc in names:
        for expr in config.variables(doc):
            if not _looks_secret(expr.value):
                continue
            result = config.resolver.resolve(expr.value)
            if result and result.value:
                out.add(result.value)
    return frozenset(out)


def _redact_secrets(obj: Any, secret_values: frozenset[str] = frozenset()) -> Any:
    """Redact secret-looking keys and strings carrying a secret variable's value."""

    if isinstance(obj, dict):
        out = {}
        for k, v in obj.items():
            if isinstance(k, str) and _looks_secret(k):
                out[k] = "<redacted>"
            else:
                out[k] = _redact_secrets(v, secret_values)
        return out
    if isinstance(obj, list):
        return [_redact_secrets(x, secret_values) for x in obj]
    if isinstance(obj, str) and any(s in obj for s in secret_values):
        return "<redacted>"
    return obj


def _parse_property(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    return key, value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appconfigr",
        description="Inspect configuration documents the way AppConfigr loads them",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g. DEBUG, INFO, WARNING)")
    parser.add_argument(
        "--dir",
        type=Path,
        default=None,
        help="Config directory (default: $APPCONFIGR_CONFIG_DIR or ./config)",
    )
    parser.add_argument("--format", choices=available_formats(), default="yaml", help="Document format")
    parser.add_argument(
        "--property",
        dest="properties",
        action="append",
        type=_parse_property,
        default=[],
        metavar="KEY=VALUE",
        help="Property used for ${...} expansion; wins over environment variables",
    )
    parser.add_argument("--dotenv", type=Path, default=None, help="Also resolve variables from this .env file")

    sub = parser.add_subparsers(dest="command", required=True)

    print_p = sub.add_parser("print-config", help="Load, expand and merge a document, print it as JSON")
    print_p.add_argument("name", help="File name relative to the config directory")
    print_p.add_argument(
        "--overlay",
        dest="overlays",
        action="append",
        default=[],
        help="Document merged on top (repeatable, later wins)",
    )
    print_p.add_argument("--no-redact", action="store_true", help="Print secret-looking values as-is")

    vars_p = sub.add_parser("variables", help="List ${...} variables referenced by a document")
    vars_p.add_argument("name", help="File name relative to the config directory")

    return parser


def _build_appconfigr(ns: argparse.Namespace) -> AppConfigr:
    builder = AppConfigr.from_directory(ns.dir) if ns.dir is not None else AppConfigr.from_default_directory()
    builder.with_format(ns.format).with_properties(dict(ns.properties))
    if ns.dotenv is not None:
        builder.with_dotenv(ns.dotenv)
    return builder.build()


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        ns = parser.parse_args(list(argv) if argv is not None else None)
    except SystemExit as e:
        code = e.code
        return int(code) if isinstance(code, int) else 1

    configure_logging(level=ns.log_level)

    try:
        config = _build_appconfigr(ns)

        if ns.command == "print-config":
            tree = config.load_tree(ns.name, *ns.overlays)
            if not ns.no_redact:
                tree = _redact_secrets(tree, _secret_values(config, [ns.name, *ns.overlays]))
            sys.stdout.write(json.dumps(tree, ensure_ascii=False, indent=2, default=str))
            sys.stdout.write("\n")
            return 0

        resolver = config.resolver
        for name in dict.fromkeys(e.value for e in config.variables(ns.name)):
            status = "resolved" if resolver.resolve(name) else "unresolved"
            sys.stdout.write(f"{name}\t{status}\n")
        return 0

    except (ConfigError, ValueError) as e:
        logger.error("config_error", extra={"error": str(e)})
        sys.stderr.write(f"ConfigError: {e}\n")
        return 2
    except Exception as e:  # noqa: BLE001
        logger.exception("fatal_error")
        sys.stderr.write(f"Fatal error: {e}\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
