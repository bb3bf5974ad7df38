from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_table_config
from ..errors import TableError
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.error_record import ErrorRecord
from ..services.checker import check_files, load_file
from ..services.summary import render_summary_line

"""CLI entrypoint.

Commands:
- check FILE [FILE ...]: load every file against the table definition, print SUMMARY
- render FILE: load one file and print it re-rendered as delimited text
- json FILE: load one file and print the raw row store as JSON

Table definition path resolution: --schema, then $SCHEMATAB_SCHEMA (a `.env`
in the working directory is honoured), then config/table.yml.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_TABLE_ERROR = 2

DEFAULT_SCHEMA_PATH = Path("config/table.yml")
SCHEMA_ENV = "SCHEMATAB_SCHEMA"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (existing environment wins unless override)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="schematab", description="Schema-governed delimited table tool")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--schema", type=Path, default=None, help="YAML table definition")
    sub = p.add_subparsers(dest="command", required=True)
    check = sub.add_parser("check", help="Load files and report a SUMMARY line")
    check.add_argument("files", nargs="+", type=Path)
    render = sub.add_parser("render", help="Load a file and print it re-rendered")
    render.add_argument("file", type=Path)
    dump = sub.add_parser("json", help="Load a file and print its rows as JSON")
    dump.add_argument("file", type=Path)
    return p.parse_args(argv)


def _resolve_schema_path(arg: Path | None) -> Path:
    if arg is not None:
        return arg
    env = os.getenv(SCHEMA_ENV)
    if env:
        return Path(env)
    return DEFAULT_SCHEMA_PATH


def _run_single(cfg, path: Path, command: str, logger) -> int:
    try:
        table = load_file(cfg, path)
    except TableError as e:
        logger.error(f"file={path.name} {e.error_type}: {e}")
        buf = ErrorLogBuffer()
        buf.append(ErrorRecord.from_error(path.name, e))
        buf.flush()
        return EXIT_TABLE_ERROR
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"cannot read {path}: {e}")
        return EXIT_FATAL
    if command == "render":
        sys.stdout.write(table.render())
    else:
        # datetime 等は想定外 (load 由来の値は文字列のみ)
        sys.stdout.write(json.dumps(table.to_json(), ensure_ascii=False, indent=2) + "\n")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで main([...]) を直接呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    schema_path = _resolve_schema_path(args.schema)
    try:
        cfg = load_table_config(schema_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    logger.debug(f"table definition: {schema_path} columns={cfg.schema.ids}")

    if args.command in ("render", "json"):
        if not args.file.exists():
            logger.error(f"file not found: {args.file}")
            return EXIT_FATAL
        return _run_single(cfg, args.file, args.command, logger)

    missing = [p for p in args.files if not p.exists()]
    if missing:
        logger.error(f"file not found: {', '.join(str(p) for p in missing)}")
        return EXIT_FATAL

    result = check_files(cfg, args.files)
    # render_summary_line は "SUMMARY " 付きで返すので接頭辞を除いて出力
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_TABLE_ERROR if result.failed_files > 0 else EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
