# Command line entry point: counts tombstones in a table directory and writes a CSV report.
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from tombstone_audit.core.audit import TombstoneAudit
from tombstone_audit.core.config import DEFAULT_REPORT_NAME, AuditConfig
from tombstone_audit.core.errors import (
    InputDirectoryError,
    NoDataFilesError,
    ReportExistsError,
    ReportWriteError,
)

EXIT_OK = 0
EXIT_BAD_DIRECTORY = 3
EXIT_REPORT_EXISTS = 4
EXIT_REPORT_UNWRITABLE = 5
EXIT_NO_DATA_FILES = 6


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tombstone-audit",
        description="SSTable tombstone counter for Apache Cassandra 3.x and later",
    )
    p.add_argument(
        "-d",
        "--dir",
        type=Path,
        default=Path.cwd(),
        help="Cassandra table data directory (default: current directory)",
    )
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path(DEFAULT_REPORT_NAME),
        help=f"Output file for tombstone stats (default: {DEFAULT_REPORT_NAME})",
    )
    p.add_argument(
        "-sp",
        "--suppress",
        action="store_true",
        help="Suppress command line progress output",
    )
    p.add_argument(
        "--sstabledump",
        default=os.environ.get("SSTABLEDUMP", "sstabledump"),
        help="sstabledump executable (default: $SSTABLEDUMP or sstabledump)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    config = AuditConfig(
        data_dir=args.dir,
        output_path=args.output,
        show_progress=not args.suppress,
        sstabledump_command=args.sstabledump,
    )

    try:
        TombstoneAudit(config).run()
    except InputDirectoryError as e:
        print(f"\nError: {e}")
        return EXIT_BAD_DIRECTORY
    except ReportExistsError as e:
        print(f"\nError: {e}")
        return EXIT_REPORT_EXISTS
    except ReportWriteError as e:
        print(f"\nError: {e}")
        return EXIT_REPORT_UNWRITABLE
    except NoDataFilesError as e:
        print(f"\nError: {e}")
        return EXIT_NO_DATA_FILES

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
