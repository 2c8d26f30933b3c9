#!/usr/bin/env python3
"""Decrypt all PDF files in a directory using a password list.

To begin, run ``pdecrypt init DD/MM/YYYY CITIZEN_ID`` to store a password
list built from your date of birth and citizen ID. Then run
``pdecrypt decrypt -i /path/to/pdfs`` to write decrypted copies of every
PDF in that directory to a new directory next to it.

Dates may be typed in either the Common Era (e.g. 1994) or the Buddhist
Era (e.g. 2537); both renderings end up in the password list.

Usage:
    pdecrypt init <DD/MM/YYYY> <citizen_id> [--pw-list <file>]

    pdecrypt decrypt [-i <input_dir>] [-o <output_dir>] [--pw-list <file>] [--report <file.xlsx>]
"""

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pdecrypt import __version__
from pdecrypt.config.password_list import PasswordList, load_password_list, save_password_list
from pdecrypt.config.settings import OUTPUT_DIR_TIMESTAMP_FORMAT, Settings
from pdecrypt.excel_generator.report import ReportExporter
from pdecrypt.passwords.generator import generate_candidates
from pdecrypt.pdf_processor.batch import BatchDecryptor, BatchReport
from pdecrypt.utils.exceptions import PDecryptError, ReportExportError, ValidationError
from pdecrypt.utils.logger import get_logger, setup_logger
from pdecrypt.utils.validators import parse_birth_date, parse_citizen_id, validate_input_directory


class StatementDecryptionTool:
    """Main entry point for the init and decrypt operations."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the tool.

        Args:
            settings: Settings to use; read from the environment if omitted.
        """
        self.settings = settings or Settings.from_env()
        self.logger = get_logger(__name__)
        self.password_list: Optional[PasswordList] = None

    def init_password_list(self, dob: str, citizen_id: str) -> PasswordList:
        """Generate the candidate list and persist it.

        Args:
            dob: Date of birth as DD/MM/YYYY.
            citizen_id: Citizen ID number.

        Returns:
            The stored password list.

        Raises:
            InvalidDateError: If the date is invalid. Nothing is written.
            InvalidCitizenIdError: If the ID is malformed. Nothing is written.
        """
        birth_date = parse_birth_date(dob)
        digits = parse_citizen_id(citizen_id, self.settings.citizen_id_length)

        password_list = PasswordList(
            passwords=generate_candidates(birth_date, digits, self.settings.citizen_id_length)
        )
        save_password_list(password_list, self.settings.pw_list_file)

        self.logger.info("Init done!")
        return password_list

    def default_output_dir(self, input_dir: Path) -> Path:
        """Derive ``<input>_pdfs_decrypted_<timestamp>`` next to input_dir.

        Raises:
            ValidationError: If the derived directory already exists.
        """
        input_dir = input_dir.resolve()
        timestamp = datetime.now().strftime(OUTPUT_DIR_TIMESTAMP_FORMAT)
        output_dir = input_dir.parent / f"{input_dir.name}{self.settings.output_dir_suffix}{timestamp}"

        if output_dir.exists():
            raise ValidationError(f"Output directory already exists: {output_dir}")

        return output_dir

    def decrypt_directory(
        self,
        input_dir: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> BatchReport:
        """Decrypt every PDF in input_dir with the stored password list.

        Args:
            input_dir: Directory of PDFs; defaults to the working directory.
            output_dir: Destination directory; derived from input_dir if omitted.

        Returns:
            Report of per-file outcomes.

        Raises:
            ConfigMissingError: If ``init`` has not been run.
            DirectoryUnreadableError: If input_dir cannot be read.
        """
        password_list = load_password_list(self.settings.pw_list_file)
        self.password_list = password_list

        input_path = Path(input_dir) if input_dir else Path.cwd()
        validate_input_directory(str(input_path))
        self.logger.info(f"Input directory: {input_path}")

        output_path = Path(output_dir) if output_dir else self.default_output_dir(input_path)
        self.logger.info(f"Output directory: {output_path}")

        batch = BatchDecryptor(
            password_list.passwords,
            supported_formats=self.settings.supported_pdf_formats
        )
        return batch.decrypt_all(input_path, output_path)

    def export_report(self, report: BatchReport, report_path: str) -> Optional[str]:
        """Export the batch report to Excel; failures are logged, not raised."""
        candidates = self.password_list.passwords if self.password_list else None
        try:
            return ReportExporter().export(report, report_path, candidates)
        except ReportExportError as e:
            self.logger.error(str(e))
            return None


def print_report(report: BatchReport) -> None:
    """Print one line per file followed by the summary counts."""
    for result in report.results:
        line = f"  [{result.status.value}] {result.job.name}"
        if result.error:
            line += f": {result.error}"
        print(line)

    summary = report.summary()
    print(
        f"Done! {summary['decrypted']} decrypted "
        f"({summary['passthrough']} pass-through), "
        f"{summary['failed']} failed, {summary['skipped']} skipped. "
        f"Output: {report.output_dir}"
    )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list; defaults to ``sys.argv[1:]``.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="pdecrypt",
        description="Decrypt all PDF files in a directory using a password list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Build the password list from date of birth and citizen ID
    pdecrypt init 27/12/1994 1234567890123

    # Decrypt the statements in ./statements into a new sibling directory
    pdecrypt decrypt -i ./statements

    # Decrypt into a chosen directory and write an Excel report
    pdecrypt decrypt -i ./statements -o ./decrypted --report report.xlsx
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging"
    )

    # subcommand copy must not reset a -v given before the subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Enable debug logging"
    )
    common.add_argument(
        "-p", "--pw-list",
        type=str,
        default=None,
        help="Password list file (default: ~/.pdecrypt/pw_list.json)"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    init_parser = subparsers.add_parser(
        "init",
        parents=[common],
        help="Initialize the password list from date of birth and citizen ID"
    )
    init_parser.add_argument("dob", help="Date of birth, e.g. 01/01/1999, 27/12/1994")
    init_parser.add_argument("citizen_id", help="13-digit citizen ID number")

    decrypt_parser = subparsers.add_parser(
        "decrypt",
        parents=[common],
        help="Decrypt all PDF files in a directory"
    )
    decrypt_parser.add_argument(
        "-i", "--input-dir",
        type=str,
        default=None,
        help="Directory containing PDF files (default: current directory)"
    )
    decrypt_parser.add_argument(
        "-o", "--output-dir",
        type=str,
        default=None,
        help="Output directory (default: <INPUT_DIR>_pdfs_decrypted_<TIMESTAMP>)"
    )
    decrypt_parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Write a per-file Excel report to this .xlsx file"
    )

    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Apply command line overrides on top of environment settings."""
    settings = Settings.from_env()
    settings.update({
        "pw_list_file": os.path.expanduser(args.pw_list) if args.pw_list else None,
        "log_level": "DEBUG" if args.verbose else None,
    })
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        args = parse_arguments(argv)
        settings = build_settings(args)

        setup_logger(
            level=settings.get_log_level(),
            logs_dir=settings.logs_dir,
            to_file=settings.log_to_file,
            log_format=settings.log_format
        )
        if not settings.validate():
            raise ValidationError("Invalid settings, check PDECRYPT_* environment variables")
        settings.create_directories()
        get_logger(__name__).debug(f"Settings: {settings.to_dict()}")

        tool = StatementDecryptionTool(settings)

        if args.command == "init":
            password_list = tool.init_password_list(args.dob, args.citizen_id)
            print(f"Saved {len(password_list)} candidate passwords to {settings.pw_list_file}")
            return 0

        if args.command == "decrypt":
            report = tool.decrypt_directory(args.input_dir, args.output_dir)
            print_report(report)
            if args.report:
                report_path = tool.export_report(report, args.report)
                if report_path:
                    print(f"Report created: {report_path}")
            return 0

        return 1

    except PDecryptError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
