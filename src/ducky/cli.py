#!/usr/bin/env python3
"""
ducky CLI — find byte-identical files and, on explicit confirmation, collapse them.
Nothing on disk changes unless --delete or --hardlink is combined with --yes.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
from typing import List, NoReturn, Optional

from ducky import __version__
from ducky.aliases import ACTION_ALIASES, ACTION_HELP_TEXT, EPILOG_TEXT, QUICK_BYTES_HELP_TEXT
from ducky.commands import DeduplicationCommand
from ducky.core.deduplicator import DeduplicatorImpl
from ducky.core.models import ActionMode, ActionStats, DeduplicationParams, DuplicateGroup, FileDescriptor
from ducky.services.report_service import ReportService
from ducky.utils.convert_utils import ConvertUtils

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.verbose: bool = False
        self.quiet: bool = False
        self.structured: bool = False  # stdout reserved for JSON

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="ducky",
            description="ducky — find candidate files for deduplication",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "paths",
            nargs="+",
            help="Files or directories to scan"
        )

        # Filtering options
        parser.add_argument(
            "--min-size",
            default="1KB",
            type=str,
            metavar="SIZE",
            help="Minimum file size to consider (e.g. 256KB, 1MB). Default: 1KB"
        )
        parser.add_argument(
            "--ext",
            default=None,
            type=str,
            metavar="LIST",
            help="Only include files with these extensions (comma-separated, e.g. jpg,png).\nAn empty list such as \" , \" matches no files"
        )
        parser.add_argument(
            "--hidden",
            action="store_true",
            help="Include hidden files and directories"
        )
        parser.add_argument(
            "--follow-symlinks",
            action="store_true",
            help="Follow symbolic links"
        )

        # Detection options
        parser.add_argument(
            "--quick-bytes",
            default="64KB",
            type=str,
            metavar="SIZE",
            help=QUICK_BYTES_HELP_TEXT
        )
        parser.add_argument(
            "--workers",
            default=1,
            type=int,
            metavar="N",
            help="Hash files on N threads. Default: 1"
        )

        # Output options
        parser.add_argument(
            "--list", "-l",
            action="store_true",
            help="List every matching file before the report"
        )
        output = parser.add_mutually_exclusive_group()
        output.add_argument(
            "--json",
            action="store_true",
            help="Print duplicate groups as JSON instead of human text"
        )
        output.add_argument(
            "--summary-json",
            action="store_true",
            help="Print only a single summary JSON object with aggregate stats"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress per-group listings and print only the final summary"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging, statistics and progress"
        )
        parser.add_argument(
            "--timings",
            action="store_true",
            help="Print phase timings to stderr; included in summary JSON when used"
        )

        # Actions
        actions = parser.add_mutually_exclusive_group()
        for name in ACTION_ALIASES:
            actions.add_argument(
                f"--{name}",
                dest="action",
                action="store_const",
                const=name,
                help=ACTION_HELP_TEXT[name]
            )
        parser.add_argument(
            "--yes", "-y",
            action="store_true",
            help="Confirm --delete/--hardlink; without it no file is modified"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.workers < 1:
            self.error_exit("--workers must be at least 1")

        for option, value in (("--min-size", args.min_size), ("--quick-bytes", args.quick_bytes)):
            if not ConvertUtils.is_valid_size_format(value):
                self.error_exit(f"Invalid size format for {option}: '{value}'")

        if args.yes and not args.action:
            self.warning("--yes has no effect without --delete or --hardlink")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams.from_human_readable(
                roots=args.paths,
                min_size_str=args.min_size,
                quick_bytes_str=args.quick_bytes,
                extensions_str=args.ext,
                include_hidden=args.hidden,
                follow_symlinks=args.follow_symlinks,
                action=ACTION_ALIASES.get(args.action, ActionMode.NONE),
                confirmed=args.yes,
                workers=args.workers,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def configure_logging(self) -> None:
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.ERROR
        else:
            level = logging.WARNING
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)\n")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...\n")
        sys.stderr.flush()

    def info(self, message: str = "") -> None:
        """Informational text: stdout for humans, stderr when stdout carries JSON."""
        print(message, file=sys.stderr if self.structured else sys.stdout)

    def print_inventory(self, files: List[FileDescriptor], params: DeduplicationParams, list_files: bool) -> None:
        if list_files:
            for file in files:
                self.info(file.path)
            self.info()

        total_size = sum(f.size for f in files)
        self.info(
            f"Matched {len(files)} files (>= {ConvertUtils.bytes_to_human(params.min_size_bytes)}) "
            f"totaling {ConvertUtils.bytes_to_human(total_size)}"
        )

    def output_results(self, args: argparse.Namespace, groups: List[DuplicateGroup], reclaimable: int) -> None:
        """Print the group report in the requested format."""
        if args.json:
            print(ReportService.format_groups_json(groups))
        elif args.summary_json:
            return  # printed after actions
        elif not self.quiet:
            report = ReportService.format_human(groups, reclaimable)
            if report:
                print(report)
        elif groups:
            print(ReportService.format_found_line(groups, reclaimable))

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit status."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.structured = args.json or args.summary_json
        self.configure_logging()

        self.validate_args(args)
        params = self.create_params(args)

        command = DeduplicationCommand()
        try:
            files, groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except RuntimeError as e:
            self.error_exit(f"collecting files failed: {e}")

        reclaimable = DeduplicatorImpl.total_reclaimable(groups)
        if not files:
            self.info("No files matched criteria.")
        else:
            self.print_inventory(files, params, args.list)
            self.output_results(args, groups, reclaimable)

        # Side effects last, and only on explicit opt-in
        action_stats = command.apply_actions(groups, params, stats) if files else ActionStats()
        if params.action.mutates and not action_stats.refused and groups:
            print(str(action_stats), file=sys.stderr)

        timings = stats.timings_ms() if args.timings else None
        if args.summary_json:
            summary = ReportService.build_summary(groups, reclaimable, action_stats, timings)
            print(ReportService.format_summary_json(summary))
        elif args.json and not files:
            print(ReportService.format_groups_json(groups))

        if timings is not None:
            print(ReportService.format_timings(timings), file=sys.stderr)

        if self.verbose:
            print(stats.print_summary(), file=sys.stderr)

        if params.action.mutates and action_stats.has_errors:
            return 1
        return 0


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
