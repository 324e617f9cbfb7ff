#!/usr/bin/env python3
"""
Ghost Radar CLI: command line interface for duplicate file detection and removal.
Previews by default; deleting requires --yes plus an interactive confirmation (or --force).
By default removed files go to the system trash; --permanent unlinks them instead.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import json
import os
import signal
import sys
import threading
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from ghostradar import __version__
from ghostradar.core.models import (
    ScanParams, ScanResult, ScanError, KeepPolicy, DeletionMethod, DeletionOutcome,
    FatalPreconditionError
)
from ghostradar.commands import ScanCommand
from ghostradar.utils.convert_utils import ConvertUtils
from ghostradar.services.duplicate_service import DuplicateService
from ghostradar.aliases import (
    KEEP_POLICY_ALIASES, KEEP_POLICY_CHOICES, KEEP_POLICY_HELP_TEXT,
    HASH_ALGORITHM_ALIASES, EPILOG_TEXT
)

# How many per-file errors are printed before the rest are summarized
MAX_ERRORS_SHOWN = 5


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.json_output: bool = False
        self.cancel_event = threading.Event()

        # UTF-8 for Windows consoles; undecodable file names are printed as backslash escapes
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8', errors='backslashreplace')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="ghost-radar",
            description="Ghost Radar: find exact duplicate files by content hash",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "path",
            nargs="?",
            default=".",
            help="File or directory to scan. Default: current directory"
        )

        # Filtering options
        parser.add_argument(
            "--recursive", "-r",
            action="store_true",
            help="Scan subdirectories too"
        )
        parser.add_argument(
            "--ext", "-e",
            default="",
            type=str,
            metavar='',
            help="Only check these extensions, comma separated (e.g., .jpg,.png)"
        )
        parser.add_argument(
            "--min-size", "-m",
            default="1",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 1, 500KB, 1MB). Default: 1"
        )

        # Hashing options
        parser.add_argument(
            "--secure",
            action="store_true",
            help="Use SHA-256 instead of xxHash64 (slower, collision resistant)"
        )
        parser.add_argument(
            "--workers", "-j",
            type=int,
            default=None,
            metavar='',
            help="Number of hashing threads. Default: 2 x CPU count (max 32)"
        )

        # Actions
        parser.add_argument(
            "--yes", "-y",
            action="store_true",
            help="Delete duplicates (default is preview only). Asks for confirmation."
        )
        parser.add_argument(
            "--keep",
            choices=KEEP_POLICY_CHOICES,
            default="oldest",
            type=str,
            help=KEEP_POLICY_HELP_TEXT
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --yes (for automation/scripts)"
        )
        parser.add_argument(
            "--permanent",
            action="store_true",
            help="Delete files permanently instead of moving them to trash"
        )

        # Output options
        parser.add_argument(
            "--hash",
            action="store_true",
            dest="show_hash",
            help="Show the digest of each duplicate set"
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the result as JSON"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress and timing"
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug logging"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.yes:
            self.error_exit("--force can only be used with --yes")

        if args.permanent and not args.yes:
            self.error_exit("--permanent can only be used with --yes")

        # Prevent interactive confirmation in non-TTY environments
        if args.yes and not args.force:
            if args.json or not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        if not ConvertUtils.is_valid_size_format(args.min_size):
            self.error_exit(f"Invalid size format: '{args.min_size}'")

        if args.workers is not None and args.workers < 1:
            self.error_exit("--workers must be at least 1")

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams.from_human_readable(
                root_path=os.path.abspath(args.path),
                min_size_str=args.min_size,
                extensions_str=args.ext,
                recursive=args.recursive,
                algorithm=HASH_ALGORITHM_ALIASES[args.secure],
                keep_policy=KEEP_POLICY_ALIASES.get(args.keep, KeepPolicy.OLDEST),
                max_workers=args.workers,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def stopped_flag(self) -> bool:
        """True once the user pressed Ctrl+C during the scan."""
        return self.cancel_event.is_set()

    def _handle_interrupt(self, signum, frame) -> None:
        # First Ctrl+C stops new hashing work; a second one aborts immediately
        if self.cancel_event.is_set():
            raise KeyboardInterrupt
        self.cancel_event.set()
        self.warning("Cancelling scan... (press Ctrl+C again to abort)")

    def run_scan(self, params: ScanParams) -> ScanResult:
        """Execute the scan workflow with Ctrl+C mapped to cancellation."""
        command = ScanCommand()
        if self.verbose:
            print(f"Finding duplicates (hash: {params.algorithm.display_name})...", file=sys.stderr)

        previous_handler = None
        if threading.current_thread() is threading.main_thread():
            previous_handler = signal.signal(signal.SIGINT, self._handle_interrupt)

        try:
            result = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                stopped_flag=self.stopped_flag
            )
        except FatalPreconditionError as e:
            self.error_exit(str(e))
        finally:
            if previous_handler is not None:
                signal.signal(signal.SIGINT, previous_handler)

        if self.verbose:
            sys.stderr.write("\n")
            print(f"Scanned {result.files_scanned} files", file=sys.stderr)

        return result

    def output_results(self, result: ScanResult, show_hash: bool = False,
                       policy: KeepPolicy = KeepPolicy.OLDEST) -> None:
        """Print duplicate sets as plain text, in result order."""
        if self.quiet:
            return

        self.print_errors(result.errors)

        if result.cancelled:
            self.warning("Scan was cancelled; results are incomplete.")

        if not result.duplicate_sets:
            print("No duplicate files found.")
            return

        plans = DuplicateService.plan_deletions(result, policy) if not result.cancelled else []
        kept_paths = {plan.kept.path for plan in plans}

        print(f"\nFound {result.total_sets} duplicate sets")
        for idx, dup_set in enumerate(result.duplicate_sets, 1):
            ext = dup_set.files[0].extension or "(no extension)"
            print(f"\n📁 Set {idx} | {ext} x {dup_set.count} | "
                  f"Size: {ConvertUtils.bytes_to_human(dup_set.size)} | "
                  f"Wasted: {ConvertUtils.bytes_to_human(dup_set.wasted_space)}")
            if show_hash:
                print(f"   Hash: {dup_set.digest}")

            for file in dup_set.files:
                marker = "  ← keep" if file.path in kept_paths else ""
                print(f"   {ConvertUtils.shorten_path(file.path)} "
                      f"[{ConvertUtils.timestamp_to_human(file.modified_at)}]{marker}")

        self.print_summary(result)

    @staticmethod
    def print_summary(result: ScanResult) -> None:
        print()
        print("=" * 60)
        print(f"Duplicate sets:  {result.total_sets}")
        print(f"Duplicate files: {result.total_duplicate_files}")
        print(f"Wasted space:    {ConvertUtils.bytes_to_human(result.total_wasted_space)}")
        print()

    def print_errors(self, errors: List[ScanError]) -> None:
        if not errors:
            return
        self.warning("Some files could not be read:")
        for err in errors[:MAX_ERRORS_SHOWN]:
            print(f"   {ConvertUtils.shorten_path(err.path)}: {err.message}", file=sys.stderr)
        if len(errors) > MAX_ERRORS_SHOWN:
            print(f"   ...and {len(errors) - MAX_ERRORS_SHOWN} more", file=sys.stderr)

    @staticmethod
    def render_json(result: ScanResult, outcomes: Optional[List[DeletionOutcome]] = None) -> str:
        """
        JSON report of a scan and, optionally, of the deletion that followed.
        ASCII-escaped so paths that are not valid UTF-8 survive as \\udcXX escapes.
        """
        data = result.to_dict()
        if outcomes is not None:
            data["deletion"] = [outcome.to_dict() for outcome in outcomes]
        return json.dumps(data, indent=2, ensure_ascii=True)

    def output_json(self, result: ScanResult, outcomes: Optional[List[DeletionOutcome]] = None) -> None:
        print(self.render_json(result, outcomes))

    def execute_deletion(self, result: ScanResult, policy: KeepPolicy,
                         method: DeletionMethod, force: bool = False) -> Optional[List[DeletionOutcome]]:
        """Keep one file per set, delete the rest. Shows a preview before deletion."""
        if result.cancelled:
            self.warning("Scan was cancelled; nothing will be deleted.")
            return None

        if not result.duplicate_sets:
            return []

        plans = DuplicateService.plan_deletions(result, policy)
        files_to_delete = sum(len(plan.to_delete) for plan in plans)
        space_saved_str = ConvertUtils.bytes_to_human(DuplicateService.calculate_space_savings(plans))
        action = "permanently delete" if method == DeletionMethod.PERMANENT else "move to trash"

        if not self.json_output:
            print(f"About to {action} {files_to_delete} duplicate files, freeing {space_saved_str}")
            print()

        if force:
            if not self.json_output:
                print("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
        else:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )

            response = input('Type "yes" to confirm deletion, or press Enter to cancel: ')
            if response.strip().lower() != "yes":
                print("Deletion cancelled by user.")
                return None

        outcomes = DuplicateService.delete_duplicates(plans, method=method)

        if not self.json_output:
            self.report_deletion(outcomes)
        return outcomes

    def report_deletion(self, outcomes: List[DeletionOutcome]) -> None:
        for outcome in outcomes:
            if self.verbose:
                print(f"✓ Kept:    {ConvertUtils.shorten_path(outcome.kept.path)}")
                for file in outcome.deleted:
                    print(f"✗ Deleted: {ConvertUtils.shorten_path(file.path)}")
            for failure in outcome.failed:
                self.warning(f"Failed to delete {failure.descriptor.path}: {failure.error_message}")

        deleted_count = sum(len(o.deleted) for o in outcomes)
        failed_count = sum(len(o.failed) for o in outcomes)
        freed = ConvertUtils.bytes_to_human(DuplicateService.calculate_freed_space(outcomes))

        if failed_count:
            print(f"\n⚠️  Partial success: {deleted_count}/{deleted_count + failed_count} files removed, "
                  f"{freed} freed. {failed_count} file(s) failed.")
        else:
            print(f"✅ Removed {deleted_count} files, freed {freed}.")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.json_output = args.json

        if args.debug:
            logging.getLogger("ghostradar").setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet and not self.json_output:
            print(f"Scanning: {params.root_path}")

        result = self.run_scan(params)
        method = DeletionMethod.PERMANENT if args.permanent else DeletionMethod.TRASH

        if self.json_output:
            outcomes = None
            if args.yes:
                # The report must be renderable before anything is removed
                self.render_json(result)
                outcomes = self.execute_deletion(result, params.keep_policy, method, force=args.force)
            self.output_json(result, outcomes)
        else:
            self.output_results(result, show_hash=args.show_hash, policy=params.keep_policy)
            if args.yes:
                self.execute_deletion(result, params.keep_policy, method, force=args.force)
            elif result.duplicate_sets and not self.quiet:
                print("💡 Preview only. Add --yes to delete duplicates.")

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds", file=sys.stderr)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
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
