#!/usr/bin/env python3
"""
LastCopy CLI — Command line interface for consolidating enumerated duplicates.
Finds "name (N).ext" copies, keeps the newest one under the plain name and deletes the rest.
Always shows a preview first; asks for confirmation unless --force is given.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import Dict, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install lastcopy", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from lastcopy.core.models import ConsolidationParams, ConsolidationReport, DuplicateGroup
from lastcopy.core.errors import ConsolidationError
from lastcopy.commands import ConsolidationCommand
from lastcopy.aliases import (
    DESCRIPTION_TEXT, DIRECTORY_HELP_TEXT, FILES_ONLY_HELP_TEXT, STRICT_CTIME_HELP_TEXT, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="lastcopy",
            description=DESCRIPTION_TEXT,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "directory",
            type=str,
            help=DIRECTORY_HELP_TEXT
        )

        # Grouping options
        parser.add_argument(
            "--files-only",
            action="store_true",
            dest="files_only",
            help=FILES_ONLY_HELP_TEXT
        )
        parser.add_argument(
            "--strict-ctime",
            action="store_true",
            dest="strict_ctime",
            help=STRICT_CTIME_HELP_TEXT
        )

        # Actions
        parser.add_argument(
            "--dry-run", "-n",
            action="store_true",
            dest="dry_run",
            help="Only show what would be deleted and renamed"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="Move deleted copies to the system trash instead of erasing them"
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt (for automation/scripts)"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress, debug log and statistics"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and args.dry_run:
            self.error_exit("--force cannot be combined with --dry-run")

        # Prevent interactive confirmation in non-TTY environments
        if not args.dry_run and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation, or --dry-run to preview."
                )

        root_path = Path(args.directory).resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.directory}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.directory}")

    def create_params(self, args: argparse.Namespace) -> ConsolidationParams:
        """Create ConsolidationParams from CLI arguments."""
        try:
            return ConsolidationParams(
                root_dir=str(Path(args.directory).resolve()),
                include_directories=not args.files_only,
                strict_creation_time=args.strict_ctime,
                use_trash=args.trash
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} entries processed...")
        sys.stderr.flush()

    def output_preview(self, groups: Dict[str, DuplicateGroup], use_trash: bool) -> None:
        """Show which entry is kept and what happens to the others, group by group."""
        if self.quiet:
            return

        total_entries = sum(len(g.records) for g in groups.values())
        print(f"\nFound {len(groups)} duplicate groups ({total_entries} entries)\n")

        delete_label = "TRASH" if use_trash else "DEL"
        for idx, (identity, group) in enumerate(sorted(groups.items()), 1):
            print(f"📁 Group {idx} | {identity} | Entries: {len(group.records)}")
            print("-" * 60)

            survivor = group.survivor
            print(f"   [KEEP]  {survivor.path}")
            if survivor.path != group.canonical_path:
                print(f"           Rename to: {group.canonical_path}")
            print(f"           Reason: newest copy")

            for record in group.redundant:
                print(f"   [{delete_label}]{' ' * (6 - len(delete_label))}{record.path}")
            print()

    def output_report(self, report: ConsolidationReport, use_trash: bool) -> None:
        if self.quiet:
            return

        where = "moved to trash" if use_trash else "deleted"
        print(f"✅ Consolidated {report.groups} groups: {len(report.deleted)} entries {where}, "
              f"{len(report.renamed)} renamed.")
        if self.verbose:
            print()
            print(report.print_summary())

    def confirm(self, groups: Dict[str, DuplicateGroup], use_trash: bool) -> bool:
        """Ask the user to confirm before any change is made."""
        redundant = sum(len(g.redundant) for g in groups.values())
        verb = "move to trash" if use_trash else "permanently delete"

        # Safety check: confirm we're still in interactive mode
        if not sys.stdin.isatty() or not sys.stdout.isatty():
            self.error_exit(
                "Lost interactive terminal during operation. "
                "Use --force to proceed in non-interactive environments."
            )

        response = input(f"Are you sure you want to {verb} {redundant} entries? [y/N]: ")
        return response.strip().lower() in ("y", "yes")

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
        if self.verbose:
            logging.getLogger("lastcopy").setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet:
            print(f"Scanning directory: {params.root_dir}")

        command = ConsolidationCommand()
        progress = self.progress_callback if self.verbose else None
        try:
            groups = command.find_duplicates(params, progress_callback=progress)
        except ConsolidationError as e:
            self.error_exit(f"Scan failed: {e}")
        if self.verbose:
            sys.stderr.write("\n")

        if not groups:
            if not self.quiet:
                print("No duplicate groups found.")
            return

        self.output_preview(groups, params.use_trash)

        if args.dry_run:
            if not self.quiet:
                print("Dry run: no changes made.")
            return

        if args.force:
            if not self.quiet:
                print("⚠️  WARNING: --force flag skips confirmation. Proceeding...")
        elif not self.confirm(groups, params.use_trash):
            print("Consolidation cancelled by user.")
            return

        try:
            report = command.consolidate(params, groups, progress_callback=progress)
        except ConsolidationError as e:
            self.error_exit(
                f"Consolidation failed: {e}\n"
                "Groups processed before the failure stay consolidated."
            )
        if self.verbose:
            sys.stderr.write("\n")

        self.output_report(report, params.use_trash)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
