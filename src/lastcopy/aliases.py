DESCRIPTION_TEXT = (
    "LastCopy — collapse enumerated duplicates such as 'report (2).pdf' into a single 'report.pdf'.\n"
    "The newest copy of every group is kept and renamed; all older copies are deleted."
)

DIRECTORY_HELP_TEXT = "Root directory to scan (hidden files and directories are skipped)"

FILES_ONLY_HELP_TEXT = (
    "Treat only regular files as duplicate candidates.\n"
    "By default directories named like 'photos (1)' take part in grouping too."
)

STRICT_CTIME_HELP_TEXT = (
    "Fail when the filesystem does not report a creation (birth) time.\n"
    "By default the status change time is used instead on such platforms."
)

EPILOG_TEXT = """
Examples:
  Preview what would happen, change nothing
  %(prog)s ~/Downloads --dry-run

  Consolidate duplicates (with confirmation prompt)
  %(prog)s ~/Downloads

  Same as above, but move deleted copies to trash instead of erasing them
  %(prog)s ~/Downloads --trash

  Without confirmation, for scripts
  %(prog)s ~/Downloads --force --quiet
"""
