from ducky.core.models import ActionMode

ACTION_ALIASES = {
    "delete": ActionMode.DELETE,
    "hardlink": ActionMode.HARDLINK,
}

ACTION_HELP_TEXT = {
    "delete": "Delete duplicates, keeping the canonical (lexicographically first) path of each group",
    "hardlink": "Replace duplicates with hard links to the canonical (lexicographically first) path",
}

QUICK_BYTES_HELP_TEXT = (
    "Quick-hash sample size: only the first N bytes are compared before a full read.\n"
    "Clamped to the range 1KB..1GB. Default: 64KB"
)

EPILOG_TEXT = """
Examples:
  Report duplicate groups under two directories
  %(prog)s ~/Pictures /mnt/backup/Pictures

  Only consider large photos, print a machine-readable summary
  %(prog)s ~/Pictures --min-size 1MB --ext jpg,png,heic --summary-json

  Replace duplicates with hard links (nothing is changed without --yes)
  %(prog)s ~/Pictures --hardlink --yes

  Delete duplicates and print phase timings to stderr
  %(prog)s ~/Downloads --delete --yes --timings

Exit status is 1 when --delete/--hardlink ran into errors.
"""
