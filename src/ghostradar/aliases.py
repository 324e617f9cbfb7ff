from ghostradar.core.models import HashAlgorithm, KeepPolicy

KEEP_POLICY_ALIASES = {
    "oldest": KeepPolicy.OLDEST,
    "newest": KeepPolicy.NEWEST,
    "shortest-path": KeepPolicy.SHORTEST_PATH,
    "shortest": KeepPolicy.SHORTEST_PATH,
}

KEEP_POLICY_CHOICES = list(KEEP_POLICY_ALIASES.keys())

KEEP_POLICY_HELP_TEXT = (
    "Which file to keep in each duplicate set:\n"
    "  oldest         : Oldest modification time (default)\n"
    "  newest         : Newest modification time\n"
    "  shortest-path  : Shortest full path (alias: shortest)\n"
)

HASH_ALGORITHM_ALIASES = {
    False: HashAlgorithm.FAST,
    True: HashAlgorithm.SECURE,
}

EPILOG_TEXT = """
Examples:
  Preview duplicates in the current directory
  %(prog)s

  Scan Downloads and all subdirectories, only images of at least 500KB
  %(prog)s ~/Downloads -r -e .jpg,.png -m 500K

  Same as above + move duplicates to trash, keeping the newest copy (asks for confirmation)
  %(prog)s ~/Downloads -r -e .jpg,.png -m 500K --yes --keep newest

  Machine-readable report using SHA-256 digests
  %(prog)s ~/Downloads -r --secure --json > report.json
"""
