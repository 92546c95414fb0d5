"""
Constants and exit codes for tarfetch.
"""


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    UNEXPECTED_ERROR = 1
    RETRIEVAL_FAILED = 2
    INVALID_ARCHIVE = 3
    UNSAFE_PATH = 4
    WRITE_FAILED = 5
    MEMBER_NOT_FOUND = 6


# Fetch / copy tuning
DEFAULT_TIMEOUT = 30
DEFAULT_CHUNK_SIZE = 8192

# Directories are always created with this mode, whatever the archive declares.
DIRECTORY_MODE = 0o755
FILE_PERMISSION_MASK = 0o777

# tarfile strips the trailing slash from directory names, so "./" shows up as ".".
ROOT_MARKERS = ("./", ".")
PAX_GLOBAL_HEADER = "pax_global_header"
