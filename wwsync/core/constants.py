"""
Project constants definitions
"""

# ============================================================
# Configuration Files
# ============================================================

CONFIG_PATH = "~/.wwsync"
SETTINGS_PATH = "~/.config/wwsync/settings.toml"
CONFIG_JSON_INDENT = 4
EXAMPLE_SERVER_ALIAS = "example"

# ============================================================
# Default Values
# ============================================================

DEFAULT_RSYNC = "rsync"
DEFAULT_SSH = "ssh"
DEFAULT_SHELL = "bash"

# ============================================================
# Rsync Command
# ============================================================

RSYNC_BASE_FLAGS = "-avzP"
RSYNC_EXCLUDE = "--exclude"
RSYNC_DELETE = "--delete"
RSYNC_DRY_RUN = "--dry-run"
DELETION_PREFIX = "deleting "

# ============================================================
# Process Runner
# ============================================================

READ_CHUNK_SIZE = 4096
TERMINATE_GRACE_SECONDS = 5.0
WAIT_POLL_SECONDS = 0.2

# ============================================================
# AskPass Relay
# ============================================================

ASKPASS_HOST = "127.0.0.1"
ASKPASS_DEFAULT_PROMPT = "Password required:"

# ============================================================
# Exit Codes
# ============================================================

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 130
