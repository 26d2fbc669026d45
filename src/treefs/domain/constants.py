from __future__ import annotations

"""
Domain Constants.

Centralizes the fixed identifiers of the namespace and the defaults shared
by the core, the shell and the configuration layer.
"""

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# NAMESPACE
# -----------------------------------------------------------------------------

ROOT_ID = 0
ROOT_NAME = "/"
PATH_SEPARATOR = "/"

# -----------------------------------------------------------------------------
# SNAPSHOT FORMAT
# -----------------------------------------------------------------------------

DEFAULT_SNAPSHOT_FILE = "backup.fs"
SNAPSHOT_ENCODING = "utf-8"
DIR_TAG = "D"
FILE_TAG = "F"
CHILD_SEPARATOR = ","

# -----------------------------------------------------------------------------
# SHELL
# -----------------------------------------------------------------------------

DEFAULT_PROMPT = "$ "
