"""Core constants for the CodePush CLI.

Values referenced by more than one module live here so the command, the API
clients and the settings agree on a single source of truth.
"""

# Environment variable names
ENV_API_BASE_URL = "CODEPUSH_API_BASE_URL"
ENV_API_KEY = "CODEPUSH_API_KEY"
ENV_APP = "CODEPUSH_APP"
ENV_VERBOSE = "CODEPUSH_VERBOSE"

# API defaults
DEFAULT_API_BASE_URL = "https://api.appcenter.ms"
API_VERSION_PREFIX = "v0.1"
DEFAULT_REQUEST_TIMEOUT = 30.0

# Placeholder app identifier, in the form owner/appname
DEFAULT_APP = "owner/app"

# Logging
DEFAULT_LOG_DIR = "~/.codepush/logs"
LOG_FILENAME = "codepush.log"

# Name used when pointing users at other commands
SCRIPT_NAME = "codepush"

# Maximum number of metric requests in flight per command
METRICS_FETCH_CONCURRENCY = 30

# Output formats accepted by --format
OUTPUT_FORMATS = ("text", "json", "yaml")
