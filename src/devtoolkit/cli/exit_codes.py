"""Exit codes for the devtoolkit CLI."""

EXIT_SUCCESS = 0
EXIT_ISSUES_FOUND = 1  # some tool missing, degraded, or failed to install
EXIT_TOOL_ERROR = 2  # a collaborator crashed
EXIT_INVALID_USAGE = 3  # bad arguments, unknown category, bad config
EXIT_PRECONDITION_FAILURE = 4
