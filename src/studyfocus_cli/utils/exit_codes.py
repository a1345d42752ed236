"""Process exit codes returned by StudyFocus CLI commands."""

ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
# missing or rejected API token
ERROR_AUTH_FAILURE = 3
# service unreachable or answered with an error status
ERROR_NETWORK = 4
