"""
Exit codes for Pomo CLI.

Scripts wrapping ``pomo history`` or ``pomo config`` can branch on these.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Session log could not be read or written
ERROR_STORAGE = 3
