"""
Constants for k8s-lcm.

Defines ANSI codes for output formatting, image reference parsing
defaults, kubectl settings, and the verbosity flags to log level mapping.
"""

import logging

# ANSI escape sequences for terminal output
BOLD = "\033[1m"   # Start bold
SGR0 = "\033[0m"   # Reset (end bold)

# Version used when an image has no tag ("latest" can't be compared).
DEFAULT_VERSION = "0"

# Some references spell out the default HTTPS port; it is not a version separator.
DEFAULT_HTTPS_PORT = ":443"

# Seconds before a kubectl call is abandoned.
KUBECTL_TIMEOUT = 60

# Verbosity name -> logging level. Errors only unless asked for more.
LOG_LEVELS = {
    "error": logging.ERROR,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def log_level(verbose: bool = False, debug: bool = False) -> int:
    """Map --verbose/--debug to a logging level; debug includes verbose."""
    if debug:
        return LOG_LEVELS["debug"]
    if verbose:
        return LOG_LEVELS["info"]
    return LOG_LEVELS["error"]
