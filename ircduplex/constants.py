"""
Configuration constants for the duplex IRC client

This module contains all configurable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, logs a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, logs a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    """Retrieve a non-empty string value from an environment variable."""
    value = os.getenv(name)
    if value is not None and value.strip():
        return value.strip()
    return default


# Server endpoint used when no override is given on the command line
IRC_SERVER = _get_env_str("IRC_SERVER", "irc.libera.chat")
IRC_PORT = _get_env_int("IRC_PORT", 6667)

# Registration identity sent in the USER / NICK handshake
IRC_NICK = _get_env_str("IRC_NICK", "duplex-irc")
IRC_REALNAME = _get_env_str("IRC_REALNAME", "Duplex irc")

# Connection timings (seconds). A read timeout of 0 blocks indefinitely.
IRC_CONNECT_TIMEOUT = _get_env_float("IRC_CONNECT_TIMEOUT", 30.0)
IRC_READ_TIMEOUT = _get_env_float("IRC_READ_TIMEOUT", 0.0)

# Inbound byte chunk size requested from the stream reader
IRC_READ_CHUNK_SIZE = _get_env_int("IRC_READ_CHUNK_SIZE", 4096)

# Wire encoding; negotiation is not supported
IRC_ENCODING = "utf-8"

# Line terminator for outbound protocol lines
IRC_LINE_TERMINATOR = "\r\n"
