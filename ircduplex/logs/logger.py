"""Event logger rendering catalogued templates onto the ``ircduplex`` logger."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from .event_catalog import render_event

EVENT_COLUMN_WIDTH = 32
ORIGIN_COLUMN_WIDTH = 24


def debug_enabled() -> bool:
    return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")


def origin_column(nick: object = None, server: object = None) -> str:
    """``[nick@server]`` padded or cut to a fixed width; ``system`` without a nick."""
    label = nick if isinstance(nick, str) and nick else "system"
    if isinstance(server, str) and server:
        label = f"{label}@{server}"
    return f"[{label[:ORIGIN_COLUMN_WIDTH].ljust(ORIGIN_COLUMN_WIDTH)}]"


def event_column(event_name: str) -> str:
    if len(event_name) <= EVENT_COLUMN_WIDTH:
        return event_name.ljust(EVENT_COLUMN_WIDTH)
    return event_name[: EVENT_COLUMN_WIDTH - 1] + "…"


class BotLogger:
    """Structured event logger.

    Handlers and colors belong to the root configuration
    (``logging_config.LoggerConfigurator``). This class only builds the
    message: the origin column and the catalog text, preceded by the event
    name and followed by the leftover context when ``DEBUG`` is set.
    """

    def __init__(self, name: str = "ircduplex") -> None:
        self.logger = logging.getLogger(name)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        """Log ``domain/action`` with text from the catalog unless ``human`` is given.

        ``nick`` and ``server`` feed the origin column; every other keyword
        fills template placeholders and is shown as context in debug mode.
        """
        if human is None:
            human, derived = render_event(domain, action, kwargs)
            if derived:
                kwargs.setdefault("derived", True)
        nick = kwargs.pop("nick", None)
        server = kwargs.pop("server", None)
        message = self.render_line(f"{domain}_{action}".lower(), origin_column(nick, server), human, kwargs)
        self.logger.log(level, message, exc_info=exc_info)

    @staticmethod
    def render_line(
        event_name: str, origin: str, text: str, context: Mapping[str, object]
    ) -> str:
        if not debug_enabled():
            return f"{origin} {text or event_name}"
        line = f"{event_column(event_name)} {origin}"
        if text:
            line = f"{line} {text}"
        if context:
            line = f"{line} ({', '.join(f'{k}={v}' for k, v in context.items())})"
        return line


logger = BotLogger()
