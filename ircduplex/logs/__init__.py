"""Event logging: the template catalog and the ``BotLogger`` that renders it."""

from .event_catalog import EVENT_TEMPLATES, reload_event_templates, render_event  # noqa: F401
from .logger import BotLogger, logger  # noqa: F401

__all__ = ["BotLogger", "logger", "EVENT_TEMPLATES", "reload_event_templates", "render_event"]
