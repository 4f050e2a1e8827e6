"""Catalog of human-readable event templates keyed by ``(domain, action)``.

Templates live in ``event_templates.json`` next to this module, grouped by
domain (``app``, ``connection``, ``session``).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _flatten(raw: Any) -> dict[tuple[str, str], str]:
    if not isinstance(raw, Mapping):
        raise ValueError("top level must be an object of domains")
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(domain, str) and isinstance(actions, Mapping)
        for action, template in actions.items()
        if isinstance(action, str) and isinstance(template, str)
    }


def _load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    """Read and flatten the catalog file.

    A missing or unreadable catalog never prevents logging: the result then
    holds a single ``app/load_error`` entry and callers fall back to derived
    text for every other event.
    """
    path = path or TEMPLATES_PATH
    try:
        with path.open("r", encoding="utf-8") as f:
            return _flatten(json.load(f))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}


def reload_event_templates(path: Path | None = None) -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = _load_event_templates(path)


def render_event(domain: str, action: str, params: Mapping[str, object]) -> tuple[str, bool]:
    """Return ``(text, derived)`` for an event.

    Placeholders missing from ``params`` leave the template unformatted.
    Unknown events get text derived from their names and ``derived=True``.
    """
    template = EVENT_TEMPLATES.get((domain, action))
    if template is None:
        return f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}", True
    try:
        return template.format(**params), False
    except (KeyError, IndexError, ValueError):
        return template, False


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "TEMPLATES_PATH", "reload_event_templates", "render_event"]
