"""
Tests for the event template catalog
"""

import ast
from pathlib import Path

import pytest

from ircduplex.logs import event_catalog
from ircduplex.logs.event_catalog import (
    _load_event_templates,
    reload_event_templates,
    render_event,
)

PACKAGE_DIR = Path(__file__).resolve().parent.parent / "ircduplex"


@pytest.fixture
def restore_catalog():
    yield
    reload_event_templates()


def test_missing_file_records_load_error(tmp_path):
    templates = _load_event_templates(tmp_path / "missing.json")
    assert templates == {("app", "load_error"): "Event templates file missing"}


def test_invalid_json_records_load_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    templates = _load_event_templates(path)
    assert templates[("app", "load_error")].startswith("Failed to load event templates:")


def test_non_string_entries_are_skipped(tmp_path):
    path = tmp_path / "mixed.json"
    path.write_text('{"app": {"start": "go", "count": 3}, "bad": ["x"]}', encoding="utf-8")
    assert _load_event_templates(path) == {("app", "start"): "go"}


def test_top_level_must_be_an_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert ("app", "load_error") in _load_event_templates(path)


def test_render_event_formats_template():
    text, derived = render_event("connection", "connected", {"server": "irc.example.org", "port": 6667})
    assert text == "✅ Connected to irc.example.org:6667"
    assert derived is False


def test_render_event_unknown_is_derived():
    assert render_event("odd_domain", "no_such_action", {}) == ("odd domain: no such action", True)


def test_reload_replaces_module_catalog(tmp_path, restore_catalog):
    path = tmp_path / "custom.json"
    path.write_text('{"app": {"start": "custom start"}}', encoding="utf-8")
    reload_event_templates(path)
    assert event_catalog.EVENT_TEMPLATES == {("app", "start"): "custom start"}
    assert render_event("app", "start", {}) == ("custom start", False)


def _used_events() -> set[tuple[str, str]]:
    """Collect (domain, action) literals passed to log_event and DuplexSession._log."""
    used: set[tuple[str, str]] = set()
    for source in PACKAGE_DIR.rglob("*.py"):
        tree = ast.parse(source.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if not isinstance(node, ast.Call) or not isinstance(node.func, ast.Attribute):
                continue
            args = [a.value for a in node.args if isinstance(a, ast.Constant) and isinstance(a.value, str)]
            if node.func.attr == "log_event" and len(args) >= 2:
                used.add((args[0], args[1]))
            elif node.func.attr == "_log" and source.name == "session.py" and args:
                used.add(("session", args[0]))
    return used


def test_every_logged_event_has_a_template():
    used = _used_events()
    assert ("app", "start") in used
    assert ("session", "registration_sent") in used
    missing = used - set(_load_event_templates())
    assert not missing


def test_every_template_is_used():
    unused = set(_load_event_templates()) - _used_events() - {("app", "load_error")}
    assert not unused
