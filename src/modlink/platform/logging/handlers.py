"""Where: platform/logging/handlers.py
What: Rich console handler that renders structured link and install events.
Why: Keep event styling out of the use cases that emit them.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class LinkEventRichHandler(RichHandler):
    """Rich handler that styles ``link_event`` records and compacts paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "cache.created": ("📁", "cyan"),
        "cache.moved": ("📦", "magenta"),
        "link.created": ("🔗", "green"),
        "link.existing": ("✅", "green"),
        "link.error": ("❌", "red"),
        "install.start": ("⬇️", "blue"),
        "install.complete": ("🎉", "green"),
        "install.skip": ("♻️", "green"),
    }
    _EVENT_PREFIXES: ClassVar[dict[str, str]] = {
        "cache.created": "Created cache ",
        "cache.moved": "Moved ",
        "link.created": "Linked ",
        "link.existing": "Already linked ",
        "link.error": "Link failed ",
        "install.start": "Installing dependencies",
        "install.complete": "Install finished",
        "install.skip": "Dependencies already cached",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Format a path with coloured separators, keeping only the last segments."""

        display_path = self._to_pure_path(path)
        is_windows = isinstance(display_path, PureWindowsPath)
        separator = "\\" if is_windows else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display_string = ""
        if anchor:
            display_string = anchor.rstrip("\\/") + separator if is_windows else separator
        if truncated:
            display_string += "…" + separator
        display_string += separator.join(body_parts)

        return self._style_path_string(display_string or ".", separator)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    @staticmethod
    def _style_path_string(path_string: str, separator: str) -> Text:
        text = Text()
        separator_chars = {separator}
        if separator == "\\":
            separator_chars.add("/")

        for char in path_string:
            if char in separator_chars or char == "…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_link_event(self, record: logging.LogRecord) -> Text | None:
        """Render a structured event, or ``None`` for ordinary records."""

        event = getattr(record, "link_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        _ = body.append(self._EVENT_PREFIXES.get(event, record.getMessage()))

        source_path = getattr(record, "source_path", None)
        target_path = getattr(record, "target_path", None)
        if source_path:
            _ = body.append_text(self._format_path(str(source_path)))
        if source_path and target_path:
            _ = body.append(" → ")
        if target_path:
            _ = body.append_text(self._format_path(str(target_path)))

        details: list[str] = []
        link_kind = getattr(record, "link_kind", None)
        if link_kind:
            details.append(str(link_kind))
        command = getattr(record, "command", None)
        if command:
            details.append(str(command))
        exit_code = getattr(record, "exit_code", None)
        if isinstance(exit_code, int):
            details.append(f"exit={exit_code}")
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for link events."""

        event_text = self._render_link_event(record)
        if event_text is not None:
            return event_text
        return super().render_message(record, message)


__all__ = ["LinkEventRichHandler"]
