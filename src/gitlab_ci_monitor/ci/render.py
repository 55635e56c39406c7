"""Renderers that turn style tokens into terminal output."""

from __future__ import annotations

from typing import Protocol

import click

from ..config import StatusOptions
from .status import Style

_ANSI_STYLES: dict[Style, dict] = {
    Style.SUCCESS: {"fg": "green"},
    Style.FAILURE: {"fg": "red", "bold": True},
    Style.RUNNING: {"fg": "blue"},
    Style.QUEUED: {"fg": "yellow"},
    Style.MUTED: {"fg": "bright_black"},
    Style.PLAIN: {},
}


class Renderer(Protocol):
    def style(self, text: str, style: Style) -> str: ...


class PlainRenderer:
    """Leaves text untouched."""

    def style(self, text: str, style: Style) -> str:
        return text


class AnsiRenderer:
    """Wraps text in ANSI color sequences via click."""

    def style(self, text: str, style: Style) -> str:
        attrs = _ANSI_STYLES.get(style, {})
        if not attrs:
            return text
        return click.style(text, **attrs)


def renderer_for(options: StatusOptions) -> Renderer:
    return AnsiRenderer() if options.color else PlainRenderer()
