# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console_manager

LIBRARY_LOGGER = "resgraph"


def configure_logging(*, verbose: bool, use_color: bool | None = None) -> None:
    """Route the library loggers through a Rich handler on stderr.

    Calling this more than once replaces the previously installed handler, so
    repeated CLI invocations in one process do not duplicate records.

    Args:
        verbose: ``True`` to emit DEBUG records, otherwise WARNING and above.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    console = Console(stderr=True, no_color=not color_enabled, soft_wrap=True)
    logger.addHandler(RichHandler(console=console, show_path=False, markup=False))


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled.

    Args:
        symbol: Emoji prefix, including any trailing padding.
        enable: ``True`` when the caller asked for emoji output.

    Returns:
        str: ``symbol`` or an empty string.
    """

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Print ``msg`` on the shared console, styled only when colour is active.

    Args:
        msg: Text to print.
        style: Rich style applied when colour output is enabled.
        use_emoji: Flag selecting an emoji-capable console.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def section(title: str, *, use_color: bool) -> None:
    """Print a heading separating blocks of command output.

    A Rich rule is drawn on colour consoles; plain output gets a
    ``--- title ---`` line that stays readable in logs and captured output.

    Args:
        title: Heading text.
        use_color: ``True`` when ANSI colour output is enabled.
    """

    console = get_console_manager().get(color=use_color, emoji=True)
    console.print()
    if use_color:
        console.print(Rule(title))
    else:
        console.print(Text(f"--- {title} ---"))


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message.

    Args:
        msg: Message text.
        use_emoji: ``True`` to prefix the message with an emoji.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    _print_line(f"{emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message.

    Args:
        msg: Message text.
        use_emoji: ``True`` to prefix the message with an emoji.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message.

    Args:
        msg: Message text.
        use_emoji: ``True`` to prefix the message with an emoji.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message.

    Args:
        msg: Message text.
        use_emoji: ``True`` to prefix the message with an emoji.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


__all__ = ["configure_logging", "emoji", "fail", "info", "ok", "section", "warn"]
