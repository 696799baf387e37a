"""CLI banner utilities."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Sequence

from gphotoaudit.commands import COMMANDS

VERSION_PATH = Path(__file__).resolve().parent.parent / "VERSION"

_ICON_ASCII = (
    "   +++++++++++++   ",
    "  ++    +    ++   ",
    "  ++   +++   ++   ",
    "  ++  +++++  ++   ",
    "  ++ ++ + ++ ++   ",
    "  ++    +    ++   ",
    "   +++++++++++++   ",
)

_TITLE_ASCII = (
    "  ____ ____  _           _          ",
    " / ___|  _ \\| |__   ___ | |_ ___  ___",
    "| |  _| |_) | '_ \\ / _ \\| __/ _ \\/ __|",
    "| |_| |  __/| | | | (_) | || (_) \\__ \\",
    " \\____|_|   |_| |_|\\___/ \\__\\___/|___/",
)


def _pad_lines(lines: tuple[str, ...], target_height: int) -> list[str]:
    """Pad lines with blank rows up to target height."""
    out = list(lines)
    missing = target_height - len(out)
    if missing > 0:
        out.extend([""] * missing)
    return out


def _read_cli_version() -> str:
    """
    Read CLI version from VERSION file.

    Rules:
    - `v1.0.0` -> rendered as `v1.0.0-<md5[:7]>`
    - already-suffixed values (e.g. `v1.0.0-abc1234`) are returned as-is
    """
    try:
        raw_bytes = VERSION_PATH.read_bytes()
        raw_text = raw_bytes.decode("utf-8", errors="replace").strip()
    except OSError:
        return "unknown"

    if not raw_text:
        return "unknown"

    if "-" in raw_text:
        return raw_text

    digest7 = hashlib.md5(raw_bytes).hexdigest()[:7]  # nosec B324
    return f"{raw_text}-{digest7}"


def render_banner(
    separator: str = " | ",
    extra_right_lines: Sequence[str] | None = None,
) -> str:
    """Render banner as `ascii icon | ascii title`."""
    right_block = list(_TITLE_ASCII)
    if extra_right_lines:
        right_block.extend(str(line) for line in extra_right_lines)

    height = max(len(_ICON_ASCII), len(right_block))
    left = _pad_lines(_ICON_ASCII, height)
    right = _pad_lines(tuple(right_block), height)
    left_width = max(len(line) for line in left)

    rows = [
        f"{left_line.ljust(left_width)}{separator}{right_line}"
        for left_line, right_line in zip(left, right)
    ]
    return "\n".join(rows)


def render_main_menu_banner(separator: str = " | ") -> str:
    """Render banner with the audit command menu on the right side."""
    title_width = max(len(line) for line in _TITLE_ASCII)
    menu_lines = [_read_cli_version().rjust(title_width), "", "Audit commands:"]
    menu_lines.extend(
        f"[{index}] {command.name}" for index, command in enumerate(COMMANDS, start=1)
    )
    menu_lines.extend(["[q] Exit", ""])
    return render_banner(separator=separator, extra_right_lines=menu_lines)
