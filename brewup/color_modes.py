from __future__ import annotations

from typing import Mapping

COLOR_MODE_AUTO = "auto"
COLOR_MODE_MONO = "mono"
COLOR_MODE_COLOR = "color"

_MODE_ALIASES = {
    "mono": COLOR_MODE_MONO,
    "none": COLOR_MODE_MONO,
    "color": COLOR_MODE_COLOR,
    "colour": COLOR_MODE_COLOR,
}


def parse_color_mode_override(raw: str | None) -> str | None:
    if raw is None:
        return None
    normalized = raw.strip().lower()
    if not normalized or normalized == COLOR_MODE_AUTO:
        return None
    return _MODE_ALIASES.get(normalized)


def _is_truthy_env(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() not in {"", "0", "false", "no", "off"}


def detect_color_mode(env: Mapping[str, str], terminal) -> str:
    override = parse_color_mode_override(env.get("BREWUP_COLOR_MODE"))
    if override is not None:
        return override

    if _is_truthy_env(env.get("NO_COLOR")):
        return COLOR_MODE_MONO

    if env.get("TERM", "").strip().lower() == "dumb":
        return COLOR_MODE_MONO

    forced_style = _is_truthy_env(env.get("FORCE_COLOR")) or _is_truthy_env(
        env.get("CLICOLOR_FORCE")
    )
    if forced_style:
        return COLOR_MODE_COLOR
    if getattr(terminal, "does_styling", False) and (
        int(getattr(terminal, "number_of_colors", 0) or 0) > 0
    ):
        return COLOR_MODE_COLOR
    return COLOR_MODE_MONO


class ChangeStyle:
    """Colors the old/new halves of a summary line; a no-op in mono mode."""

    def __init__(self, terminal, mode: str):
        self.terminal = terminal
        self.enabled = mode == COLOR_MODE_COLOR

    def old(self, text: str) -> str:
        if not self.enabled or not text:
            return text
        return self.terminal.red(text)

    def new(self, text: str) -> str:
        if not self.enabled or not text:
            return text
        return self.terminal.green(text)

    def heading(self, text: str) -> str:
        if not self.enabled:
            return text
        return self.terminal.bold(text)
