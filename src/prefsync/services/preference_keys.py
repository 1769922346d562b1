"""Preference key surface owned by the host editor.

The flag store treats every name as an opaque string; this module is where the
host application declares which flags exist, their compiled defaults, and the
keys used for the non-flag settings. `DEFAULT_PROPERTIES` is the compiled
default table handed to backends (what `get_default_string` answers from).
"""

from __future__ import annotations

from typing import Dict, Final, Mapping

from prefsync.config import settings

__all__ = [
    "HIGHLIGHTING",
    "AUTO_INDENT",
    "LINE_NUMBERS",
    "MAKE_BACKUP",
    "MATCH_BRACKETS",
    "LINK_LIB",
    "SHOW_TEST_TOOLS",
    "SHOW_TEAM_TOOLS",
    "SHOW_TEXT_EVAL",
    "SHOW_UNCHECKED",
    "ACCESSIBILITY_SUPPORT",
    "START_WITH_ELEVATED",
    "SIDEBAR_SHOWING",
    "SCOPE_HIGHLIGHT_STRENGTH",
    "NAVIVIEW_EXPANDED",
    "PROJECT_PATH",
    "RECENT_CAPACITY",
    "EDITOR_FONT_SIZE",
    "EDITOR_FONT",
    "EDITOR_MAC_FONT",
    "STRIDE_FONT_SIZE",
    "FLAG_DEFAULTS",
    "ALL_FLAGS",
    "DEFAULT_PROPERTIES",
    "flag_default",
    "recent_project_key",
    "to_flag_string",
    "parse_flag",
]

# Flags
HIGHLIGHTING: Final = "editor.syntaxHighlighting"
AUTO_INDENT: Final = "editor.autoIndent"
LINE_NUMBERS: Final = "editor.displayLineNumbers"
MAKE_BACKUP: Final = "editor.makeBackup"
MATCH_BRACKETS: Final = "editor.matchBrackets"
LINK_LIB: Final = "doctool.linkToStandardLib"
SHOW_TEST_TOOLS: Final = "testing.showTools"
SHOW_TEAM_TOOLS: Final = "teamwork.showTools"
SHOW_TEXT_EVAL: Final = "startWithTextEval"
SHOW_UNCHECKED: Final = "compiler.showUnchecked"
ACCESSIBILITY_SUPPORT: Final = "accessibility.support"
START_WITH_ELEVATED: Final = "startWithElevatedPrivileges"
SIDEBAR_SHOWING: Final = "editor.stride.sidebarShowing"

# Non-flag settings
SCOPE_HIGHLIGHT_STRENGTH: Final = "editor.scopeHighlightingStrength"
NAVIVIEW_EXPANDED: Final = "naviviewExpanded.default"
PROJECT_PATH: Final = "projectPath"
RECENT_CAPACITY: Final = "recent.capacity"
RECENT_PROJECT_PREFIX: Final = "recentProject"
EDITOR_FONT_SIZE: Final = "editor.fontsize"
EDITOR_FONT: Final = "editor.font"
EDITOR_MAC_FONT: Final = "editor.MacOS.font"
STRIDE_FONT_SIZE: Final = "stride.editor.fontSize"

FLAG_DEFAULTS: Final[Mapping[str, bool]] = {
    HIGHLIGHTING: True,
    AUTO_INDENT: False,
    LINE_NUMBERS: False,
    MAKE_BACKUP: False,
    MATCH_BRACKETS: True,
    LINK_LIB: True,
    SHOW_TEST_TOOLS: False,
    SHOW_TEAM_TOOLS: False,
    SHOW_TEXT_EVAL: False,
    SHOW_UNCHECKED: True,
    ACCESSIBILITY_SUPPORT: False,
    START_WITH_ELEVATED: True,
    SIDEBAR_SHOWING: True,
}

ALL_FLAGS: Final = tuple(FLAG_DEFAULTS)


def to_flag_string(value: bool) -> str:
    return "true" if value else "false"


def parse_flag(text: str) -> bool:
    """Only the exact stored text ``"true"`` reads as on."""
    return text == "true"


def flag_default(name: str) -> bool:
    return FLAG_DEFAULTS.get(name, False)


def recent_project_key(index: int) -> str:
    return f"{RECENT_PROJECT_PREFIX}{index}"


def _build_default_properties() -> Dict[str, str]:
    props = {name: to_flag_string(value) for name, value in FLAG_DEFAULTS.items()}
    props.update(
        {
            EDITOR_FONT_SIZE: str(settings.DEFAULT_EDITOR_FONT_SIZE),
            EDITOR_FONT: settings.DEFAULT_FONT_FAMILY,
            EDITOR_MAC_FONT: settings.DEFAULT_FONT_FAMILY,
            STRIDE_FONT_SIZE: str(settings.DEFAULT_STRIDE_FONT_SIZE),
            SCOPE_HIGHLIGHT_STRENGTH: str(settings.DEFAULT_HIGHLIGHT_STRENGTH),
            RECENT_CAPACITY: str(settings.DEFAULT_RECENT_CAPACITY),
        }
    )
    return props


DEFAULT_PROPERTIES: Final[Mapping[str, str]] = _build_default_properties()
