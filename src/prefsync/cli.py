"""CLI entry point for inspecting and editing a stored preference set."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any

from prefsync.app import AppContext, create_app_context
from prefsync.services.preference_keys import parse_flag


def _open(args: argparse.Namespace) -> AppContext:
    return create_app_context(store=args.store, data_dir=args.data_dir)


def _snapshot(ctx: AppContext) -> dict[str, Any]:
    prefs = ctx.preferences
    return {
        "flags": prefs.flags.snapshot(),
        "editor_font_size": prefs.get_editor_font_size(),
        "font_family": prefs.fonts.get_font_family(),
        "stride_font_size": prefs.stride_font_size_handle().get(),
        "scope_highlight_strength": prefs.get_scope_highlight_strength(),
        "naviview_expanded": prefs.get_naviview_expanded(),
        "project_directory": str(prefs.get_project_directory()),
        "recent_projects": prefs.get_recent_projects(),
    }


def cmd_show(args: argparse.Namespace) -> None:
    ctx = _open(args)
    print(json.dumps(_snapshot(ctx), indent=2, ensure_ascii=False))


def cmd_set_flag(args: argparse.Namespace) -> None:
    ctx = _open(args)
    ctx.preferences.set_flag(args.name, parse_flag(args.value))
    print(json.dumps({args.name: ctx.preferences.get_flag(args.name)}))


def cmd_set_font_size(args: argparse.Namespace) -> None:
    ctx = _open(args)
    ctx.preferences.set_editor_font_size(args.size)
    print(json.dumps({"editor_font_size": ctx.preferences.get_editor_font_size()}))


def cmd_add_recent(args: argparse.Namespace) -> None:
    ctx = _open(args)
    ctx.preferences.add_recent_project(args.path)
    print(json.dumps({"recent_projects": ctx.preferences.get_recent_projects()}, indent=2))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="prefsync")
    p.add_argument("--store", choices=["json", "qsettings", "memory"], default="json")
    p.add_argument("--data-dir", required=False, help="Directory holding the preference store")
    p.add_argument("--log-level", default="WARNING", help="Logging level (e.g. INFO, DEBUG)")
    sub = p.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print every preference as JSON")
    show.set_defaults(func=cmd_show)

    set_flag = sub.add_parser("set-flag", help="Set a boolean flag")
    set_flag.add_argument("name")
    set_flag.add_argument("value", choices=["true", "false"])
    set_flag.set_defaults(func=cmd_set_flag)

    font = sub.add_parser("set-font-size", help="Set the editor font size (points)")
    font.add_argument("size", type=int)
    font.set_defaults(func=cmd_set_font_size)

    recent = sub.add_parser("add-recent", help="Record a recently opened project")
    recent.add_argument("path")
    recent.set_defaults(func=cmd_add_recent)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    args.func(args)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
