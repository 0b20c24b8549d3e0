#!/usr/bin/env -S uv run --script
# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "pydantic>=2",
#     "pygame>=2.6.1,<3",
#     "python-dotenv",
#     "requests",
# ]
# ///

# ringring command-line interface
# Without a sub-command it acts as the Claude Code hook (reads one event from stdin).

import argparse
import sys
from pathlib import Path

import hooks
from app.dispatcher import build_resolver, preview_category
from app.manifest import Category, Manifest, load_manifest, save_manifest
from app.types import HookInput
from config import config, is_valid_theme_name
from utils import paths
from utils.colored_logger import setup_logger
from utils.config_loader import create_example_config
from utils.constants import PathConstants, ThemeConstants
from utils.errors import RingringError
from utils.installer import install_theme, register_hooks

logger = setup_logger(__name__)


def cmd_hook(args) -> int:
    hooks.main()
    return 0


def cmd_test(args) -> int:
    """Preview one category of a theme; unknown theme or category is an error."""
    theme = args.theme or build_resolver(HookInput(), config).resolve()
    try:
        result = preview_category(theme, args.category, settings=config)
    except RingringError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Theme:    {result.theme}")
    print(f"Category: {args.category}")
    print(f"Title:    {result.title}")
    print(f"Body:     {result.body}")
    if result.sound is None:
        print("Sound:    (category has no sounds)")
    else:
        status = "played" if result.played else "not played"
        print(f"Sound:    {result.sound.file} ({status})")
    return 0


def cmd_themes(args) -> int:
    """List installed themes, marking the active one."""
    active = build_resolver(HookInput(), config).resolve()
    themes = config.installed_themes()
    if not themes:
        print(f"No themes installed in {config.data_dir}")
        return 0

    for name in themes:
        manifest = load_manifest(config.theme_dir(name))
        marker = "*" if name == active else " "
        if manifest is None:
            print(f"{marker} {name}  (missing or invalid manifest)")
        else:
            categories = ", ".join(sorted(manifest.categories)) or "-"
            print(f"{marker} {name}  {manifest.display_name}  [{categories}]")
    return 0


def cmd_status(args) -> int:
    """Show which theme is active here and which source decided it."""
    hook_input = HookInput(session_id=args.session or "", cwd=str(Path.cwd()))
    theme, source = build_resolver(hook_input, config).resolve_with_source()
    installed = is_valid_theme_name(theme) and load_manifest(config.theme_dir(theme)) is not None
    print(f"Theme:       {theme}")
    print(f"Decided by:  {source}")
    print(f"Installed:   {'yes' if installed else 'no'}")
    print(f"Config file: {config.config_file}")
    print(f"Themes dir:  {config.data_dir}")
    return 0


def cmd_install_theme(args) -> int:
    try:
        name = install_theme(args.source, config.data_dir, force=args.force)
    except RingringError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Installed theme '{name}' into {config.theme_dir(name)}")
    return 0


def cmd_init_theme(args) -> int:
    """Scaffold an empty theme: manifest.json with every known category and sounds/."""
    if not is_valid_theme_name(args.name):
        print(f"Error: invalid theme name '{args.name}'", file=sys.stderr)
        return 1
    theme_dir = config.theme_dir(args.name)
    if theme_dir.exists() and not args.force:
        print(f"Error: theme '{args.name}' already exists", file=sys.stderr)
        return 1

    manifest = Manifest(
        name=args.name,
        display_name=args.display_name or args.name,
        categories={name: Category() for name in ThemeConstants.KNOWN_CATEGORIES},
    )
    manifest_path = save_manifest(manifest, theme_dir)
    (theme_dir / ThemeConstants.SOUNDS_DIR).mkdir(exist_ok=True)
    print(f"Created {manifest_path}")
    return 0


def cmd_init_config(args) -> int:
    if create_example_config(config.config_file, overwrite=args.force):
        print(f"Created example config at: {config.config_file}")
        return 0
    print(f"Config already exists: {config.config_file} (use --force)", file=sys.stderr)
    return 1


def cmd_register(args) -> int:
    settings_path = Path(args.settings).expanduser() if args.settings else paths.claude_settings_file()
    try:
        added = register_hooks(settings_path, command=args.command)
    except OSError as e:
        print(f"Error: cannot update {settings_path}: {e}", file=sys.stderr)
        return 1
    if added:
        print(f"Registered '{args.command}' for {', '.join(added)} in {settings_path}")
    else:
        print(f"Hooks already registered in {settings_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ringring", description="Theme sounds and notifications for Claude Code hooks"
    )
    sub = parser.add_subparsers(dest="command_name")

    p = sub.add_parser("hook", help="Handle one hook event from stdin (default)")
    p.set_defaults(func=cmd_hook)

    p = sub.add_parser("test", help="Preview a category of a theme")
    p.add_argument("category", help="Category name, e.g. greeting or complete")
    p.add_argument("--theme", "-t", help="Theme to preview (default: active theme)")
    p.set_defaults(func=cmd_test)

    p = sub.add_parser("themes", help="List installed themes")
    p.set_defaults(func=cmd_themes)

    p = sub.add_parser("status", help="Show the active theme and why")
    p.add_argument("--session", help="Session id whose cached theme to consider")
    p.set_defaults(func=cmd_status)

    p = sub.add_parser("install-theme", help="Install a theme zip from a path or URL")
    p.add_argument("source", help="Path to a .zip file or an http(s) URL")
    p.add_argument("--force", "-f", action="store_true", help="Overwrite an installed theme")
    p.set_defaults(func=cmd_install_theme)

    p = sub.add_parser("init-theme", help="Create an empty theme skeleton")
    p.add_argument("name", help="Theme name (directory name)")
    p.add_argument("--display-name", help="Human readable name")
    p.add_argument("--force", "-f", action="store_true", help="Overwrite an existing manifest")
    p.set_defaults(func=cmd_init_theme)

    p = sub.add_parser("init-config", help="Write an example config.json")
    p.add_argument("--force", "-f", action="store_true", help="Overwrite an existing config")
    p.set_defaults(func=cmd_init_config)

    p = sub.add_parser("register", help="Register the hooks in Claude Code settings.json")
    p.add_argument("--settings", help="Path to settings.json (default: ~/.claude/settings.json)")
    p.add_argument("--command", default=PathConstants.HOOK_COMMAND, help="Hook command to register")
    p.set_defaults(func=cmd_register)

    return parser


def main(argv=None):
    """Entry point of the `ringring` console script."""
    args = build_parser().parse_args(argv)
    func = getattr(args, "func", cmd_hook)
    sys.exit(func(args))


if __name__ == "__main__":
    main()
