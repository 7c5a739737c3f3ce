"""Command-line entry point for vscode-bootstrap."""

import argparse
import json
import logging
import sys

from .catalog import extensions_for_environment, settings_for_environment
from .commands import Commands, Outcome
from .config import VARIANTS, settings
from .environment import Environment, detect_environment
from .exceptions import HostError
from .host import CodeCLIHost
from .prompts import Prompter
from .settings_store import find_vscode_settings, get_vscode_config_path, resolve_settings_path

logger = logging.getLogger(__name__)

ACTIONS = ("menu", "configure", "enable-copilot", "disable-copilot", "cleanup", "status", "list", "find")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vscode-bootstrap",
        description="Install the curated VS Code extensions and settings for this machine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                      # Interactive menu
  %(prog)s configure --yes      # Install extensions and apply settings without asking
  %(prog)s enable-copilot       # Install GitHub Copilot and enable AI features
  %(prog)s cleanup --dry-run    # Show what cleanup would remove
  %(prog)s --variant codium configure
  %(prog)s find                 # Find all VS Code settings files
""",
    )
    parser.add_argument('action', nargs='?', default='menu', choices=ACTIONS,
                        help='Action to run (default: menu)')
    parser.add_argument('--variant', choices=VARIANTS, default=None,
                        help=f'VS Code variant (default: {settings.variant})')
    parser.add_argument('--path', default=None, help='Custom path to settings.json')
    parser.add_argument('--code', default=None, help='VS Code CLI executable (default: the variant name)')
    parser.add_argument('--remote-name', default=None,
                        help='Remote session name, e.g. "wsl" (default: detected)')
    parser.add_argument('-y', '--yes', action='store_true', help='Accept every confirmation')
    parser.add_argument('--dry-run', action='store_true', help='Show what would change without applying')
    parser.add_argument('--no-backup', action='store_true', help='Skip creating a backup of settings.json')
    parser.add_argument('--debug', action='store_true', help='Enable verbose debug logging')
    return parser


def apply_args(args: argparse.Namespace) -> None:
    """Copy CLI flags over the environment-derived settings."""
    if args.variant:
        settings.variant = args.variant
    if args.path:
        settings.settings_path = args.path
    if args.code:
        settings.code = args.code
    if args.remote_name:
        settings.remote_name = args.remote_name
    if args.yes:
        settings.assume_yes = True
    if args.dry_run:
        settings.dry_run = True
    if args.no_backup:
        settings.no_backup = True
    if args.debug:
        settings.debug = True


def configure_logging() -> None:
    if settings.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        logger.debug("Debug mode enabled")
    else:
        logging.basicConfig(level=logging.INFO, format='%(message)s')


def make_host(environment: Environment) -> CodeCLIHost:
    settings_path = resolve_settings_path(
        variant=settings.variant,
        explicit=settings.settings_path,
        remote=environment == Environment.WSL,
    )
    logger.debug(f"VS Code settings file: {settings_path}")
    return CodeCLIHost(
        settings_path,
        code=settings.code,
        variant=settings.variant,
        dry_run=settings.dry_run,
        backup=not settings.no_backup,
    )


def print_list(environment: Environment) -> None:
    print(f"Environment: {environment.value}\n")
    print("Extensions:")
    for extension_id in extensions_for_environment(environment):
        print(f"  {extension_id}")
    print("\nSettings:")
    for key, value in settings_for_environment(environment).items():
        print(f"  {key}: {json.dumps(value)}")


def print_find() -> None:
    found = find_vscode_settings()
    if found:
        print("Found VS Code settings files:\n")
        for variant, path in found:
            print(f"  {variant}: {path}")
    else:
        print("No VS Code settings files found.")
        print("\nExpected locations:")
        for variant in VARIANTS:
            print(f"  {variant}: {get_vscode_config_path(variant)}")


def print_status(commands: Commands, host: CodeCLIHost) -> bool:
    environment = commands.environment
    print(f"Environment: {environment.value}")
    print(f"Settings file: {host.store.path}")
    try:
        print(f"GitHub Copilot: {'enabled' if commands.copilot_enabled() else 'disabled'}")
    except HostError as e:
        print(f"GitHub Copilot: unknown ({e})")
        return False

    try:
        wanted = extensions_for_environment(environment)
        missing = [ext for ext in wanted if not host.is_installed(ext)]
    except HostError as e:
        print(f"Extensions: unknown ({e})")
        return False
    print(f"Extensions: {len(wanted) - len(missing)}/{len(wanted)} installed")
    for extension_id in missing:
        print(f"  missing: {extension_id}")
    return True


def run():
    """Parse arguments and run the requested action."""
    args = build_parser().parse_args()
    apply_args(args)
    configure_logging()

    environment = detect_environment()
    logger.debug(f"Detected environment: {environment.value}")

    if args.action == "list":
        print_list(environment)
        return
    if args.action == "find":
        print_find()
        return

    host = make_host(environment)
    commands = Commands(host, Prompter(assume_yes=settings.assume_yes), environment=environment)

    if args.action == "status":
        sys.exit(0 if print_status(commands, host) else 1)

    if settings.dry_run:
        print("(Dry run - no changes will be made)")

    if args.action == "menu":
        outcome = commands.show_menu()
    else:
        outcome = commands.run(args.action)

    sys.exit(1 if outcome in (Outcome.ISSUES, Outcome.FAILED) else 0)


if __name__ == "__main__":
    run()
