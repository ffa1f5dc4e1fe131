import argparse
import logging

from lunar_coiner.core import commands
from lunar_coiner.core.paths import PathResolver
from lunar_coiner.core.paths.root_providers import default_providers
from lunar_coiner.core.settings import SettingsManager
from lunar_coiner.utils.status import Status
from lunar_coiner.utils.translator import tr

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lunar-coiner", description=tr("cli_description")
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--list", action="store_true", help="List discovered profiles"
    )
    action.add_argument(
        "--debug-paths",
        action="store_true",
        help="Show every searched location and whether it exists",
    )
    action.add_argument("--show", metavar="PATH", help="Print the fields of a profile")
    action.add_argument(
        "--set-coins",
        nargs=2,
        metavar=("N", "PATH"),
        help="Set the lunar coin count of a profile",
    )
    action.add_argument("--add-root", metavar="DIR", help="Add a userdata search root")
    action.add_argument(
        "--remove-root", metavar="DIR", help="Remove a userdata search root"
    )
    parser.add_argument(
        "--total",
        type=int,
        help="Total collected coins to write with --set-coins "
        "(default: raised by the coins gained)",
    )
    return parser


def handle_cli_args(argv=None, settings_manager=None):
    """
    Parse and handle command line arguments.

    Returns:
        int | None: Exit code if a command was handled, None to start the GUI.
    """
    parser = build_parser()
    # parse_known_args leaves Qt's own flags for QApplication
    args, _unknown = parser.parse_known_args(argv)

    if args.total is not None and not args.set_coins:
        parser.error(tr("cli_total_requires_coins"))

    if not any(
        (
            args.list,
            args.debug_paths,
            args.show,
            args.set_coins,
            args.add_root,
            args.remove_root,
        )
    ):
        return None

    settings_manager = settings_manager or SettingsManager()
    resolver = PathResolver(default_providers(settings_manager=settings_manager))

    if args.list:
        return _list(resolver)
    if args.debug_paths:
        for line in commands.debug_search_paths(resolver):
            print(line)
        return 0
    if args.show:
        return _show(args.show)
    if args.set_coins:
        coins, path = args.set_coins
        return _set_coins(parser, path, coins, args.total)
    if args.add_root:
        added = settings_manager.add_extra_root(args.add_root)
        key = "cli_root_added" if added else "cli_root_exists"
        print(tr(key, root=args.add_root))
        return 0
    removed = settings_manager.remove_extra_root(args.remove_root)
    key = "cli_root_removed" if removed else "cli_root_unknown"
    print(tr(key, root=args.remove_root))
    return 0 if removed else 1


def _print_profile(identifier, name, coins, total, path):
    print(
        tr(
            "cli_profile_line",
            identifier=identifier,
            name=name,
            coins=coins,
            total=total,
            path=path,
        )
    )


def _list(resolver: PathResolver) -> int:
    profiles = commands.list_profiles(resolver)
    if not profiles:
        print(tr("cli_no_profiles"))
        return 0
    for p in profiles:
        _print_profile(p.identifier, p.display_name, p.coins, p.total_collected, p.path)
    return 0


def _show(path: str) -> int:
    fields, error = commands.load_profile(path)
    if fields is None:
        print(error)
        return 1
    _print_profile(
        "-", fields.display_name, fields.coins, fields.total_collected, path
    )
    return 0


def _set_coins(parser, path: str, coins_arg: str, total) -> int:
    try:
        coins = int(coins_arg)
    except ValueError:
        parser.error(f"invalid coin count: {coins_arg!r}")

    if total is None:
        current, error = commands.load_profile(path)
        if current is None:
            print(error)
            return 1
        total = commands.suggest_total(current.coins, current.total_collected, coins)

    status, message = commands.save_profile(path, coins, total)
    print(message)
    log.debug("Save finished with %s", Status.get_name(status))
    return 0 if Status.is_success(status) else 1
