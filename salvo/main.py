"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Callable

from salvo.game.app.console import ConsoleInput, ConsoleRenderer
from salvo.game.app.services.battle import PLAYER_KINDS, build_player, play_match, play_series
from salvo.game.core.catalog import ShipCatalog, fitted_standard_catalog
from salvo.game.infra.config import MatchSettings, load_default_env_files, load_match_settings
from salvo.game.infra.logging import setup_logging, shutdown_logging

logger = logging.getLogger(__name__)


def build_parser(settings: MatchSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Two-player grid battleship simulator.")
    parser.add_argument("--rows", type=int, default=settings.rows, help="Board rows (1-10).")
    parser.add_argument("--cols", type=int, default=settings.cols, help="Board columns (1-10).")
    parser.add_argument(
        "--first",
        default=settings.first,
        help=f"Player moving first ({', '.join(PLAYER_KINDS)}).",
    )
    parser.add_argument(
        "--second",
        default=settings.second,
        help=f"Player moving second ({', '.join(PLAYER_KINDS)}).",
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=settings.trials,
        help="Play a series of computer-only matches and report win counts.",
    )
    parser.add_argument("--seed", type=int, default=settings.seed, help="Seed for reproducible runs.")
    parser.add_argument(
        "--placement-attempts",
        type=int,
        default=settings.placement_attempts,
        help="Retries allowed for computer ship placement.",
    )
    parser.add_argument("--pause", action="store_true", help="Wait for enter after every turn.")
    parser.add_argument("--quiet", action="store_true", help="Only print the final result.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run salvo from the command line."""
    load_default_env_files(override_existing=False)
    setup_logging()
    settings = load_match_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    try:
        catalog_factory = _catalog_factory(args.rows, args.cols)
        catalog = catalog_factory()
        rng = random.Random(args.seed)
        logger.info("run_config rows=%d cols=%d seed=%s ships=%d", args.rows, args.cols, args.seed, len(catalog))
        if args.trials > 1:
            return _run_series(args, catalog_factory, rng)
        return _run_match(args, catalog, rng)
    except ValueError as exc:
        parser.error(str(exc))
    finally:
        shutdown_logging()


def _run_series(args: argparse.Namespace, catalog_factory: Callable[[], ShipCatalog], rng: random.Random) -> int:
    series = play_series(
        catalog_factory,
        (args.first, args.second),
        args.trials,
        rng,
        placement_attempts=args.placement_attempts,
    )
    print(f"{series.kinds[0]} won {series.wins[0]} of {args.trials} games.")
    print(f"{series.kinds[1]} won {series.wins[1]} of {args.trials} games.")
    if series.aborted:
        print(f"{series.aborted} games could not be played.")
    return 0


def _run_match(args: argparse.Namespace, catalog: ShipCatalog, rng: random.Random) -> int:
    console = ConsoleInput()
    first, second = (
        build_player(
            kind,
            name,
            catalog,
            rng,
            human_input=console,
            placement_attempts=args.placement_attempts,
        )
        for kind, name in ((args.first, "Player 1"), (args.second, "Player 2"))
    )
    renderer = None if args.quiet else ConsoleRenderer(pause=input if args.pause else None)
    result = play_match(catalog, first, second, on_turn=renderer)
    print(result.status)
    return 0 if result.success else 1


def _catalog_factory(rows: int, cols: int) -> Callable[[], ShipCatalog]:
    def _make() -> ShipCatalog:
        catalog = fitted_standard_catalog(rows, cols)
        if len(catalog) == 0:
            raise ValueError(f"No standard ship fits a {rows}x{cols} board.")
        return catalog

    return _make


if __name__ == "__main__":
    raise SystemExit(main())
