"""Battle flow orchestration: player construction, matches and match series."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from salvo.game.ai.backtracking import BacktrackingStrategy
from salvo.game.ai.cluster import ClusterStrategy
from salvo.game.ai.human import HumanInput, HumanStrategy
from salvo.game.ai.stack_hunt import StackHuntStrategy
from salvo.game.ai.strategy import PlayerStrategy
from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.models import AttackOutcome, MatchPhase, Point
from salvo.game.core.rules import create_session, describe_shot, fire, start_battle

logger = logging.getLogger(__name__)

PLAYER_KINDS: tuple[str, ...] = ("human", "awful", "mediocre", "good")
_KIND_ALIASES = {"cluster": "awful", "backtracking": "mediocre", "stack": "good"}


@dataclass(frozen=True, slots=True)
class TurnEvent:
    """Rendering event emitted after every resolved shot."""

    turn: int
    attacker: str
    defender: str
    point: Point
    outcome: AttackOutcome
    message: str
    board_view: str


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of a full match."""

    winner: PlayerStrategy | None
    status: str
    success: bool
    turns: int
    phase: MatchPhase


@dataclass(frozen=True, slots=True)
class SeriesResult:
    """Win counts for a series of matches between two player kinds."""

    kinds: tuple[str, str]
    wins: tuple[int, int]
    aborted: int


def resolve_kind(kind: str) -> str:
    """Normalize a player tag, raising ValueError for unknown kinds."""
    normalized = kind.strip().lower()
    normalized = _KIND_ALIASES.get(normalized, normalized)
    if normalized not in PLAYER_KINDS:
        raise ValueError(f"Unknown player kind '{kind}'. Choose from: {', '.join(PLAYER_KINDS)}.")
    return normalized


def build_player(
    kind: str,
    name: str,
    catalog: ShipCatalog,
    rng: random.Random,
    *,
    human_input: HumanInput | None = None,
    placement_attempts: int | None = None,
) -> PlayerStrategy:
    """Construct a player strategy from its kind tag."""
    selected = resolve_kind(kind)
    if selected == "human":
        if human_input is None:
            raise ValueError("A human player needs an input source.")
        return HumanStrategy(name, catalog, human_input)
    if selected == "awful":
        return ClusterStrategy(name, catalog, rng)
    if selected == "mediocre":
        if placement_attempts is None:
            return BacktrackingStrategy(name, catalog, rng)
        return BacktrackingStrategy(name, catalog, rng, placement_attempts)
    if placement_attempts is None:
        return StackHuntStrategy(name, catalog, rng)
    return StackHuntStrategy(name, catalog, rng, placement_attempts)


def _aborted(status: str) -> MatchResult:
    logger.warning("match_aborted reason=%s", status)
    return MatchResult(
        winner=None,
        status=status,
        success=False,
        turns=0,
        phase=MatchPhase.AWAITING_PLACEMENT,
    )


def play_match(
    catalog: ShipCatalog,
    first: PlayerStrategy,
    second: PlayerStrategy,
    *,
    on_turn: Callable[[TurnEvent], None] | None = None,
) -> MatchResult:
    """Place both fleets and alternate shots until one fleet is destroyed."""
    if first.is_human and second.is_human:
        return _aborted("This game does not support 2-player.")
    if len(catalog) == 0:
        return _aborted("No ships registered.")

    session = create_session(catalog, first.name, second.name)
    players = (first, second)
    for player, board in zip(players, session.boards):
        if not player.place_ships(board):
            return _aborted(f"{player.name} could not place ships.")
    started, reason = start_battle(session)
    if not started:
        return _aborted(reason)
    logger.info("match_started first=%s second=%s ships=%d", first.name, second.name, len(catalog))

    while session.phase is MatchPhase.IN_PROGRESS:
        attacker_side = session.active
        attacker = players[attacker_side]
        defender = players[session.defender]
        board = session.target_board

        point = attacker.recommend_attack()
        outcome = fire(session, point)
        attacker.record_attack_result(point, outcome)
        defender.record_opponent_attack(point)

        message = describe_shot(session, attacker_side, point, outcome)
        logger.debug(
            "shot turn=%d attacker=%s point=(%d, %d) result=%s",
            session.turns,
            attacker.name,
            point.row,
            point.col,
            outcome.result.value,
        )
        if on_turn is not None:
            on_turn(
                TurnEvent(
                    turn=session.turns,
                    attacker=attacker.name,
                    defender=defender.name,
                    point=point,
                    outcome=outcome,
                    message=message,
                    board_view=board.render(shots_only=attacker.is_human),
                )
            )

    if session.winner is None:
        raise RuntimeError("match finished without a winner")
    winner = players[session.winner]
    logger.info("match_finished winner=%s turns=%d", winner.name, session.turns)
    return MatchResult(
        winner=winner,
        status=session.last_message,
        success=True,
        turns=session.turns,
        phase=session.phase,
    )


def play_series(
    catalog_factory: Callable[[], ShipCatalog],
    kinds: tuple[str, str],
    trials: int,
    rng: random.Random,
    *,
    placement_attempts: int | None = None,
) -> SeriesResult:
    """Play ``trials`` computer-only matches, alternating who moves first."""
    resolved = (resolve_kind(kinds[0]), resolve_kind(kinds[1]))
    if "human" in resolved:
        raise ValueError("Series are limited to computer players.")
    wins = [0, 0]
    aborted = 0
    for trial in range(1, trials + 1):
        catalog = catalog_factory()
        players = [
            build_player(kind, f"{kind} {label}", catalog, rng, placement_attempts=placement_attempts)
            for kind, label in zip(resolved, ("A", "B"))
        ]
        order = (0, 1) if trial % 2 == 1 else (1, 0)
        result = play_match(catalog, players[order[0]], players[order[1]])
        if result.winner is None:
            aborted += 1
            continue
        wins[players.index(result.winner)] += 1
    logger.info("series_finished kinds=%s wins=%s aborted=%d", resolved, wins, aborted)
    return SeriesResult(kinds=resolved, wins=(wins[0], wins[1]), aborted=aborted)
