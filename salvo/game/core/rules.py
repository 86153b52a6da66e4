"""Match state and single-shot resolution."""

from __future__ import annotations

from dataclasses import dataclass, field

from salvo.game.core.board import Board
from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.models import AttackOutcome, MatchPhase, Point, ShotResult


@dataclass(slots=True)
class MatchSession:
    """Runtime match state; side 0 moves first."""

    catalog: ShipCatalog
    names: tuple[str, str]
    boards: tuple[Board, Board]
    active: int = 0
    phase: MatchPhase = MatchPhase.AWAITING_PLACEMENT
    winner: int | None = None
    turns: int = 0
    last_message: str = ""
    history: list[str] = field(default_factory=list)

    @property
    def defender(self) -> int:
        return 1 - self.active

    @property
    def target_board(self) -> Board:
        """Board the active side is shooting at."""
        return self.boards[self.defender]


def create_session(catalog: ShipCatalog, first_name: str, second_name: str) -> MatchSession:
    """Create a match with a fresh board for each side."""
    return MatchSession(
        catalog=catalog,
        names=(first_name, second_name),
        boards=(Board(catalog), Board(catalog)),
    )


def start_battle(session: MatchSession) -> tuple[bool, str]:
    """Move a placed match into play once both fleets are complete."""
    if session.phase is not MatchPhase.AWAITING_PLACEMENT:
        return False, "Match is not awaiting placement."
    if len(session.catalog) == 0:
        return False, "No ships registered."
    for name, board in zip(session.names, session.boards):
        if board.placed_count() != len(session.catalog):
            return False, f"{name} has not placed every ship."
    session.phase = MatchPhase.IN_PROGRESS
    session.last_message = "Battle started."
    return True, ""


def describe_shot(session: MatchSession, attacker: int, point: Point, outcome: AttackOutcome) -> str:
    """Human-readable account of one shot."""
    name = session.names[attacker]
    where = f"({point.row},{point.col})"
    if not outcome.valid:
        return f"{name} wasted a shot at {where}."
    if outcome.result is ShotResult.DESTROYED and outcome.ship_id is not None:
        what = f"destroyed the {session.catalog.ship(outcome.ship_id).name}"
    elif outcome.hit:
        what = "hit something"
    else:
        what = "missed"
    return f"{name} attacked {where} and {what}."


def fire(session: MatchSession, point: Point) -> AttackOutcome:
    """Resolve the active side's shot and pass the turn."""
    if session.phase is not MatchPhase.IN_PROGRESS:
        return AttackOutcome(ShotResult.INVALID)

    attacker = session.active
    outcome = session.target_board.attack(point)
    session.turns += 1
    session.last_message = describe_shot(session, attacker, point, outcome)
    session.history.append(session.last_message)
    session.active = session.defender

    for side, board in enumerate(session.boards):
        if board.all_destroyed():
            session.winner = 1 - side
            session.phase = MatchPhase.FINISHED
            session.last_message = f"{session.names[session.winner]} wins!"
            session.history.append(session.last_message)
            break
    return outcome
