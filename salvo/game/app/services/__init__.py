"""Application service-layer helpers."""

from salvo.game.app.services.battle import (
    PLAYER_KINDS,
    MatchResult,
    SeriesResult,
    TurnEvent,
    build_player,
    play_match,
    play_series,
    resolve_kind,
)

__all__ = [
    "PLAYER_KINDS",
    "MatchResult",
    "SeriesResult",
    "TurnEvent",
    "build_player",
    "play_match",
    "play_series",
    "resolve_kind",
]
