"""System factory that drives a Game from the engine."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from vitae_game.game import Game

if TYPE_CHECKING:
    from vitae import TickContext


def make_game_system(game: Game) -> Callable[[TickContext], None]:
    """Return a system feeding each tick's elapsed time to ``game.process_tick``."""

    def game_system(ctx: TickContext) -> None:
        game.process_tick(ctx.dt_ms, ctx.tick_number)

    return game_system
