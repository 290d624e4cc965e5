"""System factory for passive resource rates."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from vitae_resource.ledger import Ledger

if TYPE_CHECKING:
    from vitae import TickContext


def make_rate_system(ledger: Ledger) -> Callable[[TickContext], None]:
    """Return a system applying every resource's per-second rate each tick."""

    def rate_system(ctx: TickContext) -> None:
        ledger.apply_rates(ctx.dt)

    return rate_system
