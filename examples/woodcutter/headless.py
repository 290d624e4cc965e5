"""Woodcutter without a window: plays a scripted session and prints the log.

Run: python headless.py --seconds 60
"""
from __future__ import annotations

import argparse

from game.setup import TPS, GameState


def main() -> None:
    parser = argparse.ArgumentParser(description="Scripted woodcutter session")
    parser.add_argument("--seconds", type=int, default=60, help="simulated seconds to play")
    args = parser.parse_args()

    state = GameState(on_log=lambda message: print(f"  {message}"))
    game = state.game
    print("=== Woodcutter ===\n")

    # Each simulated second: chop while there is stamina, rest when there is
    # not, and buy whatever upgrade is affordable.
    for _ in range(args.seconds):
        if game.current_task() is None:
            if not game.start_task("chop"):
                game.start_task("rest")
        for upgrade in game.available_upgrades():
            game.purchase_upgrade(upgrade.id)
        state.engine.run(TPS)

    print("\nResources:")
    for resource in game.unlocked_resources() + game.stat_resources():
        print(f"  {resource.name:<10} {resource.value:8.1f}")
    tasks = game.player.tasks
    print(f"\nChopped {tasks.completions('chop')} times; "
          f"engine stopped at tick {state.engine.clock.tick_number}.")


if __name__ == "__main__":
    main()
