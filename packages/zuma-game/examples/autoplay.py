"""Autoplay -- a headless level played by a naive bot.

Demonstrates:
- Building a ZumaGame with a fixed seed
- Running it headless with run(n) instead of a render loop
- Feeding shooter input from an extra system that stops the run
- on_start / on_stop hooks for the banner and summary
- Listening to score / outcome signals

Run: python packages/zuma-game/examples/autoplay.py --seed 3 --ticks 3600
"""

from __future__ import annotations

import argparse
import logging

from zuma_game import GAME_OVER, MATCH, VICTORY, Status, ZumaGame


def choose_target(game: ZumaGame):
    """Ball with the shooter's colour nearest the head, swapping if only the
    reserve colour is on the chain."""
    views = game.chain.nodes()
    shooter = game.shooter
    for color in (shooter.current_color, shooter.next_color):
        for view in views:
            if view.color == color:
                if color != shooter.current_color:
                    game.swap()
                return view
    return views[0] if views else None


def make_bot_system(game: ZumaGame, fire_every: int, shots: list[int]):
    """Fire at a target every ``fire_every`` ticks; stop the run once the level ends."""

    def bot_system(level, ctx) -> None:
        if level.status is not Status.PLAYING:
            ctx.request_stop()
            return
        if ctx.tick_number % fire_every == 0 and not level.projectiles:
            target = choose_target(game)
            if target is not None:
                game.aim_at(target.x, target.y)
                if game.shoot() is not None:
                    shots.append(ctx.tick_number)

    return bot_system


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Headless Zuma autoplay")
    p.add_argument("--seed", type=int, default=None, help="RNG seed (default: random)")
    p.add_argument("--ticks", type=int, default=60 * 60, help="max ticks to simulate")
    p.add_argument("--fire-every", type=int, default=20, help="ticks between shots")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    game = ZumaGame(seed=args.seed)
    game.subscribe(MATCH, lambda name, data: print(f"  match: {data['runs']}"))
    game.subscribe(VICTORY, lambda name, data: print(f"  victory with {data['score']}"))
    game.subscribe(GAME_OVER, lambda name, data: print(f"  game over at {data['score']}"))

    shots: list[int] = []
    loop = game.loop
    loop.add_system(make_bot_system(game, args.fire_every, shots))
    loop.on_start(lambda level, ctx: print(f"=== Autoplay (seed {game.seed}) ===\n"))
    loop.on_stop(
        lambda level, ctx: print(
            f"\nDone after {ctx.tick_number} ticks: {level.status.value}, "
            f"score {level.score}, {len(shots)} shots, {len(level.chain)} balls left."
        )
    )
    game.run(args.ticks)


if __name__ == "__main__":
    main()
