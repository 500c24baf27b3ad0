"""
Unoengine CLI - Command-line interface for the engine.

Usage:
    unoengine simulate [--players N] [--difficulty D ...] [--seed S]
    unoengine deck [--seed S]
"""

import argparse
import logging
import sys

from .config import EngineSettings


def main(argv=None):
    """Main CLI entry point."""
    settings = EngineSettings.from_env()

    parser = argparse.ArgumentParser(
        description="Unoengine - UNO rules engine with AI opponents",
        prog="unoengine",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a game between AI seats")
    simulate_parser.add_argument("--players", type=int, default=4, help="Number of AI players")
    simulate_parser.add_argument(
        "--difficulty",
        action="append",
        choices=["easy", "medium", "hard"],
        help="Difficulty per seat (repeat; cycles if fewer than players)",
    )
    simulate_parser.add_argument("--cards", type=int, default=7, help="Cards dealt per player")
    simulate_parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")
    simulate_parser.add_argument(
        "--max-turns", type=int, default=settings.max_ai_turns, help="Stop after this many moves"
    )
    simulate_parser.add_argument("--quiet", action="store_true", help="Only print the result")

    # Deck command
    deck_parser = subparsers.add_parser("deck", help="Show the composition of a fresh deck")
    deck_parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.command == "simulate":
        return cmd_simulate(args, settings)
    elif args.command == "deck":
        return cmd_deck(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args, settings: EngineSettings) -> int:
    """Play one all-AI game and print how it went."""
    import random
    from dataclasses import replace

    from .engine_core import GameConfig, Player, Difficulty, SetupError
    from .session import GameLoop
    from .session.manager import AI_NAMES

    difficulties = [Difficulty(d) for d in (args.difficulty or ["easy", "medium", "hard"])]
    roster = [
        Player(
            player_id=f"ai_{i + 1}",
            name=AI_NAMES[i % len(AI_NAMES)],
            is_ai=True,
            difficulty=difficulties[i % len(difficulties)],
        )
        for i in range(args.players)
    ]
    config = GameConfig(max_players=max(args.players, 2), cards_per_player=args.cards)

    loop = GameLoop(
        settings=replace(settings, max_ai_turns=args.max_turns, ai_delay_seconds=0.0),
        rng=random.Random(args.seed),
    )
    try:
        state = loop.start(roster, config)
    except SetupError as e:
        print(f"Error: {e}")
        return 1

    print(f"Game {state.game_id}: {', '.join(f'{p.name} ({p.difficulty.value})' for p in roster)}")
    print(f"Start card: {state.top_card}")

    result = loop.run_ai_turns(state)
    if not args.quiet:
        for change in result.changes:
            print(f"  {change}")

    final = result.state
    print(f"Moves: {final.turn_number}")
    if final.winner:
        print(f"Winner: {final.get_player(final.winner).name}")
    else:
        print("No winner within the move limit")
    return 0


def cmd_deck(args) -> int:
    """Print the composition of a fresh deck."""
    import random

    from .engine_core import build_deck, deck_composition

    deck = build_deck(random.Random(args.seed))
    print(f"Cards: {len(deck)}")
    for (color, card_type), count in sorted(
        deck_composition(deck).items(), key=lambda item: (item[0][0] or "~", item[0][1])
    ):
        print(f"  {color or 'wild':<7} {card_type:<15} {count}")
    print(f"Top of deck: {deck[-1]}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
