"""
Hilo CLI - Command-line interface for the engine.

Usage:
    hilo selfplay [--secret N] [--seed S]    Watch the engine play itself
    hilo guess                               Think of a number; the engine guesses it
    hilo hide [--seed S]                     The engine thinks of a number; you guess
    hilo serve [--host H] [--port P]         Run the HTTP API
"""

import argparse
import json
import logging
import sys

from .config import load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hilo - Number guessing game engine",
        prog="hilo",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    selfplay_parser = subparsers.add_parser("selfplay", help="Engine plays both roles")
    selfplay_parser.add_argument("--secret", type=int, help="Fixed secret number")
    selfplay_parser.add_argument("--seed", type=int, help="Seed for a random secret")
    selfplay_parser.add_argument("--max-guesses", type=int, help="Guess limit")
    selfplay_parser.add_argument("--strategy", help="Secret strategy: uniform, avoid_probes")
    selfplay_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    guess_parser = subparsers.add_parser("guess", help="The engine guesses your number")
    guess_parser.add_argument("--max-guesses", type=int, help="Guess limit")

    hide_parser = subparsers.add_parser("hide", help="You guess the engine's number")
    hide_parser.add_argument("--seed", type=int, help="Seed for the secret")
    hide_parser.add_argument("--max-guesses", type=int, help="Guess limit")
    hide_parser.add_argument("--strategy", help="Secret strategy: uniform, avoid_probes")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "selfplay":
        return cmd_selfplay(args)
    elif args.command == "guess":
        return cmd_guess(args)
    elif args.command == "hide":
        return cmd_hide(args)
    elif args.command == "serve":
        return cmd_serve(args)

    parser.print_help()
    return 1


def cmd_selfplay(args) -> int:
    """Run one self-play game and print the transcript."""
    from .bots import get_secret_strategy
    from .engine_core import HiloError, SeededRandom
    from .session import SelfPlayRunner

    config = load_config()
    try:
        strategy = get_secret_strategy(args.strategy or config.secret_strategy)
        result = SelfPlayRunner(config=config).run(
            secret=args.secret,
            rng=SeededRandom(args.seed),
            max_guesses=args.max_guesses,
            secret_strategy=strategy,
        )
    except (HiloError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    for turn in result.transcript:
        print(f"[{turn.turn_number}] {turn.actor.value:>7}: {turn.message}")
    print(f"\nResult: {result.finish_reason.value} in {result.total_guesses} guesses")
    print(f"Efficiency: {result.efficiency}")
    return 0


def cmd_guess(args, input_fn=input) -> int:
    """Interactive game where the engine guesses the user's number."""
    from .engine_core import InvalidStateError
    from .session import GameSession, Role

    config = load_config().with_max_guesses(args.max_guesses)
    session = GameSession(config=config)
    print("Think of a number between 1 and 100.")
    print(session.start(Role.GUESSER).message)

    while session.is_playing:
        try:
            answer = input_fn("Higher, lower or correct? ")
        except EOFError:
            print("\nBye.")
            return 1
        try:
            result = session.submit_feedback(answer)
        except InvalidStateError as e:
            print(f"Error: {e}")
            return 1
        print(result.message)

    return 0 if session.revealed_secret is not None else 1


def cmd_hide(args, input_fn=input) -> int:
    """Interactive game where the user guesses the engine's number."""
    from .bots import get_secret_strategy
    from .engine_core import SeededRandom, parse_number
    from .session import FinishReason, GameSession, Role

    config = load_config().with_max_guesses(args.max_guesses)
    try:
        strategy = get_secret_strategy(args.strategy or config.secret_strategy)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    session = GameSession(config=config)
    print(session.start(Role.HIDER, rng=SeededRandom(args.seed), secret_strategy=strategy).message)

    while session.is_playing:
        try:
            raw = input_fn(f"Your guess ({session.remaining_guesses} left): ")
        except EOFError:
            print("\nBye.")
            return 1
        guess = parse_number(raw)
        if guess is None:
            print("Please enter a whole number between 1 and 100.")
            continue
        result = session.submit_guess(guess)
        for warning in result.warnings:
            print(f"(note: {warning})")
        print(result.message)

    return 0 if session.finish_reason == FinishReason.SUCCESS else 1


def cmd_serve(args) -> int:
    """Serve the HTTP API with uvicorn."""
    import uvicorn
    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
