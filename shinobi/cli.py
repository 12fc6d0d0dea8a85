"""
Shinobi CLI - Command-line interface for the engine.

Usage:
    shinobi characters                          List the roster
    shinobi simulate --character ID --seed N    Run a headless all-AI game
    shinobi serve [--host H] [--port P]         Run the HTTP API
"""

import argparse
import logging
import os
import sys


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Shinobi - Ninja Clash Rules Engine",
        prog="shinobi",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("SHINOBI_LOG_LEVEL", "WARNING"),
        help="Diagnostic log level (default: $SHINOBI_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Characters command
    subparsers.add_parser("characters", help="List playable characters")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run a headless all-AI game")
    simulate_parser.add_argument("--character", default="naruto", help="Character for seat 0")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Game seed")
    simulate_parser.add_argument("--max-steps", type=int, default=20000, help="Step limit")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "characters":
        cmd_characters(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_characters(args):
    """List the roster."""
    from .games.ninja_clash.characters import CHARACTERS

    for character in CHARACTERS:
        print(f"{character.id:<12} {character.name:<20} hp {character.max_hp}")
        for skill in character.skills:
            label = "ultimate" if skill.is_ultimate else "passive"
            print(f"    [{label}] {skill.name}: {skill.description}")


def cmd_simulate(args):
    """Run an all-AI game and print the log and the winner."""
    from .games.ninja_clash.setup import UnknownCharacter
    from .session import GameLoop, LoopState, SessionManager

    manager = SessionManager()
    try:
        session = manager.create_session(args.character, seed=args.seed, all_ai=True)
    except UnknownCharacter as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Simulating game {session.session_id} (seed {session.game_state.random_seed})")
    loop = GameLoop(session, max_steps=args.max_steps)
    result = loop.run()

    state = session.game_state
    print("\nLast log entries:")
    for entry in state.logs:
        print(f"  [{entry.kind.value}] {entry.text}")

    print(f"\nSteps: {result.steps}, turns: {state.turn_number}")
    for warning in result.warnings:
        print(f"Warning: {warning}")

    if result.loop_state == LoopState.GAME_OVER:
        winner = state.get_player(state.winner_id) if state.winner_id else None
        print(f"Winner: {winner.name + ' (' + winner.player_id + ')' if winner else 'nobody'}")
    else:
        print(f"Stopped without a winner ({result.loop_state.value})")
        sys.exit(1)


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("shinobi.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
