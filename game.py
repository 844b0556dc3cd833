#!/usr/bin/env python3
"""Fracas - Main entry point.

A turn-based territory conquest game: occupy cells, attack your neighbours,
earn income from capitals, and be the last player standing.
"""

import argparse
import logging
import sys

from fracas.engine.game_engine import GameEngine
from fracas.interface.human_player import HumanPlayer, QuitGame
from fracas.interface.renderer import MapRenderer
from fracas.models.settings import GameSettings

# Safety limit for games without any human seat
MAX_AI_ROUNDS = 500


class GameOrchestrator:
    """Runs the game loop between the engine and the terminal."""

    def __init__(self, engine: GameEngine):
        """Initialize game orchestrator.

        Args:
            engine: Initialized engine
        """
        self.engine = engine
        self.human = HumanPlayer(engine)
        self.renderer = MapRenderer()

    def run(self) -> GameEngine:
        """Main game loop."""
        print("\n" + "=" * 60)
        print("Fracas")
        print("=" * 60)
        print("\nGoal: Capture every enemy capital to win!")
        print("Type 'help' for commands. Press Ctrl+C at any time to quit.\n")

        try:
            rounds = 0
            while self.engine.is_running:
                if self.engine.current_player.is_ai:
                    # Only reached when no human is left to move
                    self.engine.end_turn()
                    rounds += 1
                    if rounds >= MAX_AI_ROUNDS:
                        print(f"No winner after {MAX_AI_ROUNDS} AI rounds. Stopping.")
                        break
                    continue
                self.human.play_turn()

        except (KeyboardInterrupt, QuitGame):
            print("\n\nGame interrupted by user. Exiting...")
            sys.exit(0)

        self._show_final_state()
        return self.engine

    def _show_final_state(self) -> None:
        snapshot = self.engine.snapshot()
        print()
        print(self.renderer.render(snapshot))
        print()
        print(self.renderer.render_players(snapshot))
        print()
        print(self.engine.message)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Fracas - Turn-based territory conquest",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                # 10x10 grid, you vs 3 AI players
  %(prog)s --width 12 --height 8 --ais 5  # Bigger map, more opponents
  %(prog)s --humans 2 --ais 0             # Hot-seat, two humans
  %(prog)s --humans 0 --ais 4             # Watch AI players fight
  %(prog)s --seed 42                      # Reproducible game
        """,
    )

    parser.add_argument("--width", type=int, default=10, help="Grid width (min 5, default: 10)")
    parser.add_argument("--height", type=int, default=10, help="Grid height (min 5, default: 10)")
    parser.add_argument("--humans", type=int, default=1, help="Human players (default: 1)")
    parser.add_argument("--ais", type=int, default=3, help="AI players (default: 3)")
    parser.add_argument(
        "--initial-money", type=int, default=10, help="Starting money (default: 10)"
    )
    parser.add_argument(
        "--troops-per-turn",
        type=int,
        default=3,
        help="Attacks allowed per turn (default: 3)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for capital placement and combat (default: random)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (shows every attack and turn change)",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        settings = GameSettings(
            grid_width=args.width,
            grid_height=args.height,
            human_players=args.humans,
            ai_players=args.ais,
            initial_money=args.initial_money,
            troops_per_turn=args.troops_per_turn,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    engine = GameEngine(settings)
    engine.initialize_game()

    GameOrchestrator(engine).run()


if __name__ == "__main__":
    main()
