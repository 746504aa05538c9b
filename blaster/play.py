"""
Command line entry point
    blaster play                # open a window and play
    blaster random --no-render  # one random-action episode
    blaster evaluate --policy hunter --episodes 20 --csv results/hunter.csv
"""

import argparse
import logging
import sys

from .config import GameConfig
from .errors import ConfigError


def build_config(args) -> GameConfig:
    config = GameConfig.from_json(args.config) if args.config else GameConfig()
    max_active = args.max_active_targets
    if max_active is None and args.max_targets is not None:
        max_active = min(config.max_active_targets, args.max_targets)
    return config.replace(
        width=args.width,
        height=args.height,
        max_targets=args.max_targets,
        max_active_targets=max_active,
    )


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Target blaster arcade shooter")
    parser.add_argument("--config", type=str, default=None, help="JSON file with config overrides")
    parser.add_argument("--width", type=int, default=None, help="Arena width")
    parser.add_argument("--height", type=int, default=None, help="Arena height")
    parser.add_argument("--max-targets", type=int, default=None, help="Targets to destroy to win")
    parser.add_argument("--max-active-targets", type=int, default=None,
                        help="Targets alive at the same time")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    play = sub.add_parser("play", help="Play in a window")
    play.add_argument("--scale", type=float, default=1.5, help="Window pixels per arena unit")

    rand = sub.add_parser("random", help="Run one random-action episode")
    rand.add_argument("--no-render", action="store_true", help="Run headless")

    ev = sub.add_parser("evaluate", help="Evaluate a scripted policy")
    ev.add_argument("--policy", type=str, default="hunter", choices=["random", "hunter"])
    ev.add_argument("--episodes", type=int, default=10, help="Number of episodes")
    ev.add_argument("--max-steps", type=int, default=None, help="Step limit per episode")
    ev.add_argument("--csv", type=str, default=None, help="Write per-episode results here")
    return parser


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    command = args.command or "play"
    if command == "play":
        from .window import run_game
        run_game(config, seed=args.seed, scale=getattr(args, "scale", 1.5))
    elif command == "random":
        from .shooter_env import run_random_episode
        run_random_episode(render=not args.no_render, seed=args.seed, config=config)
    elif command == "evaluate":
        from .evaluate import evaluate_policy
        evaluate_policy(
            policy=args.policy,
            n_episodes=args.episodes,
            seed=args.seed,
            csv_path=args.csv,
            config=config,
            max_steps=args.max_steps,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
