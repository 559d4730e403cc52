"""
Minehunt - command-line entry point.

Usage:
    minehunt simulate [--difficulty D] [--games N] [--seed S]
    minehunt demo [--difficulty D] [--delay SECONDS] [--name NAME]
    minehunt scores show [--file PATH]
    minehunt scores add DIFFICULTY SCORE NAME [--file PATH]
"""
import argparse
import logging
import os
import time
from pathlib import Path

from .agents import Evaluator, RandomAgent
from .game import Difficulty, MinehuntEnv, preset
from .leaderboard import (
    MAX_NUM_SCORES,
    Leaderboard,
    format_records,
    parse_records,
)

DEFAULT_SCORES_FILE = "leaderboard.dat"


def non_negative_int(text: str) -> int:
    """Argument type for scores, which are whole seconds."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid score: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"score cannot be negative: {value}")
    return value


# ============================================================================
# Leaderboard File
# ============================================================================

def load_leaderboard(path: Path) -> Leaderboard:
    """Load a leaderboard file, or start an empty one if it is missing."""
    leaderboard = Leaderboard()
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            leaderboard.load(parse_records(f))
    return leaderboard


def save_leaderboard(leaderboard: Leaderboard, path: Path) -> None:
    """Write every tier of the leaderboard to a file."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_records(leaderboard.records()))


def print_leaderboard(leaderboard: Leaderboard) -> None:
    """Print the top scores of each tier, highlighting the newest one."""
    print("=" * 50)
    print("Top Scores")
    print("=" * 50)
    for difficulty in Difficulty:
        tier = leaderboard.tier(difficulty)
        recent = tier.index_of_most_recent()
        print(f"-== {difficulty.value.capitalize()} ==-")
        if tier.count == 0:
            print("   -")
        for position in range(1, tier.count + 1):
            marker = " <-- new" if position == recent else ""
            print(
                f"{position:2d}. {tier.score_at(position):5d}s "
                f"{tier.name_at(position)}{marker}"
            )


# ============================================================================
# Commands
# ============================================================================

def simulate(args: argparse.Namespace) -> None:
    """Play rounds with the random agent and report the results."""
    config = preset(Difficulty(args.difficulty))
    agent = RandomAgent.for_config(config, seed=args.seed)
    evaluator = Evaluator(
        config, num_episodes=args.games, max_steps=args.max_steps, seed=args.seed
    )

    print(f"Simulating {args.games} {args.difficulty} rounds...")
    results = evaluator.evaluate(agent)

    print("Results for Random agent:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


def demo(args: argparse.Namespace) -> None:
    """Watch the random agent play a round."""
    config = preset(Difficulty(args.difficulty))
    env = MinehuntEnv(config=config, render_mode="ansi")
    agent = RandomAgent.for_config(config, seed=args.seed)

    obs, info = env.reset(seed=args.seed)
    step = 0
    done = False
    while not done and step < args.max_steps:
        action = agent.select_action(obs, env.get_action_mask())
        obs, reward, terminated, truncated, info = env.step(action)
        done = terminated or truncated
        step += 1

        clear_screen()
        print(f"=== {args.difficulty} | Step {step} | Turn {info['turns']} ===")
        print(f"Boost: {info['boost_meter']} | Defeated: {info['defeated']}\n")
        print(env.render())
        time.sleep(args.delay)

    controller = env.controller
    if controller.is_won:
        print(f"\n*** WIN in {controller.score}s! ***")
        if args.name:
            path = Path(args.file)
            leaderboard = load_leaderboard(path)
            rank = controller.submit_score(leaderboard, args.name)
            save_leaderboard(leaderboard, path)
            if rank is not None:
                print(f"Ranked #{rank} on the {args.difficulty} leaderboard")
    elif controller.is_lost:
        print(f"\n*** LOST ({controller.loss_cause.name.lower()}) ***")
    else:
        print("\n*** Step limit reached ***")


def show_scores(args: argparse.Namespace) -> None:
    print_leaderboard(load_leaderboard(Path(args.file)))


def add_score(args: argparse.Namespace) -> None:
    """Insert one score by hand and save the leaderboard."""
    path = Path(args.file)
    leaderboard = load_leaderboard(path)
    rank = leaderboard.insert(
        Difficulty(args.difficulty), args.score, args.name, mark_as_recent=True
    )
    save_leaderboard(leaderboard, path)
    if rank is None:
        print(f"Score {args.score} did not make the top {MAX_NUM_SCORES}")
    print_leaderboard(leaderboard)


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minehunt - Minesweeper with monsters"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine events"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    difficulties = [difficulty.value for difficulty in Difficulty]

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play rounds with the random agent"
    )
    simulate_parser.add_argument(
        "--difficulty", choices=difficulties, default="easy"
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of rounds to play"
    )
    simulate_parser.add_argument(
        "--max-steps", type=int, default=1000, help="Step limit per round"
    )
    simulate_parser.add_argument("--seed", type=int, default=None)

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch one round")
    demo_parser.add_argument(
        "--difficulty", choices=difficulties, default="easy"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )
    demo_parser.add_argument(
        "--max-steps", type=int, default=1000, help="Step limit"
    )
    demo_parser.add_argument("--seed", type=int, default=None)
    demo_parser.add_argument(
        "--name", default=None, help="Record a win under this name"
    )
    demo_parser.add_argument("--file", default=DEFAULT_SCORES_FILE)

    # Scores command
    scores_parser = subparsers.add_parser("scores", help="Leaderboard")
    scores_sub = scores_parser.add_subparsers(dest="scores_command")
    show_parser = scores_sub.add_parser("show", help="Print top scores")
    show_parser.add_argument("--file", default=DEFAULT_SCORES_FILE)
    add_parser = scores_sub.add_parser("add", help="Insert a score")
    add_parser.add_argument("difficulty", choices=difficulties)
    add_parser.add_argument("score", type=non_negative_int)
    add_parser.add_argument("name")
    add_parser.add_argument("--file", default=DEFAULT_SCORES_FILE)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "simulate":
        simulate(args)
    elif args.command == "demo":
        demo(args)
    elif args.command == "scores" and args.scores_command == "show":
        show_scores(args)
    elif args.command == "scores" and args.scores_command == "add":
        add_score(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
