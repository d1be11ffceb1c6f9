#!/usr/bin/env python
"""
Play demonstration matches between two MCTS agents.

Each decision runs a fresh search for the player on turn, applies the chosen
action to the real game state and passes the turn after an attack or a
retreat. A match ends when an active Pokémon is knocked out, when the player
on turn has no legal action, or after a maximum number of turns.

Example usage:
    # Watch one match on the built-in demo decks
    pokemon-mcts-play --iterations 500

    # Play 20 quiet matches from a saved snapshot
    pokemon-mcts-play --state snapshot.json --games 20 --quiet
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from tqdm import tqdm

from pokemon_tcg_ai.core.constants import ENERGY_SYMBOLS
from pokemon_tcg_ai.core.game import GameState, create_demo_state
from pokemon_tcg_ai.core.player import Player
from pokemon_tcg_ai.mcts.agent import CONFIG_PRESETS, MCTSAgent
from pokemon_tcg_ai.mcts.search import NoLegalActionError

logger = logging.getLogger(__name__)

console = Console()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for match configuration."""
    parser = argparse.ArgumentParser(description="Play Pokémon TCG matches between MCTS agents")

    # MCTS configuration
    parser.add_argument("--preset", choices=sorted(CONFIG_PRESETS), default="default",
                        help="Named search configuration to start from")
    parser.add_argument("--iterations", type=int, default=None,
                        help="Number of MCTS iterations per decision (overrides the preset)")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="Optional time limit per decision in seconds")
    parser.add_argument("--exploration", type=float, default=None,
                        help="UCT exploration parameter (overrides the preset)")

    # Match configuration
    parser.add_argument("--games", type=int, default=1,
                        help="Number of matches to play")
    parser.add_argument("--max-turns", type=int, default=50,
                        help="Maximum number of turns per match")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the coin toss")
    parser.add_argument("--state", type=Path, default=None,
                        help="JSON game state to start from (default: demo match)")

    # Output
    parser.add_argument("--quiet", action="store_true",
                        help="Only print the final summary")
    parser.add_argument("--verbose", action="store_true",
                        help="Show debug logging, including every state transition")

    return parser.parse_args(argv)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to the console through rich."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def format_energy(player: Player) -> str:
    energy = player.active_pokemon.attached_energy
    return " ".join(ENERGY_SYMBOLS.get(card.energy_type, "?") for card in energy) or "-"


def display_game_state(state: GameState) -> None:
    """Render both players as a table."""
    table = Table(title=f"Turn {state.turn}", show_lines=True)
    table.add_column("Player")
    table.add_column("Active")
    table.add_column("HP", justify="right")
    table.add_column("Energy")
    table.add_column("Bench")
    table.add_column("Hand", justify="right")
    table.add_column("Discard", justify="right")

    for i, player in enumerate(state.players):
        active = player.active_pokemon
        name = f"[bold]{player.username}[/bold]" if i == state.active_player else player.username
        table.add_row(
            name,
            active.name,
            f"{active.current_hp}/{active.max_hp}",
            format_energy(player),
            ", ".join(p.name for p in player.bench) or "-",
            str(len(player.hand)),
            str(len(player.discard_pile)),
        )

    console.print(table)


def display_search_summary(agent: MCTSAgent, player: Player) -> None:
    """Print the top actions from the agent's last search."""
    stats = agent.get_last_statistics()
    lines = [
        f"Iterations: {stats['iterations']} "
        f"({stats['iterations_per_second']:.1f} it/s, {stats['node_count']} nodes)",
    ]
    actions_by_visits = sorted(stats["action_visits"].items(), key=lambda x: x[1], reverse=True)
    for i, (action_str, visits) in enumerate(actions_by_visits[:5]):
        value = stats["action_values"].get(action_str, 0.0)
        lines.append(f"{i + 1}. {action_str} - {visits} visits, {value:.3f} value")
    console.print(Panel("\n".join(lines), title=f"{player.username} ({agent.name})"))


def play_match(
    state: GameState,
    agents: List[MCTSAgent],
    max_turns: int = 50,
    show: bool = True
) -> Dict[str, Any]:
    """
    Play a match until a knockout, a stuck player or the turn limit.

    Args:
        state: Initial game state
        agents: One agent per player index
        max_turns: Maximum number of turns
        show: Whether to render every decision

    Returns:
        Dictionary with the winner (None if undecided), end reason,
        turn count and number of actions played
    """
    actions_played = 0
    reason = "max_turns"

    while state.turn < max_turns:
        if state.is_terminal():
            reason = "knockout"
            break

        agent = agents[state.active_player]
        player = state.current_player
        try:
            action = agent.select_action(state)
        except NoLegalActionError:
            logger.warning("%s has no legal action, ending the match.", player.username)
            reason = "no_legal_action"
            break

        state = agent.apply_action(state, action)
        actions_played += 1
        logger.info("%s: %s", player.username, action)

        if show:
            display_search_summary(agent, player)
            display_game_state(state)

        if state.is_turn_complete():
            logger.info("%s's turn has ended.", player.username)
            state = state.end_turn()
    else:
        if state.is_terminal():
            reason = "knockout"

    winner = state.get_winner() if reason == "knockout" else None
    return {
        "winner": winner,
        "winner_name": state.players[winner].username if winner is not None else None,
        "reason": reason,
        "turns": state.turn,
        "actions": actions_played,
        "final_state": state,
    }


def load_initial_state(args: argparse.Namespace, game_index: int) -> GameState:
    if args.state is not None:
        return GameState.from_json(args.state.read_text(encoding="utf-8"))
    seed = None if args.seed is None else args.seed + game_index
    return create_demo_state(seed=seed)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        agents = [
            MCTSAgent.from_preset(
                args.preset,
                name=f"MCTS {i + 1}",
                iterations=args.iterations,
                time_limit=args.time_limit,
                exploration_weight=args.exploration,
            )
            for i in range(2)
        ]
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        return 2

    show = not args.quiet and args.games == 1

    results = []
    games = range(args.games)
    if args.games > 1:
        games = tqdm(games, desc="Playing", unit="game")

    try:
        for game_index in games:
            try:
                state = load_initial_state(args, game_index)
            except (OSError, KeyError, TypeError, ValueError) as e:
                console.print(f"[red]Cannot load game state from {args.state}:[/red] {e}")
                return 2
            results.append(play_match(state, agents, max_turns=args.max_turns, show=show))
    except KeyboardInterrupt:
        console.print("\nMatch interrupted by user.")
        return 130

    summary = Table(title="Results")
    summary.add_column("Game", justify="right")
    summary.add_column("Winner")
    summary.add_column("Reason")
    summary.add_column("Turns", justify="right")
    summary.add_column("Actions", justify="right")
    for i, result in enumerate(results):
        summary.add_row(
            str(i + 1),
            result["winner_name"] or "-",
            result["reason"],
            str(result["turns"]),
            str(result["actions"]),
        )
    console.print(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
