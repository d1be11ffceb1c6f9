"""
Monte Carlo Tree Search (MCTS) algorithm.

This module implements the search controller with the four standard phases:
1. Selection: Descend the tree by UCT to a node that is not fully expanded
2. Expansion: Create a new child node for one untried action
3. Simulation: Run a greedy rollout to estimate the node's value
4. Backpropagation: Update statistics up to the root

A fresh tree is built for every decision and thrown away afterwards.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
import logging
import time

from pokemon_tcg_ai.core.actions import Action
from pokemon_tcg_ai.core.game import GameState
from pokemon_tcg_ai.mcts.config import MCTSConfig
from pokemon_tcg_ai.mcts.node import MCTSNode
from pokemon_tcg_ai.mcts.rollout import simulate_game

logger = logging.getLogger(__name__)


class NoLegalActionError(RuntimeError):
    """Raised when the search finds no legal action for the player on turn."""


class MCTSSearch:
    """
    Search controller for one decision.

    Owns the search tree built from a single game state snapshot.
    """

    def __init__(self, state: GameState, config: Optional[MCTSConfig] = None):
        self.config = config or MCTSConfig()
        self.root = MCTSNode(state=state, config=self.config)
        self.iterations_run = 0
        self.total_rollout_steps = 0
        self.max_rollout_steps = 0
        self.stopped_early = False

    def iterate(self) -> MCTSNode:
        """
        Run a single selection/expansion/simulation/backpropagation pass.

        Returns:
            The node the simulation was run from
        """
        node = select_node(self.root)
        winner, steps = simulate_node(node, self.config)
        backpropagate(node, winner)

        self.iterations_run += 1
        self.total_rollout_steps += steps
        self.max_rollout_steps = max(self.max_rollout_steps, steps)
        return node

    def run_search(self, iterations: Optional[int] = None) -> Action:
        """
        Run the search and return the recommended action.

        Args:
            iterations: Number of iterations (defaults to ``config.iterations``)

        Returns:
            Action of the most visited root child

        Raises:
            NoLegalActionError: If the root has no children after the search
        """
        if iterations is None:
            iterations = self.config.iterations

        start_time = time.time()
        for completed in range(1, iterations + 1):
            self.iterate()
            if completed == iterations or self.config.time_limit is None:
                continue
            # The deadline is only checked after an iteration has run
            if time.time() - start_time > self.config.time_limit:
                self.stopped_early = True
                break

        best_action = self.root.best_action()
        if best_action is None:
            logger.error("No valid actions found for %s.", self.root.state.current_player.username)
            raise NoLegalActionError(
                f"No legal action for player {self.root.player_id} "
                f"({self.root.state.current_player.username})"
            )
        return best_action


def mcts_search(
    state: GameState,
    config: Optional[MCTSConfig] = None
) -> Tuple[Action, Dict[str, Any]]:
    """
    Run Monte Carlo Tree Search to find the best action.

    This function runs the full MCTS algorithm:
    1. Create a root node from the current state
    2. Repeatedly run selection, expansion, simulation and backpropagation
    3. Return the action of the most visited root child

    Args:
        state: Current game state
        config: MCTS configuration parameters

    Returns:
        Tuple of (best action, search statistics)

    Raises:
        NoLegalActionError: If the player on turn has no legal action
    """
    search = MCTSSearch(state, config)
    start_time = time.time()
    best_action = search.run_search()
    elapsed = time.time() - start_time

    root = search.root
    stats = {
        "iterations": search.iterations_run,
        "time_elapsed": elapsed,
        "iterations_per_second": search.iterations_run / max(0.001, elapsed),
        "node_count": count_nodes(root),
        "max_rollout_steps": search.max_rollout_steps,
        "average_rollout_steps": search.total_rollout_steps / max(1, search.iterations_run),
        "stopped_early": search.stopped_early,
        "action_visits": {},
        "action_values": {},
        "principal_variation": [
            (str(action), value) for action, value in get_principal_variation(root)
        ],
    }
    for action_str, action_stats in get_action_statistics(root).items():
        stats["action_visits"][action_str] = action_stats["visits"]
        stats["action_values"][action_str] = action_stats["value"]

    logger.info(
        "Search for %s chose %s after %d iterations (%.3fs, %d nodes)",
        state.current_player.username, best_action, stats["iterations"],
        elapsed, stats["node_count"],
    )
    return best_action, stats


def select_node(root: MCTSNode) -> MCTSNode:
    """
    Select a node for simulation.

    This function implements the selection and expansion phases of MCTS.

    Args:
        root: Root node of the MCTS tree

    Returns:
        Node selected for simulation
    """
    return root.tree_policy()


def expand_node(node: MCTSNode) -> Optional[MCTSNode]:
    """
    Expand a node by adding a child.

    Args:
        node: Node to expand

    Returns:
        New child node, or None if the node has no untried actions
    """
    if not node.has_untried_actions():
        return None
    return node.expand()


def simulate_node(node: MCTSNode, config: MCTSConfig) -> Tuple[int, int]:
    """
    Run a rollout from a node's state.

    Args:
        node: Node to simulate from
        config: MCTS configuration parameters

    Returns:
        Tuple of (winning player index, number of rollout steps)
    """
    return simulate_game(node.state, max_steps=config.max_rollout_steps)


def backpropagate(node: MCTSNode, winner: int) -> None:
    """
    Update statistics from a node up to and including the root.

    Args:
        node: Node to start backpropagation from
        winner: Index of the player who won the simulation
    """
    current = node
    while current is not None:
        current.update(winner)
        current = current.parent


def count_nodes(node: MCTSNode) -> int:
    """
    Count the total number of nodes in the tree.

    Args:
        node: Root node of the tree

    Returns:
        Total number of nodes
    """
    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        count += 1
        stack.extend(current.children)
    return count


def get_principal_variation(root: MCTSNode, max_depth: int = 10) -> List[Tuple[Action, float]]:
    """
    Get the principal variation (most visited path) from the root.

    Args:
        root: Root node of the MCTS tree
        max_depth: Maximum depth to explore

    Returns:
        List of (action, win rate) pairs along the most visited path
    """
    result = []
    current = root

    while current.children and len(result) < max_depth:
        best_child = current.most_visited_child()
        result.append((best_child.action, best_child.win_rate))
        current = best_child

    return result


def get_action_statistics(root: MCTSNode) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for all actions from the root.

    Args:
        root: Root node of the MCTS tree

    Returns:
        Dictionary mapping action strings to statistics
    """
    result = {}

    for child in root.children:
        result[str(child.action)] = {
            "visits": child.visits,
            "wins": child.wins,
            "value": child.win_rate,
            "uct": root.uct_score(child),
        }

    return result
