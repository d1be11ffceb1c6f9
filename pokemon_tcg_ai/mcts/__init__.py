"""
Monte Carlo Tree Search (MCTS) decision engine.

This package selects the next action for the player on turn. Every decision
builds a fresh tree and runs a fixed number of iterations:

1. Selection: Starting from the root, descend by UCT while the node is fully
   expanded and has children.
2. Expansion: Create a new child node by taking the most recent untried action.
3. Simulation: From the new node, play a greedy heuristic game until a
   Pokémon is knocked out.
4. Backpropagation: Update visits and wins of all nodes up to the root.

The recommended action is the one leading to the most visited root child.
"""

from pokemon_tcg_ai.mcts.node import MCTSNode
from pokemon_tcg_ai.mcts.agent import MCTSAgent
from pokemon_tcg_ai.mcts.search import (
    MCTSSearch,
    NoLegalActionError,
    mcts_search,
    select_node,
    expand_node,
    simulate_node,
    backpropagate
)
from pokemon_tcg_ai.mcts.rollout import simulate_game, score_action, choose_best_action
from pokemon_tcg_ai.mcts.config import MCTSConfig

__all__ = [
    'MCTSAgent',
    'MCTSNode',
    'MCTSConfig',
    'MCTSSearch',
    'NoLegalActionError',
    'mcts_search',
    'select_node',
    'expand_node',
    'simulate_node',
    'backpropagate',
    'simulate_game',
    'score_action',
    'choose_best_action',
]
