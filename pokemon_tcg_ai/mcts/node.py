"""
Monte Carlo Tree Search Node.

This module defines the MCTSNode class which represents a node in the search
tree. Each node captures a game state, tracks visit and win statistics and
owns its child nodes.
"""
from __future__ import annotations
from typing import List, Optional
import math

from pokemon_tcg_ai.core.actions import Action
from pokemon_tcg_ai.core.constants import KNOCKOUT_WIN_REWARD, WIN_REWARD
from pokemon_tcg_ai.core.game import GameState
from pokemon_tcg_ai.mcts.config import MCTSConfig


class MCTSNode:
    """
    A node in the Monte Carlo Tree Search.

    A node is unexpanded while it still has untried actions, interior once
    all of them have been turned into children, and a terminal leaf if the
    action generator had nothing to offer in the first place.
    """

    def __init__(
        self,
        state: GameState,
        parent: Optional[MCTSNode] = None,
        action: Optional[Action] = None,
        config: Optional[MCTSConfig] = None,
    ):
        """
        Initialize an MCTS node.

        Args:
            state: The game state this node represents
            parent: The parent node (None for root)
            action: The action that led to this state (None for root)
            config: MCTS configuration parameters
        """
        self.state = state
        self.parent = parent
        self.action = action
        self.config = config or MCTSConfig()

        # The player on turn at this node
        self.player_id = state.active_player

        # Node statistics
        self.visits = 0
        self.wins = 0
        self.children: List[MCTSNode] = []

        # Legal actions not yet expanded; only ever shrinks
        self.untried_actions: List[Action] = state.get_valid_actions()

    @property
    def win_rate(self) -> float:
        return self.wins / self.visits if self.visits else 0.0

    def has_untried_actions(self) -> bool:
        """
        Check if there are untried actions from this node.

        Returns:
            True if there are untried actions, False otherwise
        """
        return bool(self.untried_actions)

    def is_fully_expanded(self) -> bool:
        return not self.untried_actions

    def is_terminal(self) -> bool:
        """
        Check if this node is a dead end (nothing left to try, no children).

        Returns:
            True if the node can be neither expanded nor descended
        """
        return not self.untried_actions and not self.children

    def uct_score(self, child: MCTSNode) -> float:
        """
        Calculate the UCT score for a child node.

        UCT = wins / visits + exploration_weight * sqrt(ln(parent_visits) / visits)

        Args:
            child: Child node to calculate score for

        Returns:
            UCT score
        """
        # An unvisited child is always tried first
        if child.visits == 0:
            return float('inf')

        exploitation = child.wins / child.visits
        exploration = math.sqrt(math.log(self.visits) / child.visits)
        return exploitation + self.config.exploration_weight * exploration

    def select_child(self) -> MCTSNode:
        """
        Select the child with the highest UCT score.

        Ties go to the child that was expanded first.

        Returns:
            Selected child node
        """
        if not self.children:
            raise ValueError("Cannot select child from node with no children")

        return max(self.children, key=self.uct_score)

    def expand(self) -> MCTSNode:
        """
        Expand the tree by adding a new child node.

        The most recently generated untried action is expanded first.

        Returns:
            The new child node
        """
        if not self.untried_actions:
            raise ValueError("Cannot expand node with no untried actions")

        action = self.untried_actions.pop()
        child = MCTSNode(
            state=self.state.apply_action(action),
            parent=self,
            action=action,
            config=self.config,
        )
        self.children.append(child)
        return child

    def tree_policy(self) -> MCTSNode:
        """
        Select a node to simulate from.

        Descends by UCT while the current node is fully expanded and has
        children, then expands one untried action if there is any.

        Returns:
            Selected or newly expanded node
        """
        current = self
        while current.is_fully_expanded() and current.children:
            current = current.select_child()

        if current.has_untried_actions():
            current = current.expand()

        return current

    def update(self, winner: int) -> None:
        """
        Record the result of one simulation.

        Args:
            winner: Index of the player who won the simulation
        """
        self.visits += 1
        if winner != self.player_id:
            return

        if self.config.knockout_bonus and self.state.knocked_out_opponent(self.player_id):
            self.wins += KNOCKOUT_WIN_REWARD
        else:
            self.wins += WIN_REWARD

    def most_visited_child(self) -> Optional[MCTSNode]:
        """
        Get the child with the most visits.

        Ties go to the child that was expanded first.

        Returns:
            Most visited child, or None if the node has no children
        """
        if not self.children:
            return None
        return max(self.children, key=lambda c: c.visits)

    def best_action(self) -> Optional[Action]:
        """
        Get the best action from this node based on visit counts.

        Returns:
            The best action, or None if no children
        """
        best_child = self.most_visited_child()
        return best_child.action if best_child else None

    def __str__(self) -> str:
        return (f"MCTSNode(player={self.player_id}, "
                f"action={self.action}, "
                f"visits={self.visits}, "
                f"wins={self.wins}, "
                f"children={len(self.children)}, "
                f"untried={len(self.untried_actions)})")
