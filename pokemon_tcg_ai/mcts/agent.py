"""
Monte Carlo Tree Search Agent.

This module provides the MCTSAgent class, a ready-to-use decision service
that runs a fresh search for every decision and exposes the same transition
function the search uses, so callers can advance the real game state.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple
import json
import logging
import time

from pokemon_tcg_ai.core.actions import Action
from pokemon_tcg_ai.core.game import GameState, apply_action
from pokemon_tcg_ai.mcts.config import MCTSConfig
from pokemon_tcg_ai.mcts.search import mcts_search

logger = logging.getLogger(__name__)

CONFIG_PRESETS: Dict[str, Callable[[], MCTSConfig]] = {
    "fast": MCTSConfig.fast,
    "default": MCTSConfig.default,
    "deep": MCTSConfig.deep,
}


class MCTSAgent:
    """
    Monte Carlo Tree Search agent.

    The agent keeps statistics about its searches but never the search tree
    itself; each decision starts from scratch.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        name: str = "MCTS Agent",
    ):
        """
        Initialize an MCTS agent.

        Args:
            config: MCTS configuration parameters
            name: Name of the agent
        """
        self.config = config or MCTSConfig()
        self.name = name

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all actions and their statistics
        self.action_history: List[Tuple[Action, Dict[str, Any]]] = []

    @classmethod
    def from_preset(cls, preset: str, name: Optional[str] = None, **overrides: Any) -> "MCTSAgent":
        """
        Build an agent from one of the named configurations.

        Args:
            preset: One of ``fast``, ``default`` or ``deep``
            name: Name of the agent (defaults to the preset name)
            overrides: Config fields replacing the preset values; None is ignored

        Returns:
            MCTSAgent

        Raises:
            ValueError: If the preset is unknown or an override is invalid
        """
        if preset not in CONFIG_PRESETS:
            raise ValueError(f"Unknown preset: {preset!r} (choose from {', '.join(CONFIG_PRESETS)})")

        values = CONFIG_PRESETS[preset]().to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(config=MCTSConfig.from_dict(values), name=name or f"MCTS ({preset})")

    def select_action(self, state: GameState) -> Action:
        """
        Select an action for the player on turn.

        Args:
            state: Current game state

        Returns:
            Selected action

        Raises:
            NoLegalActionError: If the player on turn has no legal action
        """
        start_time = time.time()
        action, stats = mcts_search(state, self.config)
        stats["total_time"] = time.time() - start_time

        self.last_stats = stats
        self.action_history.append((action, stats))
        logger.debug("%s selected %s", self.name, action)
        return action

    @staticmethod
    def apply_action(state: GameState, action: Action) -> GameState:
        """
        Apply an action to the authoritative game state.

        Args:
            state: Current game state (left unchanged)
            action: Action to apply

        Returns:
            New game state
        """
        return apply_action(state, action)

    def get_last_statistics(self) -> Dict[str, Any]:
        """
        Get statistics from the most recent search.

        Returns:
            Dictionary of search statistics
        """
        return self.last_stats

    def save_statistics(self, filename: str) -> None:
        """
        Save statistics to a file.

        Args:
            filename: Name of the file to save to
        """
        history = []
        for action, stats in self.action_history:
            history.append({
                "action": action.to_dict(),
                "action_visits": stats.get("action_visits", {}),
                "stats": {k: v for k, v in stats.items() if not isinstance(v, (dict, list))},
            })

        data = {
            "agent_name": self.name,
            "config": self.config.to_dict(),
            "history": history,
            "total_actions": len(self.action_history)
        }

        with open(filename, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def __str__(self) -> str:
        return f"{self.name} (MCTS, {self.config.iterations} iterations)"

