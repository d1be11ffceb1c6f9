"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the search, including
the iteration budget, the UCT exploration constant and rollout limits.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from pokemon_tcg_ai.core.constants import (
    DEFAULT_MAX_ROLLOUT_STEPS, DEFAULT_MCTS_EXPLORATION, DEFAULT_MCTS_ITERATIONS
)


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    This class defines all tunable parameters for the search,
    with validation and sensible defaults.
    """
    # Search parameters
    iterations: int = DEFAULT_MCTS_ITERATIONS
    """Number of MCTS iterations to perform per move decision"""

    exploration_weight: float = DEFAULT_MCTS_EXPLORATION
    """UCT exploration parameter"""

    time_limit: Optional[float] = None
    """Optional time limit in seconds (None = no limit)"""

    # Simulation parameters
    max_rollout_steps: int = DEFAULT_MAX_ROLLOUT_STEPS
    """Maximum number of actions played in one rollout"""

    knockout_bonus: bool = True
    """Whether a win that knocked out the opponent counts double"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.exploration_weight < 0:
            raise ValueError("exploration_weight must be non-negative")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive or None")

        if self.max_rollout_steps <= 0:
            raise ValueError("max_rollout_steps must be positive")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(iterations=100, max_rollout_steps=100)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(
            iterations=5000,
            exploration_weight=1.2,  # Slightly less exploration
            max_rollout_steps=400,
        )

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
