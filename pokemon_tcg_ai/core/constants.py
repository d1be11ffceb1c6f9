"""
Constants for the Pokémon TCG engine.

This module defines the game constants used throughout the implementation,
including card categories, energy types, trainer card effects and the
default search parameters.
"""
from enum import Enum
from typing import Dict, Final


class CardType(Enum):
    """Enum representing the three card supertypes."""
    POKEMON = "Pokemon"
    ENERGY = "Energy"
    TRAINER = "Trainer"


class EnergyType(Enum):
    """Enum representing the energy types a move can require."""
    GRASS = "Grass"
    FIRE = "Fire"
    WATER = "Water"
    LIGHTNING = "Lightning"
    PSYCHIC = "Psychic"
    FIGHTING = "Fighting"
    DARKNESS = "Darkness"
    METAL = "Metal"
    FAIRY = "Fairy"
    DRAGON = "Dragon"
    COLORLESS = "Colorless"


# Unicode symbols for energy (for terminal display)
ENERGY_SYMBOLS: Final[Dict[EnergyType, str]] = {
    EnergyType.GRASS: "🌿",
    EnergyType.FIRE: "🔥",
    EnergyType.WATER: "💧",
    EnergyType.LIGHTNING: "⚡",
    EnergyType.PSYCHIC: "🔮",
    EnergyType.FIGHTING: "👊",
    EnergyType.DARKNESS: "🌑",
    EnergyType.METAL: "⚙",
    EnergyType.FAIRY: "✨",
    EnergyType.DRAGON: "🐉",
    EnergyType.COLORLESS: "⚪",
}

# Trainer cards with a known effect
POTION: Final[str] = "Potion"
SUPER_POTION: Final[str] = "Super Potion"

# HP restored to the active Pokémon by each healing trainer
TRAINER_HEAL_AMOUNTS: Final[Dict[str, int]] = {
    POTION: 20,
    SUPER_POTION: 50,
}

# Extra rollout score for a Super Potion over its raw healing value
SUPER_POTION_BONUS: Final[int] = 10

# Rollout scores for non-damage actions
ENABLING_ENERGY_SCORE: Final[int] = 10
RETREAT_TO_HEALTHIER_SCORE: Final[int] = 10
NEUTRAL_SCORE: Final[int] = 1

# Player setup
NUM_PLAYERS: Final[int] = 2
PRIZE_CARDS: Final[int] = 6
MIN_ATTACHED_ENERGY_TO_RETREAT: Final[int] = 1

# Win increments during backpropagation
WIN_REWARD: Final[int] = 1
KNOCKOUT_WIN_REWARD: Final[int] = 2

# AI and simulation settings
DEFAULT_MCTS_ITERATIONS: Final[int] = 1000
DEFAULT_MCTS_EXPLORATION: Final[float] = 1.41  # UCT exploration parameter (~sqrt(2))
DEFAULT_MAX_ROLLOUT_STEPS: Final[int] = 200
