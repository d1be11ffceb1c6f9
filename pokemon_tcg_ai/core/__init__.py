"""
Pokémon TCG AI Core Package

This package contains the core game logic, including:
- Game state representation and the state transition function
- Player actions and the legal action generator
- Card definitions
- Constants and enums

All core components can be imported directly from this package.
"""

# Game state and transitions
from pokemon_tcg_ai.core.game import (
    GameState, apply_action, is_turn_complete, create_demo_state
)

# Player
from pokemon_tcg_ai.core.player import Player

# Cards
from pokemon_tcg_ai.core.cards import (
    Card, PokemonCard, EnergyCard, TrainerCard, Move, find_card
)

# Actions
from pokemon_tcg_ai.core.actions import (
    Action, ActionType,
    AttackAction, AttachEnergyAction, PlayCardAction, RetreatAction,
    get_all_valid_actions, create_action_from_dict
)

# Constants
from pokemon_tcg_ai.core.constants import (
    CardType, EnergyType,
    POTION, SUPER_POTION, TRAINER_HEAL_AMOUNTS, PRIZE_CARDS
)

__all__ = [
    # Game
    'GameState', 'apply_action', 'is_turn_complete', 'create_demo_state',

    # Player
    'Player',

    # Cards
    'Card', 'PokemonCard', 'EnergyCard', 'TrainerCard', 'Move', 'find_card',

    # Actions
    'Action', 'ActionType',
    'AttackAction', 'AttachEnergyAction', 'PlayCardAction', 'RetreatAction',
    'get_all_valid_actions', 'create_action_from_dict',

    # Constants
    'CardType', 'EnergyType',
    'POTION', 'SUPER_POTION', 'TRAINER_HEAL_AMOUNTS', 'PRIZE_CARDS'
]
