"""
Game state and state transitions for the Pokémon TCG engine.

This module defines the core game mechanics, including:
- GameState: Complete representation of a two-player game at any point
- apply_action: The pure state transition function used by the search
- Turn completion, knockout and winner rules
- Serialization helpers and the demonstration match setup

Every transition works on a deep copy of the state, so states handed out by
this module never share hands, benches, attached energy or discard piles.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import copy
import json
import logging
import random

from pokemon_tcg_ai.core.actions import (
    Action, get_all_valid_actions, create_action_from_dict
)
from pokemon_tcg_ai.core.cards import (
    EnergyCard, Move, PokemonCard, TrainerCard
)
from pokemon_tcg_ai.core.constants import (
    EnergyType, NUM_PLAYERS, POTION, SUPER_POTION
)
from pokemon_tcg_ai.core.player import Player

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    """
    Complete representation of a game state.

    Holds both players, the index of the player on turn, the action that
    produced this state and a turn counter.
    """
    players: List[Player] = field(default_factory=list)
    active_player: int = 0
    last_action: Optional[Action] = None
    turn: int = 0

    def __post_init__(self):
        """Validate the game state."""
        if len(self.players) != NUM_PLAYERS:
            raise ValueError(f"A game needs exactly {NUM_PLAYERS} players, got {len(self.players)}")
        if self.active_player not in (0, 1):
            raise ValueError(f"active_player must be 0 or 1, got {self.active_player}")

    @property
    def current_player(self) -> Player:
        """The player on turn."""
        return self.players[self.active_player]

    @property
    def opponent(self) -> Player:
        """The player waiting for their turn."""
        return self.players[1 - self.active_player]

    def get_valid_actions(self) -> List[Action]:
        """
        Get all valid actions for the player on turn.

        Returns:
            List of valid actions
        """
        return get_all_valid_actions(self)

    def apply_action(self, action: Action) -> GameState:
        """
        Apply an action and return the resulting state.

        This state is never modified.

        Args:
            action: Action to apply

        Returns:
            New game state with ``last_action`` set to the action
        """
        return apply_action(self, action)

    def is_turn_complete(self) -> bool:
        """
        Check if the last action ended the turn.

        Only attacking and retreating end a turn.
        """
        return self.last_action is not None and getattr(self.last_action, "ends_turn", False)

    def end_turn(self) -> GameState:
        """
        Pass the turn to the other player.

        Returns:
            New state with the other player on turn, their energy attachment
            flag reset and the turn counter advanced
        """
        new_state = self.clone()
        new_state.active_player = 1 - new_state.active_player
        new_state.current_player.energy_attached_this_turn = False
        new_state.turn += 1
        return new_state

    def is_terminal(self) -> bool:
        """
        Check if either active Pokémon is knocked out.

        A knockout stands in for taking a prize card and ends a simulation.
        """
        return any(player.active_pokemon.current_hp <= 0 for player in self.players)

    def get_winner(self) -> int:
        """
        Get the winning player index.

        Player 1 wins if player 0's active Pokémon is knocked out; in every
        other case, including a double knockout or a game that is not over,
        player 0 is reported as the winner.
        """
        return 1 if self.players[0].active_pokemon.current_hp <= 0 else 0

    def knocked_out_opponent(self, player_id: int) -> bool:
        """Check if the opponent of ``player_id`` has a knocked out active Pokémon."""
        return self.players[1 - player_id].active_pokemon.current_hp <= 0

    def clone(self) -> GameState:
        """
        Create a deep copy of the game state.

        Returns:
            Copy of the game state
        """
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "players": [player.to_dict() for player in self.players],
            "active_player": self.active_player,
            "last_action": self.last_action.to_dict() if isinstance(self.last_action, Action) else None,
            "turn": self.turn,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameState:
        """
        Create a game state from a dictionary representation.

        Args:
            data: Dictionary representation of the game state

        Returns:
            GameState object
        """
        last_action = data.get("last_action")
        return cls(
            players=[Player.from_dict(player) for player in data["players"]],
            active_player=data.get("active_player", 0),
            last_action=create_action_from_dict(last_action) if last_action else None,
            turn=data.get("turn", 0),
        )

    def to_json(self) -> str:
        """Convert the game state to a JSON string."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> GameState:
        """Create a game state from a JSON string."""
        return cls.from_dict(json.loads(json_str))

    def __str__(self) -> str:
        lines = [f"Turn {self.turn}, {self.current_player.username}'s turn"]
        for i, player in enumerate(self.players):
            marker = "*" if i == self.active_player else " "
            lines.append(f" {marker} {player}")
        return "\n".join(lines)


def apply_action(state: GameState, action: Union[Action, Any]) -> GameState:
    """
    Apply an action to a state, producing a new state.

    The input state is never modified. Actions referencing cards that are not
    where they should be leave the new state unchanged apart from
    ``last_action``; unknown action objects are ignored the same way.

    Args:
        state: State to transition from
        action: Action to apply

    Returns:
        New game state
    """
    new_state = state.clone()

    if isinstance(action, Action):
        action.execute(new_state)
    else:
        logger.warning("Unknown action type: %r", action)

    new_state.last_action = action
    return new_state


def is_turn_complete(state: GameState) -> bool:
    """Check if the last action applied to ``state`` ended the turn."""
    return state.is_turn_complete()


def create_demo_state(seed: Optional[int] = None) -> GameState:
    """
    Create the demonstration match: Charmeleon against Wartortle.

    A coin toss decides which player goes first.

    Args:
        seed: Random seed for the coin toss

    Returns:
        Initial game state
    """
    rng = random.Random(seed)

    fire = (EnergyType.FIRE,)
    water = (EnergyType.WATER,)

    zezima = Player(
        username="Zezima",
        active_pokemon=PokemonCard(
            id="card_004",
            name="Charmeleon",
            current_hp=80,
            max_hp=80,
            moves=[Move("Slash", 30, fire), Move("Flamethrower", 50, fire)],
        ),
        hand=[
            PokemonCard(id="card_001", name="Charmander", current_hp=70, max_hp=70,
                        moves=[Move("Ember", 30, fire)]),
            EnergyCard(id="card_002", name="Fire Energy", energy_type=EnergyType.FIRE),
            EnergyCard(id="card_003", name="Fire Energy", energy_type=EnergyType.FIRE),
            TrainerCard(id="card_009", name=SUPER_POTION),
            TrainerCard(id="card_005", name=POTION),
        ],
    )

    wooloo_hero = Player(
        username="WoolooHero",
        active_pokemon=PokemonCard(
            id="card_008",
            name="Wartortle",
            current_hp=90,
            max_hp=90,
            moves=[Move("Water Gun", 40, water), Move("Bite", 30, water)],
        ),
        hand=[
            PokemonCard(id="card_010", name="Squirtle", current_hp=60, max_hp=60,
                        moves=[Move("Bubble", 20, water)]),
            EnergyCard(id="card_006", name="Water Energy", energy_type=EnergyType.WATER),
            TrainerCard(id="card_007", name=SUPER_POTION),
        ],
    )

    first_player = rng.randrange(NUM_PLAYERS)
    state = GameState(players=[zezima, wooloo_hero], active_player=first_player)
    logger.info("Player %s has won the coin toss.", state.current_player.username)
    return state
