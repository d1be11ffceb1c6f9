"""
Actions for the Pokémon TCG engine.

This module defines the four actions a player can take on their turn:
- Attacking with a move of the active Pokémon
- Attaching an energy card from hand to the active Pokémon
- Playing a trainer card from hand
- Retreating the active Pokémon in favour of a benched one

Each action knows its own precondition (``validate``) and how to apply itself
to a game state (``execute``). Executing an action whose card cannot be found
leaves the state untouched. ``get_all_valid_actions`` is the legal action
generator used by the search.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, ClassVar, Dict, List

from pokemon_tcg_ai.core.cards import EnergyCard, TrainerCard, find_card
from pokemon_tcg_ai.core.constants import TRAINER_HEAL_AMOUNTS

logger = logging.getLogger(__name__)


class ActionType(Enum):
    """Enum representing the different types of actions."""
    ATTACK = "Attack"
    ATTACH_ENERGY = "AttachEnergy"
    PLAY_CARD = "PlayCard"
    RETREAT = "Retreat"


# Actions after which the player's turn is over
TURN_ENDING_ACTIONS = frozenset({ActionType.ATTACK, ActionType.RETREAT})


class Action(ABC):
    """
    Abstract base class for all actions.

    Actions are immutable values; they always act on behalf of the state's
    active player.
    """
    action_type: ClassVar[ActionType]

    @abstractmethod
    def validate(self, game_state) -> bool:
        """
        Validate if the action is legal in the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            True if the action is valid, False otherwise
        """

    @abstractmethod
    def execute(self, game_state) -> None:
        """
        Execute the action, modifying the game state in place.

        Callers that need the original state intact must pass a clone.

        Args:
            game_state: State to modify
        """

    @property
    def ends_turn(self) -> bool:
        return self.action_type in TURN_ENDING_ACTIONS

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert the action to a dictionary for serialization."""

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> Action:
        """Create an action from a dictionary representation."""


@dataclass(frozen=True)
class AttackAction(Action):
    """
    Attack the opponent's active Pokémon with a named move.

    ``card_id`` is the attacking Pokémon and is informational only; the
    move is always looked up on the current active Pokémon.
    """
    action_type: ClassVar[ActionType] = ActionType.ATTACK
    move_name: str
    card_id: str = ""

    def validate(self, game_state) -> bool:
        attacker = game_state.current_player.active_pokemon
        move = attacker.get_move(self.move_name)
        return move is not None and attacker.can_use_move(move)

    def execute(self, game_state) -> None:
        attacker = game_state.current_player.active_pokemon
        move = attacker.get_move(self.move_name)
        if move is None:
            logger.debug("%s has no move %r, attack ignored", attacker.name, self.move_name)
            return

        defender = game_state.opponent.active_pokemon
        dealt = defender.take_damage(move.damage)
        logger.debug("%s used %s and dealt %d damage to %s",
                     attacker.name, move.name, dealt, defender.name)
        if defender.is_knocked_out:
            logger.debug("%s is knocked out!", defender.name)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.action_type.value, "move": self.move_name, "card_id": self.card_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AttackAction:
        return cls(move_name=data["move"], card_id=data.get("card_id", ""))

    def __str__(self) -> str:
        return f"Attack with {self.move_name}"


@dataclass(frozen=True)
class AttachEnergyAction(Action):
    """Attach an energy card from hand to the active Pokémon (once per turn)."""
    action_type: ClassVar[ActionType] = ActionType.ATTACH_ENERGY
    card_id: str

    def validate(self, game_state) -> bool:
        player = game_state.current_player
        if player.energy_attached_this_turn:
            return False
        return isinstance(player.get_hand_card(self.card_id), EnergyCard)

    def execute(self, game_state) -> None:
        player = game_state.current_player
        if player.energy_attached_this_turn:
            logger.debug("%s already attached energy this turn", player.username)
            return

        index = find_card(player.hand, self.card_id)
        if index is None or not isinstance(player.hand[index], EnergyCard):
            logger.debug("Energy card %s not in %s's hand", self.card_id, player.username)
            return

        energy = player.hand.pop(index)
        player.active_pokemon.attached_energy.append(energy)
        player.energy_attached_this_turn = True
        logger.debug("Attached %s to %s", energy.name, player.active_pokemon.name)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.action_type.value, "card_id": self.card_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AttachEnergyAction:
        return cls(card_id=data["card_id"])

    def __str__(self) -> str:
        return f"Attach energy {self.card_id}"


@dataclass(frozen=True)
class PlayCardAction(Action):
    """
    Play a trainer card from hand.

    The card goes to the discard pile, then its effect is applied. Potions
    heal the active Pokémon; other trainers have no effect.
    """
    action_type: ClassVar[ActionType] = ActionType.PLAY_CARD
    card_id: str

    def validate(self, game_state) -> bool:
        return isinstance(game_state.current_player.get_hand_card(self.card_id), TrainerCard)

    def execute(self, game_state) -> None:
        player = game_state.current_player
        index = find_card(player.hand, self.card_id)
        if index is None or not isinstance(player.hand[index], TrainerCard):
            logger.debug("Trainer card %s not in %s's hand", self.card_id, player.username)
            return

        trainer = player.hand.pop(index)
        player.discard_pile.append(trainer)
        logger.debug("%s played %s", player.username, trainer.name)

        heal_amount = TRAINER_HEAL_AMOUNTS.get(trainer.name)
        if heal_amount is None:
            logger.debug("No specific effect for trainer card: %s", trainer.name)
            return
        healed = player.active_pokemon.heal(heal_amount)
        logger.debug("%s healed %d HP", player.active_pokemon.name, healed)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.action_type.value, "card_id": self.card_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PlayCardAction:
        return cls(card_id=data["card_id"])

    def __str__(self) -> str:
        return f"Play trainer {self.card_id}"


@dataclass(frozen=True)
class RetreatAction(Action):
    """Swap the active Pokémon with a benched one."""
    action_type: ClassVar[ActionType] = ActionType.RETREAT
    card_id: str

    def validate(self, game_state) -> bool:
        player = game_state.current_player
        return player.can_retreat() and player.get_benched(self.card_id) is not None

    def execute(self, game_state) -> None:
        player = game_state.current_player
        index = find_card(player.bench, self.card_id)
        if index is None:
            logger.debug("Pokémon %s not on %s's bench", self.card_id, player.username)
            return

        incoming = player.bench.pop(index)
        player.bench.append(player.active_pokemon)
        player.active_pokemon = incoming
        logger.debug("%s retreated to %s", player.username, incoming.name)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.action_type.value, "card_id": self.card_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RetreatAction:
        return cls(card_id=data["card_id"])

    def __str__(self) -> str:
        return f"Retreat to {self.card_id}"


def get_all_valid_actions(game_state) -> List[Action]:
    """
    Get all valid actions for the active player.

    The order is stable: attacks (in move order), energy attachments (in hand
    order, only if no energy was attached this turn), trainer cards (in hand
    order), then retreats (in bench order).

    Args:
        game_state: Current state of the game

    Returns:
        List of valid actions, possibly empty
    """
    player = game_state.current_player
    active = player.active_pokemon
    actions: List[Action] = []

    for move in active.moves:
        if active.can_use_move(move):
            actions.append(AttackAction(move_name=move.name, card_id=active.id))

    if not player.energy_attached_this_turn:
        for card in player.energy_in_hand():
            actions.append(AttachEnergyAction(card_id=card.id))

    for card in player.trainers_in_hand():
        actions.append(PlayCardAction(card_id=card.id))

    if player.can_retreat():
        for pokemon in player.bench:
            actions.append(RetreatAction(card_id=pokemon.id))

    return actions


_ACTION_CLASSES = {
    ActionType.ATTACK: AttackAction,
    ActionType.ATTACH_ENERGY: AttachEnergyAction,
    ActionType.PLAY_CARD: PlayCardAction,
    ActionType.RETREAT: RetreatAction,
}


def create_action_from_dict(data: Dict[str, Any]) -> Action:
    """
    Create an action from a dictionary representation.

    Args:
        data: Dictionary representation of an action

    Returns:
        Action object
    """
    try:
        action_type = ActionType(data["type"])
    except ValueError:
        raise ValueError(f"Unknown action type: {data['type']}") from None
    return _ACTION_CLASSES[action_type].from_dict(data)
