"""
Player representation for the Pokémon TCG engine.

This module defines the Player class which tracks a player's hand, active
and benched Pokémon, discard pile and per-turn flags.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pokemon_tcg_ai.core.cards import (
    Card, EnergyCard, PokemonCard, TrainerCard, find_card
)
from pokemon_tcg_ai.core.constants import MIN_ATTACHED_ENERGY_TO_RETREAT, PRIZE_CARDS


@dataclass
class Player:
    """
    Represents a player in the game.

    Holds the cards a player controls and provides lookups used by the
    action generator and the transition function.
    """
    username: str  # Player name
    active_pokemon: PokemonCard  # Pokémon currently in play
    hand: List[Card] = field(default_factory=list)  # Cards in hand, in order
    bench: List[PokemonCard] = field(default_factory=list)  # Benched Pokémon
    discard_pile: List[Card] = field(default_factory=list)  # Played/discarded cards
    energy_attached_this_turn: bool = False  # Only one energy attachment per turn
    prize_cards: int = PRIZE_CARDS  # Prize cards left to take

    def __post_init__(self):
        """Validate the player state."""
        if self.prize_cards < 0:
            raise ValueError("prize_cards cannot be negative")

    def energy_in_hand(self) -> List[EnergyCard]:
        return [card for card in self.hand if isinstance(card, EnergyCard)]

    def trainers_in_hand(self) -> List[TrainerCard]:
        return [card for card in self.hand if isinstance(card, TrainerCard)]

    def get_hand_card(self, card_id: str) -> Optional[Card]:
        """Get a card from the hand by id, or None if it isn't there."""
        index = find_card(self.hand, card_id)
        return self.hand[index] if index is not None else None

    def get_benched(self, card_id: str) -> Optional[PokemonCard]:
        """Get a benched Pokémon by id, or None if it isn't there."""
        index = find_card(self.bench, card_id)
        return self.bench[index] if index is not None else None

    def can_retreat(self) -> bool:
        """
        Check if the active Pokémon may retreat.

        Simplified rule: the active Pokémon needs at least one attached energy.
        No energy is discarded when retreating.
        """
        return len(self.active_pokemon.attached_energy) >= MIN_ATTACHED_ENERGY_TO_RETREAT

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the player to a dictionary for serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "username": self.username,
            "active_pokemon": self.active_pokemon.to_dict(),
            "hand": [card.to_dict() for card in self.hand],
            "bench": [pokemon.to_dict() for pokemon in self.bench],
            "discard_pile": [card.to_dict() for card in self.discard_pile],
            "energy_attached_this_turn": self.energy_attached_this_turn,
            "prize_cards": self.prize_cards,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create a player from a dictionary representation.

        Args:
            data: Dictionary representation of the player

        Returns:
            Player object
        """
        active = Card.from_dict(data["active_pokemon"])
        if not isinstance(active, PokemonCard):
            raise ValueError(f"Active card {active.id} of {data['username']} is not a Pokémon")

        bench = [Card.from_dict(card) for card in data.get("bench", [])]
        for card in bench:
            if not isinstance(card, PokemonCard):
                raise ValueError(f"Benched card {card.id} of {data['username']} is not a Pokémon")

        return cls(
            username=data["username"],
            active_pokemon=active,
            hand=[Card.from_dict(card) for card in data.get("hand", [])],
            bench=bench,
            discard_pile=[Card.from_dict(card) for card in data.get("discard_pile", [])],
            energy_attached_this_turn=data.get("energy_attached_this_turn", False),
            prize_cards=data.get("prize_cards", PRIZE_CARDS),
        )

    def __str__(self) -> str:
        return (f"{self.username}: active {self.active_pokemon}, "
                f"{len(self.hand)} in hand, {len(self.bench)} on bench")
