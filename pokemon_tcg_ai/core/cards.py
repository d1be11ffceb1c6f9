"""
Cards for the Pokémon TCG engine.

This module defines the card data structures (Pokémon, Energy and Trainer
cards, plus the moves a Pokémon can use) along with the helpers needed to
check move usability and to serialize cards.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple

from pokemon_tcg_ai.core.constants import CardType, EnergyType


@dataclass(frozen=True)
class Move:
    """
    A move a Pokémon can use when attacking.

    The energy cost is a multiset of energy types. Usability only checks that
    each required type is present among the attached energy, not how many.
    """
    name: str
    damage: int = 0
    energy_cost: Tuple[EnergyType, ...] = ()

    def __post_init__(self):
        """Validate the move after initialization."""
        if self.damage < 0:
            raise ValueError(f"Move {self.name!r} cannot deal negative damage ({self.damage})")
        # Allow lists to be passed in
        object.__setattr__(self, "energy_cost", tuple(self.energy_cost))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "damage": self.damage,
            "energy_cost": [energy.value for energy in self.energy_cost],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Move:
        """Create from dictionary representation."""
        return cls(
            name=data["name"],
            damage=data.get("damage", 0),
            energy_cost=tuple(EnergyType(value) for value in data.get("energy_cost", [])),
        )

    def __str__(self) -> str:
        cost_str = ", ".join(energy.value for energy in self.energy_cost) or "free"
        return f"{self.name} ({self.damage} dmg, cost: {cost_str})"


@dataclass
class Card:
    """
    Base class for every card.

    A card is identified by a unique id and a name; subclasses fix the
    card type.
    """
    card_type: ClassVar[CardType]

    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"id": self.id, "name": self.name, "type": self.card_type.value}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Card:
        """
        Create a card of the right subtype from a dictionary.

        Args:
            data: Dictionary representation of a card

        Returns:
            PokemonCard, EnergyCard or TrainerCard
        """
        card_type = CardType(data["type"])
        return _CARD_CLASSES[card_type]._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> Card:
        return cls(id=data["id"], name=data["name"])

    def __str__(self) -> str:
        return f"{self.name} [{self.id}]"


@dataclass
class EnergyCard(Card):
    """An energy card that can be attached to a Pokémon."""
    card_type: ClassVar[CardType] = CardType.ENERGY

    energy_type: EnergyType = EnergyType.COLORLESS

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["energy_type"] = self.energy_type.value
        return data

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> EnergyCard:
        return cls(
            id=data["id"],
            name=data["name"],
            energy_type=EnergyType(data.get("energy_type", EnergyType.COLORLESS.value)),
        )


@dataclass
class TrainerCard(Card):
    """A trainer card; its effect is looked up by name when played."""
    card_type: ClassVar[CardType] = CardType.TRAINER


@dataclass
class PokemonCard(Card):
    """
    A Pokémon card.

    Tracks current and maximum HP, the moves the Pokémon knows and the
    energy attached to it. Current HP always stays within [0, max_hp].
    """
    card_type: ClassVar[CardType] = CardType.POKEMON

    current_hp: int = 0
    max_hp: int = 0
    moves: List[Move] = field(default_factory=list)
    attached_energy: List[EnergyCard] = field(default_factory=list)

    def __post_init__(self):
        """Validate HP after initialization."""
        if self.max_hp < 0:
            raise ValueError(f"{self.name} cannot have negative max HP ({self.max_hp})")
        if not 0 <= self.current_hp <= self.max_hp:
            raise ValueError(
                f"{self.name} current HP ({self.current_hp}) outside valid range "
                f"(0-{self.max_hp})"
            )

    @property
    def is_knocked_out(self) -> bool:
        """True once the Pokémon has no HP left."""
        return self.current_hp <= 0

    @property
    def is_damaged(self) -> bool:
        return self.current_hp < self.max_hp

    @property
    def missing_hp(self) -> int:
        return self.max_hp - self.current_hp

    def get_move(self, move_name: str) -> Optional[Move]:
        """
        Look up one of this Pokémon's moves by name.

        Args:
            move_name: Name of the move

        Returns:
            The move, or None if the Pokémon doesn't know it
        """
        for move in self.moves:
            if move.name == move_name:
                return move
        return None

    def attached_energy_types(self, extra: Iterable[EnergyCard] = ()) -> set:
        """Get the set of energy types attached, plus any extra energy."""
        return {energy.energy_type for energy in self.attached_energy} | {
            energy.energy_type for energy in extra
        }

    def can_use_move(self, move: Move, extra_energy: Iterable[EnergyCard] = ()) -> bool:
        """
        Check if the attached energy covers a move's cost.

        Every required energy type must be attached at least once. The number
        of cards of each type is not checked.

        Args:
            move: Move to check
            extra_energy: Energy to count as attached in addition to the real one

        Returns:
            True if the move can be used, False otherwise
        """
        available = self.attached_energy_types(extra_energy)
        return all(energy in available for energy in move.energy_cost)

    def take_damage(self, amount: int) -> int:
        """
        Subtract damage from current HP, never going below 0.

        Returns:
            Damage actually dealt
        """
        dealt = min(amount, self.current_hp)
        self.current_hp -= dealt
        return dealt

    def heal(self, amount: int) -> int:
        """
        Restore HP, never going above max HP.

        Returns:
            HP actually restored
        """
        healed = min(amount, self.missing_hp)
        self.current_hp += healed
        return healed

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "current_hp": self.current_hp,
            "max_hp": self.max_hp,
            "moves": [move.to_dict() for move in self.moves],
            "attached_energy": [energy.to_dict() for energy in self.attached_energy],
        })
        return data

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> PokemonCard:
        max_hp = data.get("max_hp", 0)
        return cls(
            id=data["id"],
            name=data["name"],
            current_hp=data.get("current_hp", max_hp),
            max_hp=max_hp,
            moves=[Move.from_dict(move) for move in data.get("moves", [])],
            attached_energy=[
                EnergyCard._from_dict(energy) for energy in data.get("attached_energy", [])
            ],
        )

    def __str__(self) -> str:
        return f"{self.name} [{self.id}] {self.current_hp}/{self.max_hp} HP"


_CARD_CLASSES = {
    CardType.POKEMON: PokemonCard,
    CardType.ENERGY: EnergyCard,
    CardType.TRAINER: TrainerCard,
}


def find_card(cards: List[Card], card_id: str) -> Optional[int]:
    """
    Find the index of a card by id.

    Args:
        cards: Cards to search
        card_id: Id of the card to find

    Returns:
        Index of the first matching card, or None if absent
    """
    for i, card in enumerate(cards):
        if card.id == card_id:
            return i
    return None
