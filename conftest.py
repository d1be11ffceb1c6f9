"""Shared fixtures for the test suite."""
import pytest

from pokemon_tcg_ai.core.cards import EnergyCard, Move, PokemonCard, TrainerCard
from pokemon_tcg_ai.core.constants import EnergyType
from pokemon_tcg_ai.core.game import GameState
from pokemon_tcg_ai.core.player import Player


def fire_energy(card_id: str) -> EnergyCard:
    return EnergyCard(id=card_id, name="Fire Energy", energy_type=EnergyType.FIRE)


def water_energy(card_id: str) -> EnergyCard:
    return EnergyCard(id=card_id, name="Water Energy", energy_type=EnergyType.WATER)


@pytest.fixture
def make_pokemon():
    """Factory for Pokémon cards."""
    def _make(card_id="p1", name="Charmeleon", hp=80, max_hp=None, moves=None, energy=None):
        return PokemonCard(
            id=card_id,
            name=name,
            current_hp=hp,
            max_hp=max_hp if max_hp is not None else hp,
            moves=moves if moves is not None else [],
            attached_energy=energy if energy is not None else [],
        )
    return _make


@pytest.fixture
def make_state(make_pokemon):
    """
    Factory for two-player states.

    Player 0 defaults to a Charmeleon knowing Slash (30, Fire) and
    Flamethrower (50, Fire, Fire); player 1 to a move-less Wartortle.
    """
    def _make(active0=None, active1=None, hand0=None, bench0=None,
              hand1=None, bench1=None, attached0=False, active_player=0):
        if active0 is None:
            active0 = make_pokemon(
                "p0-active", "Charmeleon", 80,
                moves=[
                    Move("Slash", 30, (EnergyType.FIRE,)),
                    Move("Flamethrower", 50, (EnergyType.FIRE, EnergyType.FIRE)),
                ],
            )
        if active1 is None:
            active1 = make_pokemon("p1-active", "Wartortle", 90)
        players = [
            Player(username="Zezima", active_pokemon=active0, hand=hand0 or [],
                   bench=bench0 or [], energy_attached_this_turn=attached0),
            Player(username="WoolooHero", active_pokemon=active1, hand=hand1 or [],
                   bench=bench1 or []),
        ]
        return GameState(players=players, active_player=active_player)
    return _make


@pytest.fixture
def potion():
    return TrainerCard(id="t-potion", name="Potion")


@pytest.fixture
def super_potion():
    return TrainerCard(id="t-super", name="Super Potion")
