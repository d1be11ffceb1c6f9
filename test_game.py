"""
Tests for the game model, the legal action generator and the state
transition function.
"""
import pytest

from conftest import fire_energy, water_energy
from pokemon_tcg_ai.core.actions import (
    AttachEnergyAction, AttackAction, PlayCardAction, RetreatAction,
    create_action_from_dict, get_all_valid_actions
)
from pokemon_tcg_ai.core.cards import Card, Move, PokemonCard, TrainerCard
from pokemon_tcg_ai.core.constants import EnergyType
from pokemon_tcg_ai.core.game import (
    GameState, apply_action, create_demo_state, is_turn_complete
)
from pokemon_tcg_ai.core.player import Player


class TestCards:
    """Test card construction and helpers."""

    def test_hp_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            PokemonCard(id="x", name="Pikachu", current_hp=70, max_hp=60)
        with pytest.raises(ValueError):
            PokemonCard(id="x", name="Pikachu", current_hp=-1, max_hp=60)

    def test_negative_damage_rejected(self):
        with pytest.raises(ValueError):
            Move("Tackle", -10)

    def test_move_usability_checks_presence_not_count(self, make_pokemon):
        move = Move("Flamethrower", 50, [EnergyType.FIRE, EnergyType.FIRE])
        pokemon = make_pokemon(moves=[move], energy=[fire_energy("e1")])
        assert pokemon.can_use_move(move)

    def test_move_needs_every_type(self, make_pokemon):
        move = Move("Steam Burst", 60, [EnergyType.FIRE, EnergyType.WATER])
        pokemon = make_pokemon(moves=[move], energy=[fire_energy("e1")])
        assert not pokemon.can_use_move(move)
        assert pokemon.can_use_move(move, extra_energy=[water_energy("e2")])

    def test_damage_and_heal_clamp(self, make_pokemon):
        pokemon = make_pokemon(hp=30, max_hp=80)
        assert pokemon.take_damage(50) == 30
        assert pokemon.current_hp == 0
        assert pokemon.is_knocked_out
        assert pokemon.heal(100) == 80
        assert pokemon.current_hp == 80

    def test_unknown_card_type_rejected(self):
        with pytest.raises(ValueError):
            Card.from_dict({"id": "x", "name": "Mystery", "type": "Stadium"})


class TestActionGenerator:
    """Test legal action generation."""

    def test_order_is_attack_energy_trainer_retreat(self, make_state, make_pokemon, potion):
        hand = [potion, fire_energy("e1"), TrainerCard(id="t2", name="Switch"), fire_energy("e2")]
        bench = [make_pokemon("b1", "Vulpix", 50), make_pokemon("b2", "Growlithe", 60)]
        state = make_state(hand0=hand, bench0=bench)
        state.players[0].active_pokemon.attached_energy.append(fire_energy("e0"))

        actions = get_all_valid_actions(state)

        assert actions == [
            AttackAction(move_name="Slash", card_id="p0-active"),
            AttackAction(move_name="Flamethrower", card_id="p0-active"),
            AttachEnergyAction(card_id="e1"),
            AttachEnergyAction(card_id="e2"),
            PlayCardAction(card_id="t-potion"),
            PlayCardAction(card_id="t2"),
            RetreatAction(card_id="b1"),
            RetreatAction(card_id="b2"),
        ]

    def test_no_energy_means_no_attack_and_no_retreat(self, make_state, make_pokemon):
        state = make_state(hand0=[fire_energy("e1")], bench0=[make_pokemon("b1", "Vulpix", 50)])
        assert get_all_valid_actions(state) == [AttachEnergyAction(card_id="e1")]

    def test_no_attachment_after_energy_attached(self, make_state):
        state = make_state(hand0=[fire_energy("e1")], attached0=True)
        assert get_all_valid_actions(state) == []

    def test_generated_actions_satisfy_their_preconditions(self, make_state, make_pokemon, potion):
        states = [
            make_state(hand0=[fire_energy("e1"), potion], bench0=[make_pokemon("b1", "Vulpix", 50)]),
            make_state(hand0=[fire_energy("e1"), potion], attached0=True),
            create_demo_state(seed=3),
        ]
        state = states[0].apply_action(AttachEnergyAction(card_id="e1"))
        states.append(state)

        for state in states:
            for action in get_all_valid_actions(state):
                assert action.validate(state), action

    def test_deterministic(self, make_state, potion):
        state = make_state(hand0=[fire_energy("e1"), potion])
        assert get_all_valid_actions(state) == get_all_valid_actions(state.clone())

    def test_uses_active_player(self, make_state):
        state = make_state(hand1=[water_energy("w1")], active_player=1)
        assert get_all_valid_actions(state) == [AttachEnergyAction(card_id="w1")]


class TestStateTransitions:
    """Test the pure transition function."""

    def test_apply_action_does_not_mutate_input(self, make_state, potion):
        state = make_state(hand0=[fire_energy("e1"), potion])
        snapshot = state.clone()

        apply_action(state, AttachEnergyAction(card_id="e1"))
        apply_action(state, PlayCardAction(card_id="t-potion"))

        assert state == snapshot

    def test_apply_action_is_deterministic(self, make_state):
        state = make_state(hand0=[fire_energy("e1")])
        action = AttachEnergyAction(card_id="e1")
        assert apply_action(state, action) == apply_action(state, action)

    def test_states_share_no_collections(self, make_state):
        state = make_state(hand0=[fire_energy("e1"), fire_energy("e2")])
        first = state.apply_action(AttachEnergyAction(card_id="e1"))
        second = state.apply_action(AttachEnergyAction(card_id="e2"))

        first.players[0].hand.clear()
        first.players[0].active_pokemon.attached_energy.clear()

        assert [c.id for c in second.players[0].hand] == ["e1"]
        assert [c.id for c in second.players[0].active_pokemon.attached_energy] == ["e2"]
        assert len(state.players[0].hand) == 2
        assert state.players[0].active_pokemon.attached_energy == []

    def test_attach_energy(self, make_state):
        state = make_state(hand0=[fire_energy("e1")])
        new_state = state.apply_action(AttachEnergyAction(card_id="e1"))

        player = new_state.players[0]
        assert player.hand == []
        assert [c.id for c in player.active_pokemon.attached_energy] == ["e1"]
        assert player.energy_attached_this_turn
        assert new_state.last_action == AttachEnergyAction(card_id="e1")

    def test_second_attachment_in_same_turn_is_noop(self, make_state):
        state = make_state(hand0=[fire_energy("e1"), fire_energy("e2")])
        once = state.apply_action(AttachEnergyAction(card_id="e1"))
        twice = once.apply_action(AttachEnergyAction(card_id="e2"))

        assert twice.players[0].hand == once.players[0].hand
        assert (twice.players[0].active_pokemon.attached_energy
                == once.players[0].active_pokemon.attached_energy)

    def test_attack_clamps_hp_at_zero(self, make_state, make_pokemon):
        attacker = make_pokemon(moves=[Move("Flamethrower", 50, [EnergyType.FIRE])],
                                energy=[fire_energy("e0")])
        defender = make_pokemon("d", "Squirtle", 30, max_hp=60)
        state = make_state(active0=attacker, active1=defender)

        new_state = state.apply_action(AttackAction(move_name="Flamethrower"))

        assert new_state.players[1].active_pokemon.current_hp == 0
        assert new_state.is_terminal()

    def test_attack_with_unknown_move_is_noop(self, make_state):
        state = make_state()
        action = AttackAction(move_name="Hyper Beam")
        new_state = state.apply_action(action)

        expected = state.clone()
        expected.last_action = action
        assert new_state == expected

    def test_potion_heals_capped_at_max(self, make_state, make_pokemon, potion):
        state = make_state(active0=make_pokemon(hp=70, max_hp=80), hand0=[potion])
        new_state = state.apply_action(PlayCardAction(card_id="t-potion"))

        player = new_state.players[0]
        assert player.active_pokemon.current_hp == 80
        assert player.hand == []
        assert player.discard_pile == [potion]

    def test_super_potion_heals_fifty(self, make_state, make_pokemon, super_potion):
        state = make_state(active0=make_pokemon(hp=10, max_hp=100), hand0=[super_potion])
        new_state = state.apply_action(PlayCardAction(card_id="t-super"))
        assert new_state.players[0].active_pokemon.current_hp == 60

    def test_other_trainer_only_moves_to_discard(self, make_state, make_pokemon):
        switch = TrainerCard(id="t2", name="Switch")
        state = make_state(active0=make_pokemon(hp=10, max_hp=100), hand0=[switch])
        new_state = state.apply_action(PlayCardAction(card_id="t2"))

        assert new_state.players[0].active_pokemon.current_hp == 10
        assert new_state.players[0].discard_pile == [switch]

    def test_retreat_swaps_active_and_benched(self, make_state, make_pokemon):
        bench = [make_pokemon("b1", "Vulpix", 50), make_pokemon("b2", "Growlithe", 60)]
        state = make_state(bench0=bench)
        new_state = state.apply_action(RetreatAction(card_id="b1"))

        player = new_state.players[0]
        assert player.active_pokemon.id == "b1"
        assert [p.id for p in player.bench] == ["b2", "p0-active"]

    @pytest.mark.parametrize("action", [
        AttachEnergyAction(card_id="missing"),
        PlayCardAction(card_id="missing"),
        RetreatAction(card_id="missing"),
        AttachEnergyAction(card_id="t-potion"),  # not an energy card
    ])
    def test_unresolvable_reference_only_records_last_action(self, make_state, potion, action):
        state = make_state(hand0=[fire_energy("e1"), potion])
        new_state = state.apply_action(action)

        expected = state.clone()
        expected.last_action = action
        assert new_state == expected

    def test_unknown_action_type_is_ignored(self, make_state):
        state = make_state(hand0=[fire_energy("e1")])
        new_state = apply_action(state, "Evolve")

        expected = state.clone()
        expected.last_action = "Evolve"
        assert new_state == expected
        assert not new_state.is_turn_complete()


class TestTurnFlow:
    """Test turn completion, knockouts and the winner rule."""

    def test_only_attack_and_retreat_complete_the_turn(self, make_state, make_pokemon, potion):
        state = make_state(hand0=[fire_energy("e1"), potion],
                           bench0=[make_pokemon("b1", "Vulpix", 50)])
        assert not is_turn_complete(state)

        state = state.apply_action(AttachEnergyAction(card_id="e1"))
        assert not is_turn_complete(state)
        state = state.apply_action(PlayCardAction(card_id="t-potion"))
        assert not is_turn_complete(state)
        assert is_turn_complete(state.apply_action(AttackAction(move_name="Slash")))
        assert is_turn_complete(state.apply_action(RetreatAction(card_id="b1")))

    def test_end_turn_switches_player_and_resets_flag(self, make_state):
        state = make_state(attached0=True)
        state.players[1].energy_attached_this_turn = True

        new_state = state.end_turn()

        assert new_state.active_player == 1
        assert new_state.turn == 1
        assert not new_state.players[1].energy_attached_this_turn
        assert state.active_player == 0

    def test_winner_favours_player_zero(self, make_state, make_pokemon):
        assert make_state().get_winner() == 0

        knocked_out = make_state(active0=make_pokemon(hp=0, max_hp=80))
        assert knocked_out.get_winner() == 1

        both = make_state(active0=make_pokemon(hp=0, max_hp=80),
                          active1=make_pokemon("d", "Squirtle", 0, max_hp=60))
        assert both.get_winner() == 1

        player_one_out = make_state(active1=make_pokemon("d", "Squirtle", 0, max_hp=60))
        assert player_one_out.get_winner() == 0
        assert player_one_out.knocked_out_opponent(0)
        assert not player_one_out.knocked_out_opponent(1)


class TestSerialization:
    """Test the JSON snapshot codec."""

    def test_json_snapshot(self):
        state = create_demo_state(seed=7)
        state = state.apply_action(AttachEnergyAction(card_id="card_002"))

        restored = GameState.from_json(state.to_json())

        assert restored == state
        assert get_all_valid_actions(restored) == get_all_valid_actions(state)

    def test_action_from_dict(self):
        assert create_action_from_dict({"type": "Attack", "move": "Slash"}) == AttackAction("Slash")
        assert create_action_from_dict({"type": "Retreat", "card_id": "b1"}) == RetreatAction("b1")
        with pytest.raises(ValueError):
            create_action_from_dict({"type": "Evolve", "card_id": "x"})

    def test_active_must_be_pokemon(self):
        data = {
            "username": "Zezima",
            "active_pokemon": {"id": "e1", "name": "Fire Energy", "type": "Energy",
                               "energy_type": "Fire"},
        }
        with pytest.raises(ValueError):
            Player.from_dict(data)

    def test_state_needs_two_players(self, make_pokemon):
        with pytest.raises(ValueError):
            GameState(players=[Player(username="solo", active_pokemon=make_pokemon())])


class TestDemoState:
    """Test the demonstration match setup."""

    def test_coin_toss_is_seeded(self):
        assert create_demo_state(seed=11).active_player == create_demo_state(seed=11).active_player
        assert {create_demo_state(seed=s).active_player for s in range(20)} == {0, 1}

    def test_first_actions(self):
        state = create_demo_state(seed=0)
        state.active_player = 0
        assert get_all_valid_actions(state) == [
            AttachEnergyAction(card_id="card_002"),
            AttachEnergyAction(card_id="card_003"),
            PlayCardAction(card_id="card_009"),
            PlayCardAction(card_id="card_005"),
        ]
