"""
Rollout (simulation) policy for the search.

Rollouts are deterministic: instead of playing random moves, every step
scores all legal actions with a greedy heuristic and plays the best one.
A rollout ends when either active Pokémon is knocked out, when the player on
turn has nothing to do, or after a step limit.
"""
from typing import List, Tuple

from pokemon_tcg_ai.core.actions import (
    Action, AttachEnergyAction, AttackAction, PlayCardAction, RetreatAction
)
from pokemon_tcg_ai.core.cards import EnergyCard
from pokemon_tcg_ai.core.constants import (
    DEFAULT_MAX_ROLLOUT_STEPS, ENABLING_ENERGY_SCORE, NEUTRAL_SCORE, POTION,
    RETREAT_TO_HEALTHIER_SCORE, SUPER_POTION, SUPER_POTION_BONUS
)
from pokemon_tcg_ai.core.game import GameState


def score_action(state: GameState, action: Action) -> int:
    """
    Score an action for the greedy rollout policy.

    Args:
        state: State the action would be applied to
        action: Candidate action

    Returns:
        Heuristic score, higher is better
    """
    if isinstance(action, AttackAction):
        return _score_attack(state, action)
    if isinstance(action, AttachEnergyAction):
        return _score_energy_attachment(state, action)
    if isinstance(action, PlayCardAction):
        return _score_trainer(state, action)
    if isinstance(action, RetreatAction):
        return _score_retreat(state, action)
    return 0


def _score_attack(state: GameState, action: AttackAction) -> int:
    move = state.current_player.active_pokemon.get_move(action.move_name)
    return move.damage if move else 0


def _score_energy_attachment(state: GameState, action: AttachEnergyAction) -> int:
    player = state.current_player
    if player.energy_attached_this_turn:
        return 0

    energy = player.get_hand_card(action.card_id)
    if not isinstance(energy, EnergyCard):
        return 0

    # Prefer energy that unlocks a move we can't use yet
    active = player.active_pokemon
    for move in active.moves:
        if not active.can_use_move(move) and active.can_use_move(move, extra_energy=[energy]):
            return ENABLING_ENERGY_SCORE
    return NEUTRAL_SCORE


def _score_trainer(state: GameState, action: PlayCardAction) -> int:
    card = state.current_player.get_hand_card(action.card_id)
    if card is None:
        return 0

    active = state.current_player.active_pokemon
    if card.name == POTION:
        return active.missing_hp if active.is_damaged else 0
    if card.name == SUPER_POTION:
        return active.missing_hp + SUPER_POTION_BONUS if active.is_damaged else 0
    return NEUTRAL_SCORE


def _score_retreat(state: GameState, action: RetreatAction) -> int:
    player = state.current_player
    target = player.get_benched(action.card_id)
    if target is None:
        return 0
    if player.active_pokemon.current_hp < target.current_hp:
        return RETREAT_TO_HEALTHIER_SCORE
    return NEUTRAL_SCORE


def choose_best_action(state: GameState, actions: List[Action]) -> Action:
    """
    Pick the highest scoring action.

    Ties go to the action that comes first in ``actions``.

    Args:
        state: Current game state
        actions: Non-empty list of legal actions

    Returns:
        Best action
    """
    if not actions:
        raise ValueError("Cannot choose from an empty action list")

    best_action = actions[0]
    best_score = float('-inf')
    for action in actions:
        score = score_action(state, action)
        if score > best_score:
            best_score = score
            best_action = action
    return best_action


def simulate_game(
    state: GameState,
    max_steps: int = DEFAULT_MAX_ROLLOUT_STEPS
) -> Tuple[int, int]:
    """
    Play a greedy simulated game from ``state``.

    The player on turn keeps acting until an attack or a retreat ends the
    turn; then the other player takes over with their energy attachment
    flag reset. ``state`` itself is not modified.

    Args:
        state: State to simulate from
        max_steps: Maximum number of actions to play

    Returns:
        Tuple of (winning player index, number of actions played)
    """
    steps = 0
    while not state.is_terminal() and steps < max_steps:
        actions = state.get_valid_actions()
        if not actions:
            break

        action = choose_best_action(state, actions)
        state = state.apply_action(action)
        steps += 1

        if state.is_turn_complete():
            state = state.end_turn()

    return state.get_winner(), steps
