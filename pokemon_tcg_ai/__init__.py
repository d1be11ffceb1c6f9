"""
Pokémon TCG AI - A Monte Carlo Tree Search decision engine for the Pokémon
Trading Card Game.

Given a snapshot of a two-player game, the engine picks the best next action
for the player on turn.
"""

__version__ = "0.1.0"
__author__ = "Pokémon TCG AI Team"

# Make key components available at package level
from pokemon_tcg_ai.core.game import GameState, apply_action
from pokemon_tcg_ai.core.player import Player
from pokemon_tcg_ai.core.actions import Action
from pokemon_tcg_ai.mcts.agent import MCTSAgent
from pokemon_tcg_ai.mcts.search import NoLegalActionError, mcts_search
