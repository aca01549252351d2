"""
Draw Poker Agents

This module provides the agent interface, the heuristic computer
opponent and simple baselines for testing and simulation.
"""

from drawpoker.agents.base import BaseAgent
from drawpoker.agents.heuristic import HeuristicAgent, hand_strength
from drawpoker.agents.simple import CallAgent, RandomAgent

__all__ = ["BaseAgent", "HeuristicAgent", "hand_strength", "CallAgent", "RandomAgent"]
