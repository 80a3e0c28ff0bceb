"""
Ladder Hold'em Agents

The agent interface and the personality-driven CPU opponents.
"""

from ladderholdem.agents.base import BaseAgent, CallAgent
from ladderholdem.agents.cpu_agent import CPUAgent, Decision, Situation
from ladderholdem.agents.profiles import CPUProfile, PROFILES, ROSTER, get_profile

__all__ = [
    "BaseAgent",
    "CallAgent",
    "CPUAgent",
    "Decision",
    "Situation",
    "CPUProfile",
    "PROFILES",
    "ROSTER",
    "get_profile",
]
