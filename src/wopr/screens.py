"""
Screens of the scripted WOPR conversation and per-session state.
"""

from dataclasses import dataclass
from enum import Enum


class Screen(Enum):
    """A named point in the scripted conversation."""

    LOGON = "logon"
    GAMES = "games"
    GREETING = "greeting"
    WELLBEING = "wellbeing"
    EXPLANATION = "explanation"
    PLAY_GAME = "play_game"
    PLAY_GAME_VERIFY = "play_game_verify"
    GLOBAL_WAR = "global_war"
    STRIKE_1 = "strike_1"
    STRIKE_2 = "strike_2"


@dataclass(frozen=True)
class SessionState:
    """
    Where a connected party currently is in the conversation.

    Instances are immutable; the registry swaps whole values so a reader
    never sees a half-applied update.
    """

    authenticated: bool = False
    screen: Screen = Screen.LOGON
