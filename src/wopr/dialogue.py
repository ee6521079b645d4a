"""
Dialogue state machine for the WOPR conversation.

Each screen has a constant DialogueStep describing what is rendered when the
screen is entered and where each accepted input token leads. The transition
function is pure: it only reads the step table and never touches transports,
renderers or the registry.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple, Union

from . import content
from .screens import Screen


@dataclass(frozen=True)
class Write:
    """Animated text written one character at a time."""

    text: str
    delay: Optional[float] = None


@dataclass(frozen=True)
class LineBump:
    """One or more newline writes that advance the cursor row."""

    count: int = 1


@dataclass(frozen=True)
class Control:
    """Opaque control sequence passed through unchanged."""

    sequence: str


@dataclass(frozen=True)
class ClearScreen:
    """Clear the screen and home the cursor."""


@dataclass(frozen=True)
class Identify:
    """The full-block identification sweep shown on connect."""


Instruction = Union[Write, LineBump, Control, ClearScreen, Identify]
Instructions = Tuple[Instruction, ...]


def line_bumps(instructions: Instructions) -> int:
    """Count the newline writes declared by LineBump instructions."""
    return sum(i.count for i in instructions if isinstance(i, LineBump))


def literal_text(instructions: Instructions) -> str:
    """Concatenate the animated text of the given instructions."""
    return "".join(i.text for i in instructions if isinstance(i, Write))


@dataclass(frozen=True)
class Route:
    """Where an accepted token leads."""

    screen: Screen
    preface: Instructions = ()
    authenticate: bool = False


@dataclass(frozen=True)
class DialogueStep:
    """
    Static descriptor of one screen.

    Attributes:
        screen: The screen this step belongs to
        output: Instructions rendered when the screen is entered
        routes: Accepted normalized tokens and their routes
        fallback: Route for any other token, None to reject the session
    """

    screen: Screen
    output: Instructions
    routes: Mapping[str, Route] = field(default_factory=dict)
    fallback: Optional[Route] = None

    @property
    def line_bumps(self) -> int:
        return line_bumps(self.output)

    @property
    def text(self) -> str:
        return literal_text(self.output)


class ActionKind(Enum):
    ADVANCE = "advance"
    REJECT = "reject"
    NOOP = "noop"


@dataclass(frozen=True)
class Action:
    """Outcome of feeding one token to the state machine."""

    kind: ActionKind
    screen: Optional[Screen] = None
    preface: Instructions = ()
    authenticate: bool = False

    @classmethod
    def advance(cls, route: Route) -> "Action":
        return cls(ActionKind.ADVANCE, route.screen, route.preface, route.authenticate)

    @classmethod
    def reject(cls) -> "Action":
        return cls(ActionKind.REJECT)

    @classmethod
    def noop(cls) -> "Action":
        return cls(ActionKind.NOOP)


def normalize(raw: Union[str, bytes]) -> str:
    """
    Reduce raw input to a comparable token.

    Carriage returns and line feeds are removed wherever they appear and the
    rest is uppercased. Interior whitespace is kept as is.

    Args:
        raw: Input as received from the keyboard or a socket

    Returns:
        str: The normalized token
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return raw.replace("\r", "").replace("\n", "").upper()


def _list_games() -> Instructions:
    output = [LineBump()]
    last = len(content.GAMES) - 1
    for i, game in enumerate(content.GAMES):
        # Global Thermonuclear War gets its own blank line on both sides
        if i == last:
            output.append(LineBump())
        output.append(Write(game))
        output.append(LineBump())
        if i == last:
            output.append(LineBump())
    return tuple(output)


BANNER: Instructions = (Control(content.COLOR_LIGHT_BLUE), Identify())

HELP_MESSAGE: Instructions = (
    LineBump(),
    Write(content.HELP_NOT_AVAILABLE),
    LineBump(),
)

GAME_LIST: Instructions = _list_games()

NOT_RECOGNIZED: Instructions = (
    LineBump(),
    Write(content.NOT_RECOGNIZED),
    Write(content.CONNECTION_TERMINATED),
    LineBump(),
)

TO_LOGON = Route(Screen.LOGON)


DIALOGUE: Dict[Screen, DialogueStep] = {
    Screen.LOGON: DialogueStep(
        Screen.LOGON,
        (LineBump(), Write(content.LOGON_PROMPT)),
        routes={
            "JOSHUA": Route(Screen.GREETING, authenticate=True),
            "HELP": Route(Screen.LOGON, HELP_MESSAGE),
            "HELP LOGON": Route(Screen.LOGON, HELP_MESSAGE),
            "HELP GAMES": Route(Screen.GAMES),
        },
    ),
    Screen.GAMES: DialogueStep(
        Screen.GAMES,
        (
            LineBump(),
            Write(content.GAMES_HELP[0]),
            LineBump(),
            Write(content.GAMES_HELP[1]),
            LineBump(2),
        ),
        routes={"LIST GAMES": Route(Screen.LOGON, GAME_LIST)},
        fallback=TO_LOGON,
    ),
    Screen.GREETING: DialogueStep(
        Screen.GREETING,
        (ClearScreen(), Write(content.GREETING), LineBump(2)),
        fallback=Route(Screen.WELLBEING),
    ),
    Screen.WELLBEING: DialogueStep(
        Screen.WELLBEING,
        (LineBump(2), Write(content.WELLBEING), LineBump(2)),
        fallback=Route(Screen.EXPLANATION),
    ),
    Screen.EXPLANATION: DialogueStep(
        Screen.EXPLANATION,
        (
            LineBump(2),
            Write(content.EXPLANATION[0]),
            LineBump(),
            Write(content.EXPLANATION[1]),
            LineBump(2),
        ),
        fallback=Route(Screen.PLAY_GAME),
    ),
    Screen.PLAY_GAME: DialogueStep(
        Screen.PLAY_GAME,
        (LineBump(2), Write(content.PLAY_GAME), LineBump(2)),
        fallback=Route(Screen.PLAY_GAME_VERIFY),
    ),
    Screen.PLAY_GAME_VERIFY: DialogueStep(
        Screen.PLAY_GAME_VERIFY,
        (LineBump(2), Write(content.PLAY_GAME_VERIFY), LineBump(2)),
        fallback=Route(Screen.GLOBAL_WAR),
    ),
    # The side choice is read but not evaluated
    Screen.GLOBAL_WAR: DialogueStep(
        Screen.GLOBAL_WAR,
        (
            Write(content.FINE),
            ClearScreen(),
            Write(content.side_by_side_maps(), delay=0.005),
            LineBump(),
            Write(content.map_labels(), delay=0.005),
            LineBump(2),
            Write(content.SIDE_QUESTION),
            LineBump(2),
            Write(content.SIDE_US),
            LineBump(),
            Write(content.SIDE_SOVIET),
            LineBump(2),
            Write(content.SIDE_PROMPT),
        ),
        fallback=Route(Screen.STRIKE_1),
    ),
    Screen.STRIKE_1: DialogueStep(
        Screen.STRIKE_1,
        (
            ClearScreen(),
            Write(content.AWAITING_STRIKE),
            LineBump(),
            Write(content.UNDERLINE * len(content.AWAITING_STRIKE)),
            LineBump(2),
            Write(content.TARGETS_PROMPT[0]),
            LineBump(),
            Write(content.TARGETS_PROMPT[1]),
            LineBump(2),
        ),
        fallback=Route(Screen.STRIKE_2),
    ),
    # TODO: continue the strike sequence once target selection is scripted
    Screen.STRIKE_2: DialogueStep(
        Screen.STRIKE_2,
        (LineBump(),),
        fallback=TO_LOGON,
    ),
}


def transition(screen: Screen, token: str, table: Mapping[Screen, DialogueStep] = DIALOGUE) -> Action:
    """
    Decide what happens when a normalized token arrives at a screen.

    Args:
        screen: The screen the session is on
        token: Normalized input token
        table: Step table to consult

    Returns:
        Action: ADVANCE to a screen, REJECT the session, or NOOP when the
        screen has no step in the table
    """
    step = table.get(screen)
    if step is None:
        return Action.noop()

    route = step.routes.get(token)
    if route is None:
        route = step.fallback
    if route is None:
        return Action.reject()
    return Action.advance(route)
