"""
Dialogue text, ASCII art and ANSI control sequences for the WOPR script.

The control sequences are written to transports verbatim so that terminal
emulators and raw telnet clients render them identically.
"""

# ANSI control sequences
CLEAR = "\u001B[2J"
CLEAR_AND_RESTORE = "\033[u\033[K"
COLOR_LIGHT_BLUE = "\x1b[38;5;51m"
COLOR_RESET = "\033[0m"

FULL_BLOCK = "█"
UNDERLINE = "-"

DEFAULT_TERMINAL_WIDTH = 80


def cursor_position(row: int, col: int) -> str:
    """Return the sequence moving the cursor to a zero-based row and column."""
    return f"\033[{row + 1};{col + 1}f"


LOGON_PROMPT = "LOGON: "
HELP_NOT_AVAILABLE = "HELP NOT AVAILABLE"

GAMES_HELP = (
    "'GAMES' REFERS TO MODELS, SIMULATIONS AND GAMES",
    "WHICH HAVE TACTICAL AND STRATEGIC APPLICATIONS.",
)

GAMES = (
    "FALKEN'S MAZE",
    "BLACK JACK",
    "GIN RUMMY",
    "HEARTS",
    "BRIDGE",
    "CHECKERS",
    "CHESS",
    "POKER",
    "FIGHTER COMBAT",
    "GUERILLA ENGAGEMENT",
    "DESERT WARFARE",
    "AIR-TO-GROUND ACTIONS",
    "THEATERWIDE TACTICAL WARFARE",
    "THEATERWIDE BIOTOXIC AND CHEMICAL WARFARE",
    "GLOBAL THERMONUCLEAR WAR",
)

GREETING = "GREETINGS PROFESSOR FALKEN."
WELLBEING = "HOW ARE YOU FEELING TODAY?"
EXPLANATION = (
    "EXCELLENT. IT'S BEEN A LONG TIME. CAN YOU EXPLAIN",
    "THE REMOVAL OF YOUR USER ACCOUNT NUMBER ON 6/23/73?",
)
PLAY_GAME = "YES, THEY DO. SHALL WE PLAY A GAME?"
PLAY_GAME_VERIFY = "WOULDN'T YOU PREFER A GOOD GAME OF CHESS?"

FINE = "Fine."
SIDE_QUESTION = "WHICH SIDE DO YOU WANT?"
SIDE_US = "  1.    UNITED STATES"
SIDE_SOVIET = "  2.    SOVIET UNION"
SIDE_PROMPT = "PLEASE CHOOSE ONE: "

AWAITING_STRIKE = "AWAITING FIRST STRIKE COMMAND"
TARGETS_PROMPT = (
    "PLEASE LIST PRIMARY TARGETS BY",
    "CITY AND/OR COUNTY NAME:",
)

NOT_RECOGNIZED = "IDENTIFICATION NOT RECOGNIZED BY SYSTEM\n"
CONNECTION_TERMINATED = "--CONNECTION TERMINATED--"

US = """
    ,------~~v,                
    |'         Ż\\   ,__/Ż||    
   /             \\,/     /     
   |                    /      
   \\                   |       
    \\                 /        
     ^Ż~_            /         
         '~~,  ,Ż~Ż\\ \\         
             \\/     \\/         
                               
    """

SOVIET_UNION = """
              _--^\\
            _/    /,_
   ,,   ,,/^      Ż  vŻv-__
   |'~^Ż                   Ż\\
 _/                     _  /^
/                   ,~~^/|ŻŻ
|          __,,  v__\\   \\/
 ^~       /    ~Ż  //
   \\~,  ,/         Ż
      ~~
    """


def side_by_side_maps() -> str:
    """Lay the two maps out in 40-column halves, one text line per row."""
    us_lines = US.split("\n")
    soviet_lines = SOVIET_UNION.split("\n")
    rows = []
    for i in range(max(len(us_lines), len(soviet_lines))):
        left = us_lines[i] if i < len(us_lines) else ""
        right = soviet_lines[i] if i < len(soviet_lines) else ""
        rows.append(f"{left:<40}  {right:<40}\n")
    return "".join(rows)


def map_labels() -> str:
    return f"{'UNITED STATES':>24}{'SOVIET UNION':>36}\n\n"
