"""
WOPR Terminal

A scripted WOPR terminal conversation served from the local console or to
many simultaneous TCP clients, with optional session transcripts and a TUI
transcript viewer.
"""

__version__ = "1.0.0"
__author__ = "Agent LIGHTMAN"
__description__ = "WOPR terminal conversation server for console and telnet clients"
