"""Crazy Ones: Crazy Eights-style card game with Aces wild."""

__version__ = "0.1.0"
