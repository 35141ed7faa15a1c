"""
LyricDrill - Language practice through song lyrics.

Turns a song's lyrics into short lessons of blank-filling and
word-arrangement exercises, records answers and reports accuracy.
"""

__version__ = "0.1.0"
