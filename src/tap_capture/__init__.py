"""Tap Capture - repeated key-tap capture engine exposed over D-Bus.

A consumer arms a capture window, the keyboard backend feeds key presses into
it, and the consumer polls for the finished tap sequence.
"""

from .constants import __version__

__all__ = ['__version__']
