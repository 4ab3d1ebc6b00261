"""
connectn - Generalized connect-N board game

This package provides an immutable board representation, column-drop move
engine, win detection, a scripted move replay ("autoplay") engine, and a
terminal interface for playing against a random computer opponent.
"""

# Version number
__version__ = '0.1.0'
