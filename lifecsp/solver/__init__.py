"""
Solver module for the Game of Life constraint model.

This module provides the branching configuration, the PuLP/CBC wrapper that
searches a round's constraint system, and the decoding of solved vectors
back into boards.
"""
