"""
Core grid types, board text IO and the reference direct simulation.
"""
