"""
Constraint plumbing (variable layout, constraint collection) and the
Game of Life rule poster.
"""
