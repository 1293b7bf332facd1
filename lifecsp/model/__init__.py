"""
Board model for one round: the two cell grids, posted constraints and the
activation set.
"""
