"""
lifecsp: Conway's Game of Life generations computed as constraint systems.

Each generation step is encoded as a binary constraint model (border,
closure and neighbor-counting transition rules) and handed to the PuLP/CBC
solver. The solved next grid is chained into the model of the next round.
"""
