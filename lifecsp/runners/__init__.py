"""
Round controller, run configuration, diagnostics and command-line entrypoint.
"""
