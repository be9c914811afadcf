"""Routing — pattern compilation, ordered first-match resolution, parameter merging.

Routes are registered during setup and frozen when the router first
dispatches.
"""
