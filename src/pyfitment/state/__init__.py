"""Selector state layer.

The cascading selector is a pure value object plus transition functions;
interaction surfaces (the finder, the CLI scripts) only hold a reference
to the current state and swap it for the one a transition returns.
"""
