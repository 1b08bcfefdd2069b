"""Grow a 3D plant from cones, view it, and save frames and state."""

__version__ = "0.1.0"