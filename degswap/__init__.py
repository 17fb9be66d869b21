"""Degree-preserving checkerboard-swap MCMC sampling of simple directed graphs."""

__version__ = "0.1.0"
