"""Test objectives with known minima."""

from .paraboloid import Paraboloid

__all__ = ["Paraboloid"]
