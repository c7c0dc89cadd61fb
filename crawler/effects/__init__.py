"""
Effects module for the crawler.

This module contains the timed stat effects carried by entities and the
ground and visual effects laid on the map.
"""

from .ground_effect import GroundEffect, VisualEffect
from .stat_effect import StatEffect

__all__ = [
    "GroundEffect",
    "StatEffect",
    "VisualEffect",
]
