"""
Torch Crawler package.

A turn-based dungeon crawler: procedurally generated floors, field of view,
an action-point turn scheduler, melee, ranged and skill combat, relics and a
shop between floors.
"""

__version__ = "0.1.0"
