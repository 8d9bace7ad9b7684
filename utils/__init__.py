"""
Shared utilities: pure geometry helpers and tunable constants
"""

from .geometry import dist, palm_center, fibonacci_sphere_point, hex_to_rgb

__all__ = [
    'dist',
    'palm_center',
    'fibonacci_sphere_point',
    'hex_to_rgb',
]
