"""
Core engine: signal filtering, gesture classification, hand mapping,
particle physics, graph layouts and the per-frame simulation loop.

Import submodules directly (``from core.physics import apply_repel``).
"""
