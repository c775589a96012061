"""Game domain services: scoring, statistics and the throw cycle.

``scoring`` and ``statistics`` are pure functions over the dataclasses in
``state``; ``repository`` and ``throws`` are the only modules that touch the
database session. HTTP routes and socket handlers import from here, keeping
transport concerns separated from core game mechanics.
"""
