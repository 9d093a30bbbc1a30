"""Game domain services: board, rules, session registry and turn coordination.

This package contains pure domain logic that is imported by HTTP routes and
socket handlers, keeping transport concerns separated from core game
mechanics.
"""
