"""
Shared helpers for the contract layer.

Design intent:
- Keep parsing of loosely formatted disclosure text out of the models.
"""
