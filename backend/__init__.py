"""
ESG Insight contract package.

Design intent:
- Define the exact shape of values crossing the ESG reporting API boundary.
- Keep every helper pure so producer and consumer can share it unchanged.
"""
