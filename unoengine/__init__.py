"""
Unoengine - Rules engine and AI opponents for an UNO variant.

The engine is a set of pure transitions over immutable snapshots:
- Deck construction, shuffling and dealing
- Play validation and card-effect resolution
- Turn and direction bookkeeping, win detection
- Difficulty-tiered bots that play through the same reducer
"""

__version__ = "0.1.0"
