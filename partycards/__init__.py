"""
PartyCards - Party card game session engine

A rules-driven engine for Cards-Against-Humanity style games.
The engine loads a card catalog and provides:
- Deck building, shuffling and dealing
- Immutable game session snapshots
- Round transitions (join, submit, judge)
- Session storage and a REST API
"""

__version__ = "0.1.0"
