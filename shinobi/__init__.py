"""
Shinobi - Ninja Clash Rules Engine

A deterministic rules engine for a five-seat ninja card battle: one
human against four AI opponents. The engine provides:
- State management with a seeded RNG
- The turn-phase state machine and response windows
- Legal action generation
- Card effects and character ultimates
- Bot policies for the AI seats
"""

__version__ = "0.1.0"
