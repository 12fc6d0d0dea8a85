"""
Games module - Game-specific content for the engine.

Each game has its own subpackage with:
- Card library and deck composition
- Character roster (passives and ultimates)
- Setup (deck generation, seating, opening passives)
"""
