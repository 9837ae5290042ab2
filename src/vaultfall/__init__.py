"""
VAULTFALL - a falling-loot catcher game.

Loot drops from a bank facade; the player steers a thief with a sack to
catch it while dodging penalty items.
"""

__version__ = "0.1.0"
