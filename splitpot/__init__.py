"""
splitpot: Multi-variant Poker Equity Calculator

Computes each player's chance of holding the best (or a tied-best)
hand for Texas hold'em, short deck, super hold'em and Omaha, using
exact enumeration when few board cards are missing and Monte Carlo
sampling otherwise.
"""

__version__ = "0.1.0"
