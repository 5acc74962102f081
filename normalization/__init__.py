"""
normalization - Field cleanup for raw storm event records.

Upper-cases labels, parses begin dates and resolves scaled damage
magnitudes (PROPDMG + PROPDMGEXP) into absolute USD.
"""

__version__ = "0.1.0"
