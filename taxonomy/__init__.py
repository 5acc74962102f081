"""
taxonomy - Priority-ordered storm event taxonomy.

Maps free-text NOAA event labels (EVTYPE) to one of five categories:
Convection, Extreme-Temperature, Flood, Winter, Other. Matching uses fixed
regular-expression rules, checked in priority order.

Usage:
    stormimpact categories            # List categories and their rules
    stormimpact classify "TSTM WIND"  # Classify labels from the command line
"""

__version__ = "1.0.0"
