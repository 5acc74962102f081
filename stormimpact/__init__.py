"""
stormimpact - Weather event classification and impact aggregation.

Classifies NOAA storm event records into a fixed five-category taxonomy and
ranks US states by fatalities, injuries and property damage.

Usage:
    stormimpact run --input repdata-StormData.csv.bz2   # Full pipeline
    stormimpact report                                  # Top states per outcome
    stormimpact classify "TSTM WIND/HAIL"               # Classify a label
    stormimpact categories                              # List the taxonomy
"""

__version__ = "0.1.0"
