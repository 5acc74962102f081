"""
stormimpact/regions.py
----------------------
US state codes recognized as valid analysis regions.

The storm database also carries DC, territories and marine zone codes
(PR, GU, AM, LM, ...). Only the 50 states are kept by default; a run can
supply its own set through PipelineConfig.valid_regions.
"""

# Two-letter codes of the 50 states, sorted
US_STATES = (
    'AK', 'AL', 'AR', 'AZ', 'CA', 'CO', 'CT', 'DE', 'FL', 'GA',
    'HI', 'IA', 'ID', 'IL', 'IN', 'KS', 'KY', 'LA', 'MA', 'MD',
    'ME', 'MI', 'MN', 'MO', 'MS', 'MT', 'NC', 'ND', 'NE', 'NH',
    'NJ', 'NM', 'NV', 'NY', 'OH', 'OK', 'OR', 'PA', 'RI', 'SC',
    'SD', 'TN', 'TX', 'UT', 'VA', 'VT', 'WA', 'WI', 'WV', 'WY',
)
