"""
taxonomy/categories.py
----------------------
Storm event taxonomy: five categories in priority order.

The storm database's EVTYPE field is free text with hundreds of spelling
variants ("TSTM WIND", "THUNDERSTORM WINDS", "LIGNTNING", "TORNDAO", ...).
Each category lists regular expressions matched case-insensitively
anywhere in the label. A label is assigned to the FIRST category with a
matching pattern, so compound labels such as "THUNDERSTORM WIND/FLASH FLOOD"
resolve to the higher-priority category (Convection).

Priority order:
1. Convection - lightning, tornado, funnel cloud, thunderstorm, wind, hail
2. Extreme-Temperature - cold, heat
3. Flood - flood spellings, rain, precipitation, showers
4. Winter - snow, ice, freezing, winter weather
5. Other - fallback, no patterns
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EventCategory:
    """
    A taxonomy category with its matching rules.

    Attributes:
        code: Category label assigned to records (e.g., "Convection")
        name: Human-readable name
        description: What this category covers
        patterns: Regular expressions, any match assigns the category
        priority: Rank in the precedence list (1 = checked first)
    """
    code: str
    name: str
    description: str
    patterns: tuple = ()
    priority: int = 0

    @property
    def is_fallback(self) -> bool:
        return not self.patterns


CONVECTION = "Convection"
EXTREME_TEMPERATURE = "Extreme-Temperature"
FLOOD = "Flood"
WINTER = "Winter"
OTHER = "Other"


STORM_CATEGORIES = [
    EventCategory(
        code=CONVECTION,
        name="Convection",
        description="Convective storms: lightning, tornadoes and funnel clouds, thunderstorms, wind and hail.",
        patterns=(
            r"\bL\w*?NG\b",                   # LIGHTNING, LIGHTING, LIGNTNING
            r"NADO|\bTOR\w+?O\b|FUNNEL",      # TORNADO, TORNDAO, FUNNEL CLOUD
            r"THUNDERSTORM|TSTM",
            r"WIND|WND",
            r"HAIL",
        ),
        priority=1,
    ),
    EventCategory(
        code=EXTREME_TEMPERATURE,
        name="Extreme Temperature",
        description="Extreme cold and extreme heat, including wind chill and heat waves.",
        patterns=(r"COLD|HEAT",),
        priority=2,
    ),
    EventCategory(
        code=FLOOD,
        name="Flood",
        description="Flash, river, coastal and urban flooding plus heavy rain and showers.",
        patterns=(
            r"\bFL\w*?D",                     # FLOOD, FLOODING, FLD, FLOOODING
            r"RAIN|PRECIP|SHOWER",
        ),
        priority=3,
    ),
    EventCategory(
        code=WINTER,
        name="Winter",
        description="Snow, ice, sleet and freezing conditions, winter storms and winter weather.",
        patterns=(r"SNOW|ICE|ICY|FREEZ|WINT",),
        priority=4,
    ),
    EventCategory(
        code=OTHER,
        name="Other",
        description="Events not covered by other categories (drought, fog, surf, fire, ...).",
        patterns=(),
        priority=5,
    ),
]

# Create lookup dictionaries
CATEGORY_BY_CODE = {cat.code: cat for cat in STORM_CATEGORIES}
CATEGORY_CODES = [cat.code for cat in STORM_CATEGORIES]


def get_category(code: str) -> EventCategory | None:
    """Get a category by its code (case-insensitive)."""
    for cat in STORM_CATEGORIES:
        if cat.code.lower() == str(code).lower():
            return cat
    return None


def get_all_categories() -> list[EventCategory]:
    """Get all categories in priority order."""
    return STORM_CATEGORIES.copy()


def get_primary_categories() -> list[EventCategory]:
    """Get categories that carry matching rules (excluding the fallback)."""
    return [cat for cat in STORM_CATEGORIES if not cat.is_fallback]
