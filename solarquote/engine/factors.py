"""
Efficiency factor and irradiance lookups.

Every lookup table carries an explicit "default" entry; an unknown key falls
through to it instead of failing.
"""

import logging
from bisect import bisect_right
from typing import Optional

from solarquote.config import (
    DEFAULT_KEY,
    HomeOccupancy,
    ReferenceTables,
    RoofOrientation,
    get_reference_tables,
)
from solarquote.engine.utils import clamp

logger = logging.getLogger(__name__)


def lookup_with_default(table: dict[str, float], key, table_name: str) -> float:
    """Look up key in table, falling back to the table's default entry."""
    key = getattr(key, "value", key)
    if key in table:
        return table[key]
    logger.warning("No %s entry for %r, using default", table_name, key)
    return table[DEFAULT_KEY]


def get_orientation_factor(
    orientation: RoofOrientation,
    tables: Optional[ReferenceTables] = None,
) -> float:
    """Generation multiplier for a roof direction (S = 1.0)."""
    tables = tables or get_reference_tables()
    return lookup_with_default(
        tables.solar.orientation_factors, orientation, "orientation factor"
    )


def get_pitch_factor(
    pitch: float,
    tables: Optional[ReferenceTables] = None,
) -> float:
    """
    Generation multiplier for a roof pitch in degrees.

    The pitch is clamped to [0, 90] and the factor linearly interpolated
    between the two neighbouring anchor points. On an anchor the anchor's
    own value is returned.
    """
    tables = tables or get_reference_tables()
    anchors = tables.solar.pitch_factors
    angles = [a for a, _ in anchors]

    p = clamp(pitch, angles[0], angles[-1])

    idx = bisect_right(angles, p)
    if idx >= len(anchors):
        return anchors[-1][1]

    lower_angle, lower_factor = anchors[idx - 1]
    upper_angle, upper_factor = anchors[idx]
    if p == lower_angle:
        return lower_factor

    ratio = (p - lower_angle) / (upper_angle - lower_angle)
    return lower_factor + ratio * (upper_factor - lower_factor)


def get_regional_irradiance(
    region: Optional[str],
    tables: Optional[ReferenceTables] = None,
) -> float:
    """Fallback irradiance (kWh/m²/year) for a region name."""
    tables = tables or get_reference_tables()
    values = tables.regional_irradiance.values
    if region is None:
        return values[DEFAULT_KEY]
    return lookup_with_default(values, region, "regional irradiance")


def is_known_region(
    region: Optional[str],
    tables: Optional[ReferenceTables] = None,
) -> bool:
    tables = tables or get_reference_tables()
    values = tables.regional_irradiance.values
    return region is not None and region != DEFAULT_KEY and region in values


def get_self_consumption_factor(
    occupancy: HomeOccupancy,
    tables: Optional[ReferenceTables] = None,
) -> float:
    tables = tables or get_reference_tables()
    return lookup_with_default(
        tables.solar.self_consumption_factors, occupancy, "self-consumption factor"
    )
