"""
API route exposing the reference tables and option labels in force.
"""

from fastapi import APIRouter

from solarquote.config import (
    OCCUPANCY_LABELS,
    ORIENTATION_LABELS,
    SHADING_LABELS,
    get_reference_tables,
)
from solarquote.models.reference import ReferenceOutput

router = APIRouter(prefix="/api/v1", tags=["reference"])


@router.get("/reference", response_model=ReferenceOutput)
async def reference() -> ReferenceOutput:
    """Reference tables used by new calculations, plus form option labels."""
    return ReferenceOutput(
        tables=get_reference_tables(),
        orientation_labels={k.value: v for k, v in ORIENTATION_LABELS.items()},
        occupancy_labels={k.value: v for k, v in OCCUPANCY_LABELS.items()},
        shading_labels={str(k): v for k, v in SHADING_LABELS.items()},
    )
