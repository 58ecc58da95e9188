"""
Pydantic models for the reference-table endpoint.
"""

from pydantic import BaseModel

from solarquote.config import ReferenceTables


class ReferenceOutput(BaseModel):
    tables: ReferenceTables
    orientation_labels: dict[str, str]
    occupancy_labels: dict[str, str]
    shading_labels: dict[str, str]
