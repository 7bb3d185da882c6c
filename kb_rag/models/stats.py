"""
Index status schemas.

Dependencies: pydantic
System role: Index status API contract
"""

from pydantic import BaseModel


class StatsResponse(BaseModel):
    """Index readiness and size."""

    ready: bool
    message: str | None = None
    total_vectors: int | None = None
    dimension: int | None = None
