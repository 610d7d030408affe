"""Option schemas for fsmeta-tools."""

from pydantic import BaseModel, Field


class ScanOptions(BaseModel):
    """Traversal configuration flags for a whiteout scan."""

    model_config = {"frozen": True}

    physical: bool = Field(
        default=True, description="Never follow symbolic links while walking"
    )
    whiteouts: bool = Field(
        default=True, description="Report whiteout entries found during the walk"
    )
