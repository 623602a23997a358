"""
Pydantic schemas for load and pipeline run results
"""

from pydantic import BaseModel, Field
from typing import List


class LoadSummary(BaseModel):
    """Outcome of loading one CSV source into one table"""
    
    table: str
    rows_loaded: int = Field(0, ge=0)
    batches_inserted: int = Field(0, ge=0)


class PipelineSummary(BaseModel):
    """Outcome of a full pipeline run"""
    
    tables_created: List[str] = Field(default_factory=list)
    loads: List[LoadSummary] = Field(default_factory=list)
    
    @property
    def total_rows(self) -> int:
        return sum(load.rows_loaded for load in self.loads)
