from __future__ import annotations
from pydantic import BaseModel, Field


class OutputConfig(BaseModel):
    format: str = Field("text", description="Default output format (text or sarif).")

    @classmethod
    def default(cls):
        return cls()
