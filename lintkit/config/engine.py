from __future__ import annotations
from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    jobs: int = Field(1, ge=1, description="Number of worker threads running analyzers.")

    @classmethod
    def default(cls):
        return cls()
