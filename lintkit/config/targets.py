from __future__ import annotations
from typing import List
from pydantic import BaseModel, Field


class TargetsConfig(BaseModel):
    source_extensions: List[str] = Field(default_factory=lambda: [".py"], description="Suffixes of compilation-unit files.")
    project_suffixes: List[str] = Field(default_factory=lambda: [".lkproj"], description="Suffixes of project descriptor files.")
    solution_suffixes: List[str] = Field(default_factory=lambda: [".lksln"], description="Suffixes of solution descriptor files.")
    exclude_patterns: List[str] = Field(default_factory=list, description="Glob patterns skipped when walking directories.")
    respect_gitignore: bool = Field(False, description="Whether directory walks honour the directory's .gitignore.")

    @classmethod
    def default(cls):
        return cls()
