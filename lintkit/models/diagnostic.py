"""
Diagnostic models shared by the host and analyzer plugins.
"""

from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator


class Severity(str, Enum):
    """Severity of a reported finding."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: Any) -> "Severity":
        """Maps a Severity or its name to a member; anything else is UNKNOWN."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        return cls.UNKNOWN


class Location(BaseModel):
    file: Optional[str] = Field(None, description="Path of the file the finding refers to.")
    start_line: int = Field(1, description="1-based first line.")
    start_column: int = Field(1, description="1-based first column.")
    end_line: Optional[int] = Field(None, description="1-based last line; defaults to start_line.")
    end_column: Optional[int] = Field(None, description="1-based last column; defaults to start_column.")

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def default_end(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            if data.get("end_line") is None:
                data["end_line"] = data.get("start_line", 1)
            if data.get("end_column") is None:
                data["end_column"] = data.get("start_column", 1)
        return data


class Fix(BaseModel):
    """A suggested edit. The host carries fixes through without reading them."""
    title: str = ""
    replacement: str = ""
    location: Optional[Location] = None

    class Config:
        frozen = True


class Diagnostic(BaseModel):
    rule_code: str = Field(..., description="Short stable rule identifier, e.g. W001.")
    severity: Severity = Field(Severity.WARNING, description="Severity of the finding.")
    message: str = Field(..., description="Human-readable description of the finding.")
    origin: str = Field("", description="Name of the analyzer that produced the finding.")
    location: Optional[Location] = Field(None, description="Where the finding was made, if known.")
    fixes: Tuple[Fix, ...] = Field(default_factory=tuple, description="Suggested edits.")

    class Config:
        frozen = True

    @field_validator("severity", mode="before")
    @classmethod
    def coerce_severity(cls, value):
        return Severity.coerce(value)

    @property
    def file(self) -> Optional[str]:
        return self.location.file if self.location else None


class AnalysisResult(BaseModel):
    """Everything one invocation produced: findings plus host-level failures."""
    diagnostics: Tuple[Diagnostic, ...] = Field(default_factory=tuple)
    errors: Tuple[str, ...] = Field(default_factory=tuple)

    class Config:
        frozen = True
