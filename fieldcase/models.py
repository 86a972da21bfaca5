from __future__ import annotations

from typing import Annotated, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .cases import CaseStyle
from .rules import DEFAULT_DELIMITER


class FilterConfig(BaseModel):
    """Resolved filter settings, built once and passed to the transform loop."""

    model_config = ConfigDict(frozen=True)

    delimiter: str = DEFAULT_DELIMITER
    targets: Tuple[int, ...]
    style: CaseStyle

    @field_validator("delimiter")
    @classmethod
    def _delimiter_not_empty(cls, v: str) -> str:
        if v == "":
            raise ValueError("delimiter must not be empty")
        return v

    @field_validator("targets")
    @classmethod
    def _targets_sorted_positive(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        if not v:
            raise ValueError("at least one target is required")
        if any(t < 1 for t in v):
            raise ValueError("targets are 1-based positive integers")
        return tuple(sorted(set(v)))


class TransformRequest(BaseModel):
    text: str
    delim: str = Field(default=DEFAULT_DELIMITER, min_length=1)
    targets: List[Annotated[int, Field(ge=1)]] = Field(min_length=1, examples=[[2]])
    case: str = Field(examples=["kebab"])


class TransformResponse(BaseModel):
    lines: List[str] = Field(default_factory=list)
    count: int = 0


class CaseInfo(BaseModel):
    name: str
    display: str


class CasesResponse(BaseModel):
    cases: List[CaseInfo]


class TransformErrorDetail(BaseModel):
    line: int
    column: int
    word: str
    case: str
    message: Optional[str] = None


class HealthResponse(BaseModel):
    ok: bool = True
