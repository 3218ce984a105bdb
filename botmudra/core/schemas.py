from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


# -------------------------
# API envelopes
# -------------------------

class ErrorMessage(BaseModel):
    """Body of every non-2xx response from the calculate endpoint."""

    message: str


class HealthStatus(BaseModel):
    status: Literal["ok"] = "ok"
    reference_version: str


class StrategySummary(BaseModel):
    name: str
    description: str
    monthly_return: float = Field(..., description="Allocation-ratio weighted monthly return, percent")
    pair_count: int
    pairs: Dict[str, Dict[str, float]] = Field(default_factory=dict)


class StrategyCatalog(BaseModel):
    version: str
    strategies: List[StrategySummary] = Field(default_factory=list)


# -------------------------
# Reference table validation
# -------------------------

class ValidationIssue(BaseModel):
    level: Literal["ERROR", "WARN", "INFO"]
    message: str
    strategy: Optional[str] = None
    location: Optional[str] = None


class ValidationReport(BaseModel):
    ok: bool = True
    source: Optional[str] = None
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)
    infos: List[ValidationIssue] = Field(default_factory=list)

    def add_error(self, msg: str, *, strategy: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(level="ERROR", message=msg, strategy=strategy, location=self.source))

    def add_warning(self, msg: str, *, strategy: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(level="WARN", message=msg, strategy=strategy, location=self.source))

    def add_info(self, msg: str, *, strategy: Optional[str] = None) -> None:
        self.infos.append(ValidationIssue(level="INFO", message=msg, strategy=strategy, location=self.source))

    def finalize(self) -> "ValidationReport":
        self.ok = len(self.errors) == 0
        return self
