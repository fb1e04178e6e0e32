from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from pdf_builder.projections import parse_int

NUMERIC_DEFAULTS = {"age": 30, "income": 50000, "savings": 100000, "retireAge": 65}


class RetirementRequest(BaseModel):
    name: str = "Client"
    age: int = 30
    income: int = 50000
    savings: int = 100000
    retireAge: int = 65
    lifestyle: str = "comfortable"
    summary: str = ""
    userEmail: Optional[str] = None
    userPhone: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("age", "income", "savings", "retireAge", mode="before")
    @classmethod
    def coerce_numeric(cls, value: Any, info: ValidationInfo) -> int:
        return parse_int(value, NUMERIC_DEFAULTS[info.field_name])

    @field_validator("name", "lifestyle", "summary", mode="before")
    @classmethod
    def blank_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return str(value)


class RetirementPDFResponse(BaseModel):
    success: bool = True
    pdf: str = Field(description="Base64-encoded PDF document")
    fileName: str
    mimeType: str = "application/pdf"


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
