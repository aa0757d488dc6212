from __future__ import annotations

from typing import Any, Optional, Union
from pydantic import BaseModel, Field


class ConfigureRequest(BaseModel):
    column: Any = Field(default=None, examples=[1, "3"])
    separator: Any = Field(default=None, examples=["|", "\\t"])


class Settings(BaseModel):
    column: Union[int, str]
    column_index: int
    separator: str


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class ConfigureReport(BaseModel):
    encoding: Optional[EncodingReport] = None


class ConfigureResponse(BaseModel):
    settings: Settings
    report: ConfigureReport = Field(default_factory=ConfigureReport)


class HealthResponse(BaseModel):
    ok: bool = True
