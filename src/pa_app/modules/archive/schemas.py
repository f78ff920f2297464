# src/pa_app/modules/archive/schemas.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, DirectoryPath, Field, model_validator


class ScanRequest(BaseModel):
    root: DirectoryPath = Field(
        ...,
        description=(
            "Archive root containing year directories, or with `exact_path` the "
            "year/month/day directory itself."
        ),
        example="/data/photos",
    )
    year: Optional[int] = Field(None, ge=1000, le=9999, example=2021)  # noqa: UP045
    month: Optional[int] = Field(None, ge=1, le=12, example=3)  # noqa: UP045
    day: Optional[int] = Field(None, ge=1, le=31, example=15)  # noqa: UP045
    exact_path: bool = Field(
        False,
        description="Treat `root` as the directory of the deepest preset level.",
        example=False,
    )
    grammar: Optional[str] = Field(  # noqa: UP045
        None,
        description="Directory naming grammar (`numeric`, `iso`). Defaults to settings.",
        example="numeric",
    )
    tag: Optional[str] = Field(  # noqa: UP045
        None,
        description="Only count JPEGs whose IPTC Keywords contain this word.",
        example="family",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"root": "/data/photos", "year": 2021, "month": 3, "exact_path": False}
            ]
        }
    )

    @model_validator(mode="after")
    def _exact_needs_preset(self) -> ScanRequest:
        if self.exact_path and not (self.year or self.month or self.day):
            raise ValueError("exact_path requires at least one of year/month/day")
        return self


class DiagnosticItem(BaseModel):
    kind: str = Field(..., example="year_started")
    level: str = Field(..., example="INFO")
    message: str = Field(..., example="Processing the year: 2021")
    path: Optional[str] = Field(None, example="/data/photos/2021")  # noqa: UP045


class ScanResponse(BaseModel):
    root: str = Field(..., example="/data/photos")
    preset: Optional[str] = Field(  # noqa: UP045
        None, description="Preset as YYYY-MM-DD, unset parts shown as dashes.", example="2021-03---"
    )
    exact_path: bool = Field(..., example=False)
    processed_count: int = Field(..., ge=0, description="Leaf files handed to the processor.", example=12)
    matched_count: int = Field(..., ge=0, description="Files the processor matched.", example=4)
    matched: list[str] = Field(
        default_factory=list,
        example=["/data/photos/2021/03/15/IMG_0001.jpg"],
    )
    diagnostics: list[DiagnosticItem] = Field(
        default_factory=list,
        description="Traversal events in emission order.",
    )
