"""Pydantic models for the tool-invocation boundary (MCP server, CLI)."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .grammar import KIND_ALIASES, CitationKind, FormatStyle, Language


def _coerce_kind(v):
    if v is None or isinstance(v, CitationKind):
        return v
    if isinstance(v, str) and v.lower() in KIND_ALIASES:
        return KIND_ALIASES[v.lower()]
    raise ValueError(f"citationType must be one of case, statute, doctrine: {v}")


class _ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    citation: str = Field(..., min_length=1, description="The citation string")


class ParseCitationInput(_ToolInput):
    citation_type: Optional[CitationKind] = Field(
        None,
        alias="citationType",
        description="Hint for citation type (case, statute, doctrine). Auto-detected if not provided",
    )

    @field_validator("citation_type", mode="before")
    @classmethod
    def validate_citation_type(cls, v):
        return _coerce_kind(v)


class ValidateCitationInput(ParseCitationInput):
    pass


class FormatCitationInput(_ToolInput):
    target_language: Language = Field(
        ..., alias="targetLanguage", description="Target language: de, fr, it, en"
    )
    style: FormatStyle = Field(FormatStyle.FULL, description="full | short | inline")

    @field_validator("target_language", "style", mode="before")
    @classmethod
    def lowercase(cls, v):
        return v.lower() if isinstance(v, str) else v


class ConvertCitationInput(_ToolInput):
    to_format: CitationKind = Field(..., alias="toFormat", description="Target citation type")
    from_format: Optional[CitationKind] = Field(
        None, alias="fromFormat", description="Source citation type (auto-detected if not provided)"
    )
    target_language: Optional[Language] = Field(
        None, alias="targetLanguage", description="Target language for the converted citation"
    )

    @field_validator("to_format", "from_format", mode="before")
    @classmethod
    def validate_format(cls, v):
        return _coerce_kind(v)

    @field_validator("target_language", mode="before")
    @classmethod
    def lowercase(cls, v):
        return v.lower() if isinstance(v, str) else v


class ExtractCitationsInput(BaseModel):
    text: str = Field(..., description="Running text to scan for citations")
    group: Literal["flat", "by_type"] = Field(
        "flat", description="Return one list, or statutes and case citations separately"
    )
