"""Pydantic models for the compile report (.json)."""

from pydantic import BaseModel, Field


class DocumentEntry(BaseModel):
    name: str
    kind: str
    source_file: str = ""
    output_file: str | None = None


class DiagnosticEntry(BaseModel):
    severity: str
    message: str
    document: str
    location: str = ""
    pass_name: str = Field(default="", alias="pass")

    model_config = {"populate_by_name": True}


class CompileReport(BaseModel):
    ok: bool
    documents: list[DocumentEntry] = []
    diagnostics: list[DiagnosticEntry] = []
