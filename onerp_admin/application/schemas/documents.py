"""Pydantic DTOs for generated documents (PDF rendering, e-mail delivery, downloads)."""

from pydantic import BaseModel, Field


class GeneratedPdf(BaseModel):
    path: str
    url: str
    filename: str


class SendEmailRequest(BaseModel):
    recipients: list[str] = Field(min_length=1)
    cc: list[str] | None = None
    message: str | None = None
    attach_pdf: bool | None = Field(None, alias="attachPdf")

    model_config = {"populate_by_name": True}


class SignedUrl(BaseModel):
    url: str
