from enum import Enum

from pydantic import BaseModel


class CitationStatus(str, Enum):
    """Outcome of a citation generation run, mirroring curation task results."""

    SUCCESS = "success"
    SKIP = "skip"
    FAIL = "fail"
    ERROR = "error"


class GenerateCitationRequest(BaseModel):
    """Request DTO for the generate citation use case."""

    target_field: str = "dc.identifier.citation"
    style: str = "apa6"
    locale: str = "en-GB"
    force: bool = False


class GenerateCitationResult(BaseModel):
    """Result DTO for the generate citation use case."""

    status: CitationStatus
    message: str
    target_field: str
    citation: str | None = None
    item_json: str | None = None
