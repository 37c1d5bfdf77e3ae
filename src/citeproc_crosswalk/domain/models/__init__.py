"""Domain models for the citeproc crosswalk."""

from .csl_document import MIME_TYPE, PLACEHOLDER_ID, CslDocument
from .diagnostics import Diagnostic, DiagnosticsCollector, DiagnosticsObserver, LoggingDiagnostics
from .field_mapping import FieldMapping
from .metadata_record import MetadataRecord

__all__ = [
    "CslDocument",
    "Diagnostic",
    "DiagnosticsCollector",
    "DiagnosticsObserver",
    "FieldMapping",
    "LoggingDiagnostics",
    "MetadataRecord",
    "MIME_TYPE",
    "PLACEHOLDER_ID",
]
