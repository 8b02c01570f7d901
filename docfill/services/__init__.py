"""Services composing the strategies into caller-facing workflows."""

from docfill.services.log_sinks import DebugLog, FanoutSink, StructlogSink
from docfill.services.mapping_service import MappingService, preview_record
from docfill.services.models import ExtractionDiagnostics, ParsedTemplate, RetrievalFailure
from docfill.services.pipeline import TemplateParsingService, build_diagnostics

__all__ = [
    "DebugLog",
    "ExtractionDiagnostics",
    "FanoutSink",
    "MappingService",
    "ParsedTemplate",
    "RetrievalFailure",
    "StructlogSink",
    "TemplateParsingService",
    "build_diagnostics",
    "preview_record",
]
