# src/pa_app/modules/archive/service.py
from __future__ import annotations

from pathlib import Path

from pa_app.core.config import Settings, get_settings

from .dates import DateMarker
from .diagnostics import DiagnosticCollector, DiagnosticSink, log_diagnostic, tee
from .engine import ArchiveTraversalEngine
from .hooks import FileProcessor, RecordingFileProcessor, ReportingFileProcessor, TaggedFileProcessor
from .parsers import get_parser
from .schemas import DiagnosticItem, ScanRequest, ScanResponse


class ScanService:
    """Builds an engine from a request, runs it and summarises the outcome."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def build_processor(self, req: ScanRequest) -> FileProcessor:
        if req.tag:
            return TaggedFileProcessor(req.tag, extensions=self.settings.JPEG_EXTS)
        return ReportingFileProcessor()

    def run(self, req: ScanRequest, sink: DiagnosticSink | None = None) -> ScanResponse:
        preset = DateMarker.from_parts(req.year, req.month, req.day)
        recorder = RecordingFileProcessor(self.build_processor(req))
        collector = DiagnosticCollector()

        engine = ArchiveTraversalEngine(
            Path(req.root),
            preset=preset,
            exact_path=req.exact_path,
            parser=get_parser(req.grammar or self.settings.DATE_GRAMMAR),
            file_processor=recorder,
            sink=tee(collector, sink or log_diagnostic),
        )
        engine.process()

        return ScanResponse(
            root=str(engine.root_path),
            preset=str(preset) if preset else None,
            exact_path=req.exact_path,
            processed_count=len(recorder.visited),
            matched_count=len(recorder.matched),
            matched=[str(p) for p in recorder.matched],
            diagnostics=[
                DiagnosticItem(
                    kind=e.kind.value,
                    level=e.level_name,
                    message=e.message,
                    path=str(e.path) if e.path else None,
                )
                for e in collector
            ],
        )
