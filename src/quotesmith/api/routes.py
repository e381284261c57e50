"""API routes for QuoteSmith."""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..analysis import DocumentInput, QuoteAnalysis, analyze_document
from ..config import settings
from ..export import (
    analysis_to_json,
    export_file_name,
    generate_risk_report,
    rows_to_csv,
)
from ..ops import DownloadStore, RemediationSession, SessionStore
from ..parsing import ColumnMapping, ParsedRow
from ..tools import build_registry

logger = logging.getLogger(__name__)

router = APIRouter()

# Process-wide download store; the app lifespan sweeps it periodically
_download_store: Optional[DownloadStore] = None

# Open remediation sessions; idle ones expire and are swept with the downloads
_session_store: Optional[SessionStore] = None


def get_download_store() -> DownloadStore:
    """Get the global download store."""
    global _download_store
    if _download_store is None:
        _download_store = DownloadStore(ttl_seconds=settings.download_ttl_seconds)
    return _download_store


def get_session_store() -> SessionStore:
    """Get the global session store."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(ttl_seconds=settings.session_ttl_seconds)
    return _session_store


def get_session(session_id: str) -> RemediationSession:
    session = get_session_store().get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


class SessionCreateRequest(BaseModel):
    """Open a remediation session over an analysis' rows."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: Optional[str] = None
    column_mapping: ColumnMapping = Field(default_factory=ColumnMapping)
    rows: list[ParsedRow] = Field(default_factory=list)


EXPORT_FORMATS = {
    "csv": ("parsed", "csv", "text/csv"),
    "json": ("analysis", "json", "application/json"),
    "report": ("risk_report", "txt", "text/plain"),
}


def _to_json(model: BaseModel) -> Any:
    """camelCase JSON-safe data; NaN and infinite floats become null."""
    return json.loads(model.model_dump_json(by_alias=True))


def _attachment(file_name: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{file_name}"'}


# Health check


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "quotesmith",
        "config": {
            "admin_mode": settings.admin_mode,
            "open_sessions": get_session_store().size(),
            "stored_downloads": get_download_store().size(),
        },
    }


@router.get("/config/limits")
async def get_config_limits():
    """Get usage limits."""
    return {
        "limits_enforced": settings.should_enforce_limits(),
        "max_rows": settings.max_rows,
        "max_file_size_mb": settings.max_file_size_mb,
        "download_ttl_seconds": settings.download_ttl_seconds,
    }


# Analysis endpoints


@router.post("/analyze")
async def analyze(document: Optional[DocumentInput] = Body(default=None)):
    """
    Analyze a decoded document.

    Always returns 200; failures come back as success=false with a single
    critical finding.
    """
    analysis = analyze_document(document)
    return _to_json(analysis)


@router.post("/export/{export_format}")
async def export_analysis(export_format: str, analysis: QuoteAnalysis):
    """Render an analysis as CSV, JSON or a text risk report."""
    if export_format not in EXPORT_FORMATS:
        raise HTTPException(status_code=400, detail=f"Unknown export format: {export_format}")
    if not analysis.success:
        raise HTTPException(status_code=400, detail="Cannot export a failed analysis")

    suffix, extension, media_type = EXPORT_FORMATS[export_format]
    if export_format == "csv":
        content = rows_to_csv(analysis.rows)
    elif export_format == "json":
        content = analysis_to_json(analysis)
    else:
        content = generate_risk_report(analysis)

    file_name = export_file_name(analysis.file_name, suffix, extension)
    return Response(content=content, media_type=media_type, headers=_attachment(file_name))


# Remediation session endpoints


@router.post("/sessions")
async def create_session(request: SessionCreateRequest):
    """Open a remediation session; returns its id and available tools."""
    session = RemediationSession(
        rows=request.rows,
        column_mapping=request.column_mapping,
        store=get_download_store(),
        file_name=request.file_name,
    )
    session_id = get_session_store().open(session)
    return {"session_id": session_id, "tools": build_registry(session).to_tool_schemas()}


@router.get("/sessions/{session_id}")
async def read_session(session_id: str):
    """Current rows and remediation log of a session."""
    session = get_session(session_id)
    return {
        "session_id": session_id,
        "rows": [_to_json(row) for row in session.rows],
        "remediations": [_to_json(r) for r in session.remediations],
    }


@router.delete("/sessions/{session_id}")
async def close_session(session_id: str):
    """Close a session."""
    if not get_session_store().close(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "ok", "message": "Session closed"}


@router.post("/sessions/{session_id}/tools/{tool_name}")
async def run_tool(session_id: str, tool_name: str, arguments: dict[str, Any] = Body(default={})):
    """Run one remediation tool against a session's rows."""
    registry = build_registry(get_session(session_id))
    if tool_name not in registry:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")

    try:
        return await registry.execute(tool_name, **arguments)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


# Downloads


@router.get("/download/{token}")
async def download(token: str):
    """Fetch a corrected-rows snapshot as CSV."""
    artifact = await get_download_store().get_async(token)
    if artifact is None:
        raise HTTPException(status_code=404, detail="Download link expired or invalid")

    return PlainTextResponse(
        content=rows_to_csv(artifact.rows),
        media_type="text/csv",
        headers=_attachment(artifact.file_name),
    )
