"""FastMCP server exposing uploaded health check reports."""

import json
import logging
import mimetypes
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from reportpack.config import Settings, get_settings
from reportpack.embedders import SentenceTransformerEmbedder
from reportpack.errors import ReportPackError
from reportpack.metrics import VisionMetricsExtractor
from reportpack.pipeline import analyze_report, parse_report
from reportpack.protocols import EmbeddingProvider
from reportpack.retrieval import ChunkIndex, excerpt
from reportpack.storage import ReportStore, StoredReport

logger = logging.getLogger(__name__)


def create_mcp_server(
    store: Optional[ReportStore] = None,
    embedder: Optional[EmbeddingProvider] = None,
    settings: Optional[Settings] = None,
    vision_extractor: Optional[VisionMetricsExtractor] = None,
) -> FastMCP:
    """Create an MCP server that owns one report store.

    Args:
        store: Report store to serve (a new bounded store by default)
        embedder: Embedding provider for recall (loaded lazily by default)
        settings: Upload limits and chunking parameters
        vision_extractor: Optional vision strategy for PDF metrics

    Returns:
        Configured FastMCP server instance
    """
    settings = settings or get_settings()
    store = store if store is not None else ReportStore(settings.STORE_CAPACITY)
    embedder = embedder or SentenceTransformerEmbedder(settings.EMBEDDING_MODEL)
    indexes: dict[str, ChunkIndex] = {}

    mcp = FastMCP(name="reportpack")

    def lookup(session_id: str) -> StoredReport | None:
        report = store.get(session_id)
        if report is None:
            indexes.pop(session_id, None)
        return report

    @mcp.tool()
    def upload_report(path: str) -> str:
        """Parse a health check report (PDF, DOC, DOCX or TXT) from disk.

        Args:
            path: Path to the report file

        Returns:
            JSON with the new session id, chunk count and metrics, or an error
        """
        file_path = Path(path)
        if not file_path.is_file():
            return f"Error: File not found: {path}"

        content = file_path.read_bytes()
        mime_type, _ = mimetypes.guess_type(file_path.name)
        try:
            parsed = parse_report(content, file_path.name, mime_type, settings)
        except ReportPackError as e:
            return f"Error: {e}"

        metrics = analyze_report(content, parsed, vision_extractor)
        store.store(
            StoredReport(
                session_id=parsed.id,
                filename=parsed.filename,
                raw_text=parsed.raw_text,
                chunks=parsed.chunks,
                metrics=metrics,
                uploaded_at=parsed.uploaded_at,
            )
        )
        for stale in set(indexes) - set(store.session_ids()):
            del indexes[stale]

        return json.dumps(
            {
                "sessionId": parsed.id,
                "filename": parsed.filename,
                "characters": len(parsed.raw_text),
                "chunks": len(parsed.chunks),
                "metrics": metrics.to_dict(),
            },
            indent=2,
        )

    @mcp.tool()
    def list_chunks(session_id: str, section: str = "") -> str:
        """List the chunks of an uploaded report.

        Args:
            session_id: Id returned by upload_report
            section: Optional section label prefix (e.g., "Actions Required")

        Returns:
            One line per chunk: index, section and a short preview
        """
        report = lookup(session_id)
        if report is None:
            return f"Error: Unknown session: {session_id}"

        chunks = report.chunks_in_section(section)
        if not chunks:
            return f"No chunks found in section '{section}'"

        lines = [f"{c.chunk_index:>4}  {c.section:<40} {excerpt(c.content, 80)}" for c in chunks]
        return "\n".join(lines)

    @mcp.tool()
    def read_chunk(session_id: str, index: int) -> str:
        """Read the full text of one chunk.

        Args:
            session_id: Id returned by upload_report
            index: Chunk index as shown by list_chunks
        """
        report = lookup(session_id)
        if report is None:
            return f"Error: Unknown session: {session_id}"
        if not 0 <= index < len(report.chunks):
            return f"Error: Chunk index out of range: {index}"

        chunk = report.chunks[index]
        return f"[{chunk.section}] chars {chunk.start_char}-{chunk.end_char}\n\n{chunk.content}"

    @mcp.tool()
    def report_metrics(session_id: str) -> str:
        """Return the metrics recovered from an uploaded report as JSON."""
        report = lookup(session_id)
        if report is None:
            return f"Error: Unknown session: {session_id}"
        return json.dumps(report.metrics.to_dict(), indent=2)

    @mcp.tool()
    def recall(session_id: str, query: str, limit: int = 5, section: str = "") -> str:
        """Semantic search within one uploaded report.

        Args:
            session_id: Id returned by upload_report
            query: Natural language description of what you're looking for
            limit: Maximum number of results to return (default: 5)
            section: Optional section label prefix to search within

        Returns:
            Ranked chunks with similarity scores
        """
        report = lookup(session_id)
        if report is None:
            return f"Error: Unknown session: {session_id}"

        index = indexes.get(session_id)
        if index is None or index.chunks is not report.chunks:
            index = indexes[session_id] = ChunkIndex.build(report.chunks, embedder)
        citations = index.search(query, limit=limit, section=section or None)

        if not citations:
            if section:
                return f"No results found for: {query} (section '{section}')"
            return f"No results found for: {query}"

        lines = []
        for i, citation in enumerate(citations, 1):
            lines.append(f"{i}. [{citation.relevance_score:.3f}] {citation.section}")
            lines.append(f"   {citation.excerpt}")
            lines.append("")
        return "\n".join(lines)

    return mcp
