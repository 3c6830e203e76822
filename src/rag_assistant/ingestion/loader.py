"""Text extraction from uploaded files — thin wrappers around LangChain loaders."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader, TextLoader

from rag_assistant.errors import Stage, UnsupportedFormatError, service_stage

logger = logging.getLogger(__name__)

PDF_EXTENSIONS = frozenset({".pdf"})
TEXT_EXTENSIONS = frozenset({".txt", ".md", ".csv"})
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS | TEXT_EXTENSIONS


def _check_supported(file_name: str) -> str:
    suffix = Path(file_name).suffix.lower()
    if suffix == ".docx":
        raise UnsupportedFormatError("DOCX support requires additional dependencies")
    if suffix not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(f"Unsupported file type: {file_name}")
    return suffix


def load_pdf(path: str | Path) -> str:
    """Extract the text of every page of a PDF, pages separated by newlines."""
    pages = PyPDFLoader(str(path)).load()
    return "\n".join(page.page_content for page in pages)


def load_text(path: str | Path) -> str:
    """Read a UTF-8 text-like file (plain text, Markdown, CSV)."""
    documents = TextLoader(str(path), encoding="utf-8").load()
    return "".join(doc.page_content for doc in documents)


def extract_text(file_name: str, data: bytes, upload_dir: str | Path) -> str:
    """Extract plain text from an uploaded file.

    The bytes are staged in a uniquely named temporary file under
    *upload_dir*, which is always removed before this function returns.

    Parameters
    ----------
    file_name:
        Original name of the upload; its suffix selects the extractor.
    data:
        Raw file content.
    upload_dir:
        Staging directory, created when missing.

    Raises
    ------
    UnsupportedFormatError
        The suffix has no extractor. Raised before anything is written.
    ServiceError
        Staging or extraction failed (stage ``extraction``).
    """
    suffix = _check_supported(file_name)

    with service_stage(Stage.EXTRACTION):
        staging = Path(upload_dir)
        staging.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(suffix=suffix, dir=staging)

    tmp_path = Path(tmp_name)
    try:
        with service_stage(Stage.EXTRACTION):
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            if suffix in PDF_EXTENSIONS:
                return load_pdf(tmp_path)
            return load_text(tmp_path)
    finally:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to delete temporary file: %s", tmp_path, exc_info=True)
