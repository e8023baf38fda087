# prepmate/services/parse_utils.py
"""
Helpers to extract resume text from uploaded file bytes.
- PDF  -> pdfminer.six
- DOCX -> python-docx
- TXT  -> decode bytes
"""

import io
import logging
from typing import Tuple

from docx import Document
from pdfminer.high_level import extract_text_to_fp

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
ALLOWED_EXTENSIONS = (".pdf", ".docx", ".txt")


class UnsupportedFile(ValueError):
    pass


def _is_pdf_bytes(b: bytes) -> bool:
    return b.startswith(b"%PDF")


def _is_docx_bytes(b: bytes) -> bool:
    # docx is a zip archive; check the PK header
    return b.startswith(b"PK")


def parse_text_bytes(b: bytes, encoding: str = "utf-8") -> str:
    return b.decode(encoding, errors="replace")


def parse_docx_bytes(b: bytes) -> str:
    doc = Document(io.BytesIO(b))
    paras = [p.text.strip() for p in doc.paragraphs if p.text and p.text.strip()]
    return "\n".join(paras)


def parse_pdf_bytes(b: bytes) -> str:
    output = io.StringIO()
    extract_text_to_fp(io.BytesIO(b), output, laparams=None)
    return output.getvalue()


def check_upload(filename: str, size: int) -> None:
    name = (filename or "").lower()
    if not name.endswith(ALLOWED_EXTENSIONS):
        raise UnsupportedFile("Only PDF, DOCX and TXT files are allowed")
    if size > MAX_UPLOAD_BYTES:
        raise UnsupportedFile("File exceeds the 5 MB limit")


def extract_text_auto(b: bytes) -> Tuple[str, str]:
    """
    Detect type and parse. Returns (text, type_str).
    type_str one of: "pdf", "docx", "txt", "pdf_fallback", "docx_fallback", "unknown"
    """
    if not b:
        return "", "unknown"

    if _is_pdf_bytes(b):
        try:
            return parse_pdf_bytes(b), "pdf"
        except Exception:
            logger.warning("pdf extraction failed, decoding as text", exc_info=True)
            return parse_text_bytes(b), "pdf_fallback"
    if _is_docx_bytes(b):
        try:
            return parse_docx_bytes(b), "docx"
        except Exception:
            logger.warning("docx extraction failed, decoding as text", exc_info=True)
            return parse_text_bytes(b), "docx_fallback"

    return parse_text_bytes(b), "txt"
