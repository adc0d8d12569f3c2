# src/breakeven_report/assembler.py
from __future__ import annotations

import io
import logging
from typing import Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from .errors import DocumentAssemblyError

LOGGER = logging.getLogger(__name__)


def merge_pdfs(documents: Sequence[bytes]) -> bytes:
    """Concatenate PDF documents; output page order follows input order."""
    if not documents:
        raise DocumentAssemblyError("no documents to merge")

    writer = PdfWriter()
    for idx, doc in enumerate(documents):
        try:
            reader = PdfReader(io.BytesIO(doc))
            pages = list(reader.pages)
        except (PdfReadError, ValueError) as exc:
            raise DocumentAssemblyError(f"document #{idx} is not a readable PDF: {exc}") from exc
        for page in pages:
            writer.add_page(page)

    out = io.BytesIO()
    writer.write(out)
    merged = out.getvalue()
    LOGGER.debug("Merged %d documents into %d bytes", len(documents), len(merged))
    return merged
