import io

import pdfplumber

from models.responses import DocumentInfo


def extract_document(pdf_bytes: bytes, file_name: str = "") -> tuple[str, DocumentInfo]:
    """Extract text plus page, word and character counts from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    text = "\n".join(pages).strip()
    info = DocumentInfo(
        file_name=file_name,
        file_size=len(pdf_bytes),
        pages=len(pages),
        word_count=len(text.split()),
        character_count=len(text),
    )
    return text, info
