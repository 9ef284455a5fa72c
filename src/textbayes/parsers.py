"""Plain-text extraction from document files.

Used by the command line to classify files directly. Supports TXT/MD,
HTML, PDF (via ``pdfplumber``) and DOCX (via ``python-docx``). The PDF
and DOCX libraries are optional; install the ``documents`` extra.
"""

from __future__ import annotations

import html as html_module
import re
from abc import ABC, abstractmethod
from html.parser import HTMLParser as StdHTMLParser
from pathlib import Path


class DocumentParser(ABC):
    """Base class for file-to-text parsers."""

    supported_extensions: tuple[str, ...] = ()

    def can_handle(self, path: Path) -> bool:
        return path.suffix.lower() in self.supported_extensions

    @abstractmethod
    def extract(self, path: Path) -> str:
        """Return the text content of ``path``.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the extension is not supported by this parser.
        """
        ...

    def _validate_path(self, path: Path) -> None:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not self.can_handle(path):
            raise ValueError(
                f"Unsupported file extension '{path.suffix}' for {self.__class__.__name__}. "
                f"Supported: {self.supported_extensions}"
            )


class TextParser(DocumentParser):
    supported_extensions = (".txt", ".text", ".md")

    def extract(self, path: Path) -> str:
        self._validate_path(path)
        return path.read_text(encoding="utf-8", errors="replace")


class _TextExtractor(StdHTMLParser):
    _SKIPPED = ("script", "style", "head")
    _BLOCKS = ("p", "div", "br", "h1", "h2", "h3", "h4", "h5", "h6", "li", "tr")

    def __init__(self) -> None:
        super().__init__()
        self.parts: list[str] = []
        self._skip = False

    def handle_starttag(self, tag: str, attrs: list) -> None:
        if tag in self._SKIPPED:
            self._skip = True

    def handle_endtag(self, tag: str) -> None:
        if tag in self._SKIPPED:
            self._skip = False
        if tag in self._BLOCKS:
            self.parts.append("\n")

    def handle_data(self, data: str) -> None:
        if not self._skip:
            self.parts.append(data)


class HTMLParser(DocumentParser):
    """Strips tags from HTML, dropping script/style/head content."""

    supported_extensions = (".html", ".htm")

    def extract(self, path: Path) -> str:
        self._validate_path(path)
        return self.strip_html(path.read_text(encoding="utf-8", errors="replace"))

    @staticmethod
    def strip_html(markup: str) -> str:
        extractor = _TextExtractor()
        extractor.feed(markup)
        text = html_module.unescape("".join(extractor.parts))
        return re.sub(r"\n{3,}", "\n\n", text).strip()


class PDFParser(DocumentParser):
    supported_extensions = (".pdf",)

    def extract(self, path: Path) -> str:
        self._validate_path(path)

        try:
            import pdfplumber
        except ImportError as exc:
            raise ImportError(
                "pdfplumber is required for PDF parsing. Install it with: pip install pdfplumber"
            ) from exc

        with pdfplumber.open(str(path)) as pdf:
            pages = [(page.extract_text() or "").strip() for page in pdf.pages]
        return "\n\n".join(page for page in pages if page)


class DOCXParser(DocumentParser):
    supported_extensions = (".docx",)

    def extract(self, path: Path) -> str:
        self._validate_path(path)

        try:
            from docx import Document
        except ImportError as exc:
            raise ImportError(
                "python-docx is required for DOCX parsing. Install it with: pip install python-docx"
            ) from exc

        doc = Document(str(path))
        return "\n\n".join(p.text for p in doc.paragraphs if p.text.strip())


def get_parser(path: Path) -> DocumentParser:
    """Pick a parser by file extension.

    Raises:
        ValueError: If no parser supports the extension.
    """
    parsers: list[DocumentParser] = [PDFParser(), DOCXParser(), TextParser(), HTMLParser()]
    for parser in parsers:
        if parser.can_handle(path):
            return parser

    supported = sorted({ext for p in parsers for ext in p.supported_extensions})
    raise ValueError(
        f"No parser available for '{path.suffix}'. Supported formats: {', '.join(supported)}"
    )


def extract_text(path: str | Path) -> str:
    """Read ``path`` and return its text content."""
    path = Path(path)
    return get_parser(path).extract(path)
