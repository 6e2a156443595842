"""
File name helpers for storage keys and download names.

Dependencies: None
System role: Safe file naming
"""

import posixpath
import re

_UNSAFE_CHARS = re.compile(r"[^a-z0-9_.-]", re.IGNORECASE)


def safe_file_name(name: str) -> str:
    """Replace every character outside [A-Za-z0-9_.-] with '_'."""
    return _UNSAFE_CHARS.sub("_", name)


def blob_base_name(pointer: str) -> str:
    """Last path segment of a blob pointer."""
    return posixpath.basename(pointer.rstrip("/")) or pointer


def export_file_name(original_file_name: str | None, fallback: str) -> str:
    """
    Download name for an exported compiled document.

    "Invoice March.pdf" -> "compiled_doc_Invoice_March.pdf"
    """
    base = ""
    if original_file_name:
        base = original_file_name.rsplit(".", 1)[0] if "." in original_file_name else original_file_name
    return f"compiled_doc_{safe_file_name(base or fallback)}.pdf"
