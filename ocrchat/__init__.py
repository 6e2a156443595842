"""OCR document chat service."""
