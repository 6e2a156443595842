"""Core domain logic: text extraction, completion, PDF export, exceptions."""
