"""
Prompt for the document chat assistant.

Dependencies: langchain_core.prompts
System role: Prompt template for completion calls
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

SYSTEM_PROMPT = """You are a helpful assistant for an OCR document chat application.
Users upload a document (a PDF or an image) and ask questions about it.

## Instructions
1. Answer using the document text when it is provided
2. If the document text does not contain the answer, say so clearly
3. If the text looks like an OCR failure placeholder, tell the user the file could not be read
4. Be concise and quote exact values (totals, dates, names) as they appear"""

DOCUMENT_CONTEXT_TEMPLATE = """

## Document
File name: {file_name}
Extracted text:
{extracted_text}"""

COMPLETION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system}"),
    MessagesPlaceholder("history"),
    ("human", "{question}"),
])


def build_system_message(
    extracted_text: str | None,
    file_name: str | None,
    max_context_chars: int,
) -> str:
    """Compose the system message, appending document text when present."""
    if not extracted_text:
        return SYSTEM_PROMPT
    text = extracted_text
    if max_context_chars > 0 and len(text) > max_context_chars:
        text = text[:max_context_chars] + "\n[... truncated]"
    return SYSTEM_PROMPT + DOCUMENT_CONTEXT_TEMPLATE.format(
        file_name=file_name or "unknown",
        extracted_text=text,
    )
