"""DOC to DOCX conversion tools."""
