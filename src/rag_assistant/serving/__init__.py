"""
Serving — FastAPI application and KServe runtime.

Both boundaries translate :class:`~rag_assistant.errors.RagError` kinds into
user-facing responses; the core never does.
"""
