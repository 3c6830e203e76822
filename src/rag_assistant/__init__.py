"""Document question answering over a vector index.

Sub-packages
------------
- :mod:`rag_assistant.ingestion` — extraction, chunking and the batched write path.
- :mod:`rag_assistant.retrieval` — vector-store interface, ranking and context assembly.
- :mod:`rag_assistant.generation` — prompt template, chat model and answer orchestration.
- :mod:`rag_assistant.serving` — HTTP and KServe boundaries.
"""

__version__ = "0.1.0"
