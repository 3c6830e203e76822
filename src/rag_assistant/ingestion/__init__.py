"""
Ingestion — text extraction, chunking, and embedding into the vector store.

This module is responsible for the write path that converts uploaded
documents (PDF, Markdown, plain text, CSV) into embedded chunks stored in
a vector database, one batch at a time.
"""
