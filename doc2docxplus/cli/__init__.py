"""Command line interface for doc2docxplus."""
