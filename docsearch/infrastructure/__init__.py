"""Infrastructure: HTTP access to the document-search service."""
