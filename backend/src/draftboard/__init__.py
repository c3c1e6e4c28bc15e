"""Draft simulator backend: champion catalog, draft engine and HTTP API."""
