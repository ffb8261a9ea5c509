"""Open Library book search: catalog clients, detail normalization and search/detail orchestration."""
