"""External system boundaries (database, vector index)."""
