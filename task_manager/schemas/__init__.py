"""API schemas (pydantic response models)."""
