"""Persistence: engine/session setup, ORM models, repositories, RLS check."""
