"""10x Task Manager: task CRUD service (FastAPI + SQLAlchemy + Postgres RLS)."""
