"""Infrastructure: persistence (SQLAlchemy/Postgres) and security (JWT)."""
