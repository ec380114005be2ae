"""SQLAlchemy repository adapters."""
