"""Database Layer: declarative Base shared by all ORM models."""
