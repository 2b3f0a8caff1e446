"""Schemas: Pydantic models for response data at the API boundary."""
