"""Pydantic request/response schemas and real-time protocol enums."""
