"""Pydantic schemas: the API contract, separate from storage models."""
