"""
Pydantic schema definitions for API payloads.

Each resource (users, posts) defines its own Pydantic models for
request and response bodies.  Schemas are separated from the store so
that validation can run without a database.
"""
