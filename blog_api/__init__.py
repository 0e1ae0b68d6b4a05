"""
Top-level package for the Blog API.

A small REST service exposing users and posts stored in MongoDB.  All
functionality lives in submodules under ``app``.
"""

__all__ = []
