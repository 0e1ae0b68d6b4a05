"""
HTTP layer.  ``router`` aggregates the endpoint modules under ``/api``.
"""
