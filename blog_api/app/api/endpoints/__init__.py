"""
Endpoint modules.  Each defines an ``APIRouter`` for one resource; they
are aggregated in ``api/router.py``.
"""
