"""
Seed endpoint.

Destructive: replaces all users and posts with the sample data set.
``create_app`` only mounts this router when ``Settings.enable_seed`` is
true, which is not the default in production.
"""

from fastapi import APIRouter, Depends

from ..deps import get_seed_service
from ...schemas.common import Envelope, SeedSummary, envelope
from ...services.seed_service import SeedService

router = APIRouter()


@router.post("/seed", response_model=Envelope[SeedSummary], response_model_exclude_unset=True)
def seed_database(service: SeedService = Depends(get_seed_service)) -> Envelope:
    summary = service.seed()
    return envelope(data=summary, message="Database seeded successfully")
