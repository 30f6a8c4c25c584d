from typing import List

from fastapi import APIRouter, Depends

from healthhub.api.v1.controllers.metric_controller import MetricController
from healthhub.api.v1.dependencies import get_provider_registry
from healthhub.providers import ProviderRegistry
from healthhub.schemas.metric_schemas import ProviderInfoResponse

router = APIRouter(tags=["Providers"])


@router.get("/providers", response_model=List[ProviderInfoResponse])
async def list_providers(registry: ProviderRegistry = Depends(get_provider_registry)):
    """List registered provider adapters and the metrics each can supply."""
    return MetricController.list_providers(registry)
