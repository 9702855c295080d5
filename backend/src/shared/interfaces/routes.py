from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.dependencies import get_connectivity
from shared.infrastructure.connectivity import Connectivity

router = APIRouter(prefix="/api/connectivity", tags=["connectivity"])


class ConnectivityState(BaseModel):
    online: bool


@router.get("", response_model=ConnectivityState)
async def get_state(connectivity: Connectivity = Depends(get_connectivity)):
    return ConnectivityState(online=connectivity.online)


@router.put("", response_model=ConnectivityState)
async def set_state(
    body: ConnectivityState, connectivity: Connectivity = Depends(get_connectivity)
):
    connectivity.set_online(body.online)
    return ConnectivityState(online=connectivity.online)
