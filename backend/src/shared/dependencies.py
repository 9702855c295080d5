from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from accounts.application.services import load_account
from accounts.domain.entities import Account
from assistant.domain.entities import CompletionClient
from auth.application.services import require_verified, verify_token
from auth.domain.entities import Identity
from documents.application.sync_gateway import SyncGateway
from shared.infrastructure.connectivity import Connectivity

security = HTTPBearer()


def get_gateway(request: Request) -> SyncGateway:
    return request.app.state.gateway


def get_connectivity(gateway: SyncGateway = Depends(get_gateway)) -> Connectivity:
    return gateway.connectivity


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


def get_token_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Identity:
    return verify_token(credentials.credentials)


def get_current_identity(identity: Identity = Depends(get_token_identity)) -> Identity:
    return require_verified(identity)


async def get_current_account(
    identity: Identity = Depends(get_current_identity),
    gateway: SyncGateway = Depends(get_gateway),
) -> Account:
    return await load_account(gateway, identity)
