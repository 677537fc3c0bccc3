"""
FastAPI router for the Client entity
Project: FrameFlicker Studios (Studio Manager)

API endpoints for managing the studio's clients.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Response, status

from frameflicker.core.deps import Repository
from frameflicker.schemas.client import ClientCreate, ClientRead, ClientUpdate
from frameflicker.services.client_service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/clients",
    tags=["Clients"],
)


# -------------------------------------------------------------------
# Dependency Injection
# -------------------------------------------------------------------

def get_client_service() -> ClientService:
    """
    Dependency returning a ClientService instance.

    Lets the routers receive the service without module-level globals,
    which keeps tests and maintenance simple.
    """
    return ClientService()


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

@router.get(
    "/",
    name="clients_list",
    summary="List clients",
    description="Every client, newest first.",
    response_model=list[ClientRead],
    status_code=status.HTTP_200_OK,
)
async def get_clients(
    repo: Repository,
    service: ClientService = Depends(get_client_service),
) -> list[ClientRead]:
    return await service.get_all(repo)


@router.get(
    "/{client_id}",
    name="client_detail",
    summary="Client detail",
    description="Retrieve a single client.",
    response_model=ClientRead,
    status_code=status.HTTP_200_OK,
)
async def get_client(
    client_id: uuid.UUID,
    repo: Repository,
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    """
    Retrieve a client.

    Raises:
        NotFoundError: If the client does not exist
    """
    return await service.get_by_id(repo, client_id)


@router.post(
    "/",
    name="client_create",
    summary="Create client",
    description="Register a new client.",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_client(
    client_data: ClientCreate,
    repo: Repository,
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    return await service.create(repo, client_data)


@router.put(
    "/{client_id}",
    name="client_update",
    summary="Update client",
    description="Update the fields sent in the payload.",
    response_model=ClientRead,
    status_code=status.HTTP_200_OK,
)
async def update_client(
    client_id: uuid.UUID,
    client_data: ClientUpdate,
    repo: Repository,
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    """
    Update an existing client.

    Raises:
        NotFoundError: If the client does not exist
    """
    return await service.update(repo, client_id, client_data)


@router.delete(
    "/{client_id}",
    name="client_delete",
    summary="Delete client",
    description="Delete a client. Its bookings are kept, detached from the client.",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_client(
    client_id: uuid.UUID,
    repo: Repository,
    service: ClientService = Depends(get_client_service),
) -> Response:
    await service.delete(repo, client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
