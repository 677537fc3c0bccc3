"""
Service layer for the Client entity
Project: FrameFlicker Studios (Studio Manager)

Business logic for the studio's client list:
- Validation happens in the schemas; the service owns existence checks
- Deleting a client detaches its bookings instead of removing them
- Dependency Injection ready: the repository is passed to every call
"""

import logging
import uuid

from frameflicker.core.exceptions import NotFoundError
from frameflicker.repositories.base import RecordKind, StudioRepository
from frameflicker.schemas.client import ClientCreate, ClientRead, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """
    CRUD operations on clients.

    Usage with Dependency Injection:
        @router.get("/clients")
        async def get_clients(
            repo: StudioRepository = Depends(get_repository),
            service: ClientService = Depends(get_client_service),
        ):
            return await service.get_all(repo)
    """

    async def get_all(self, repo: StudioRepository) -> list[ClientRead]:
        """Every client, newest first."""
        clients = await repo.find(RecordKind.CLIENTS)
        logger.info("Retrieved %s clients", len(clients))
        return clients

    async def get_by_id(self, repo: StudioRepository, client_id: uuid.UUID) -> ClientRead:
        """
        Retrieve a client by ID.

        Raises:
            NotFoundError: If the client does not exist
        """
        client = await repo.get(RecordKind.CLIENTS, client_id)
        if client is None:
            logger.warning("Client not found: %s", client_id)
            raise NotFoundError(f"Client with ID {client_id} not found")
        return client

    async def create(self, repo: StudioRepository, client_data: ClientCreate) -> ClientRead:
        client = await repo.insert(RecordKind.CLIENTS, client_data.model_dump())
        logger.info("Created client: %s - %s", client.id, client.name)
        return client

    async def update(
        self,
        repo: StudioRepository,
        client_id: uuid.UUID,
        client_data: ClientUpdate,
    ) -> ClientRead:
        """
        Update the fields sent in the payload.

        Raises:
            NotFoundError: If the client does not exist
        """
        update_data = client_data.model_dump(exclude_unset=True)

        client = await repo.update(RecordKind.CLIENTS, client_id, update_data)
        if client is None:
            logger.warning("Update on missing client: %s", client_id)
            raise NotFoundError(f"Client with ID {client_id} not found")

        logger.info("Updated client: %s - %s (%s)", client.id, client.name, ", ".join(update_data))
        return client

    async def delete(self, repo: StudioRepository, client_id: uuid.UUID) -> None:
        """
        Delete a client.

        Bookings of the client survive with client_id cleared, so their
        financial history is kept.

        Raises:
            NotFoundError: If the client does not exist
        """
        if not await repo.delete(RecordKind.CLIENTS, client_id):
            logger.warning("Delete on missing client: %s", client_id)
            raise NotFoundError(f"Client with ID {client_id} not found")
        logger.info("Deleted client: %s", client_id)
