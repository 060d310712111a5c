from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from quotebook.models.client import Client
from quotebook.storage.repo import InMemoryRepository

logger = logging.getLogger(__name__)


class ClientService:
    def __init__(self, repo: Optional[InMemoryRepository[Client]] = None):
        self.repo: InMemoryRepository[Client] = repo or InMemoryRepository(entity_name="client")

    def list_clients(self) -> List[Client]:
        return self.repo.list_all()

    def load(self, rows: Sequence[Dict[str, Any]]) -> List[Client]:
        out: List[Client] = []
        for d in rows:
            try:
                c = Client(**d)
            except ValidationError as e:
                # On ignore les entrées invalides
                logger.warning("Client ignoré (invalide): %s", e)
                continue
            self.repo.upsert(c)
            out.append(c)
        return out

    def save(self, client: Client) -> Client:
        self.repo.upsert(client)
        return client

    def delete(self, client_id: str) -> bool:
        # les devis/factures gardent leur client_id (référence faible)
        return self.repo.delete(client_id)

    def get_by_id(self, client_id: Optional[str]) -> Optional[Client]:
        if not client_id:
            return None
        return self.repo.get_by_id(client_id)
