"""Typed, namespaced collection of one entity type in the key-value backend."""
from __future__ import annotations

import logging
from typing import Generic, Iterable, List, Type, TypeVar

from pydantic import BaseModel

from voting_api.core.errors import AlreadyExistsError, NotFoundError, PartialFailureError
from voting_api.repositories.kv_store import KeyValueStore

EntityT = TypeVar("EntityT", bound=BaseModel)

logger = logging.getLogger(__name__)


def _id_sort_key(key: str):
    suffix = key.split(":", 1)[-1]
    return (0, int(suffix), "") if suffix.isdigit() else (1, 0, suffix)


class EntityStore(Generic[EntityT]):
    """CRUD over the keys ``<namespace>:<id>`` holding one ``model`` each.

    ``links`` is attached to every record written by ``create``/``update``
    (it must name a model field called ``links``); leave it empty for entities
    without hypermedia.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        namespace: str,
        model: Type[EntityT],
        id_field: str,
        links: Iterable[str] = (),
    ) -> None:
        self.backend = backend
        self.namespace = namespace
        self.model = model
        self.id_field = id_field
        self.links = list(links)
        self._label = model.__name__.lower()

    @property
    def prefix(self) -> str:
        return f"{self.namespace}:"

    def key_for(self, entity_id: int) -> str:
        return f"{self.prefix}{entity_id}"

    def _id_of(self, entity: EntityT) -> int:
        return getattr(entity, self.id_field)

    def _with_links(self, entity: EntityT) -> EntityT:
        if not self.links:
            return entity
        return entity.model_copy(update={"links": list(self.links)})

    def _load(self, document: dict) -> EntityT:
        return self.model.model_validate(document)

    def exists(self, entity_id: int) -> bool:
        return self.backend.exists(self.key_for(entity_id))

    def create(self, entity: EntityT) -> EntityT:
        stored = self._with_links(entity)
        entity_id = self._id_of(stored)
        if not self.backend.set_if_absent(self.key_for(entity_id), stored.to_document()):
            raise AlreadyExistsError(f"{self._label} {entity_id} already exists")
        return stored

    def get(self, entity_id: int) -> EntityT:
        document = self.backend.get(self.key_for(entity_id))
        if document is None:
            raise NotFoundError(f"{self._label} {entity_id} does not exist")
        return self._load(document)

    def update(self, entity: EntityT) -> EntityT:
        stored = self._with_links(entity)
        entity_id = self._id_of(stored)
        if not self.backend.set_if_present(self.key_for(entity_id), stored.to_document()):
            raise NotFoundError(f"{self._label} {entity_id} does not exist")
        return stored

    def delete(self, entity_id: int) -> None:
        if self.backend.delete(self.key_for(entity_id)) == 0:
            raise NotFoundError(f"{self._label} {entity_id} does not exist")

    def delete_all(self) -> int:
        keys = self.backend.keys(self.prefix)
        removed = self.backend.delete(*keys)
        if removed != len(keys):
            raise PartialFailureError(
                f"removed {removed} of {len(keys)} {self.namespace}; one or more could not be deleted"
            )
        logger.info("Cleared %d keys from %s", removed, self.namespace)
        return removed

    def list_all(self) -> List[EntityT]:
        entities: List[EntityT] = []
        for key in sorted(self.backend.keys(self.prefix), key=_id_sort_key):
            document = self.backend.get(key)
            # deleted between the scan and the read
            if document is None:
                continue
            entities.append(self._load(document))
        return entities
