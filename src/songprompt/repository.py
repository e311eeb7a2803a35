from abc import ABC, abstractmethod


class Repository(ABC):
    """Persistence collaborator for prompts and lyrics."""

    @abstractmethod
    def save(self, entity) -> None:
        """Store *entity*.  Errors propagate to the caller."""


class InMemoryRepository(Repository):
    """Keeps saved entities in a list, keyed lookups by ``entity.id``."""

    def __init__(self):
        self.saved: list = []

    def save(self, entity) -> None:
        self.saved.append(entity)

    def get(self, entity_id: str):
        for entity in self.saved:
            if entity.id == entity_id:
                return entity
        return None
