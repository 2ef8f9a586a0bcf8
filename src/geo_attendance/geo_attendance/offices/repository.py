from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Office


class OfficeRepository(Protocol):
    def list_all(self) -> Sequence[Office]:
        raise NotImplementedError

    def get_by_id(self, office_id: int) -> Optional[Office]:
        raise NotImplementedError

    def create(self, office: Office) -> int:
        """Persist ``office`` ignoring its id. Returns the new office_id."""

        raise NotImplementedError

    def update(self, office: Office) -> bool:
        raise NotImplementedError

    def delete(self, office_id: int) -> bool:
        raise NotImplementedError
