"""Domain failures raised by services and mapped to HTTP by the routers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from pymongo.errors import PyMongoError


class DomainError(RuntimeError):
    """Base class; `code` is the machine category sent to clients."""

    code = 'domain_error'

    def to_detail(self) -> dict[str, Any]:
        return {'error': self.code, 'message': str(self)}


class ValidationFailed(DomainError):
    """Malformed input; raised before any write happens."""

    code = 'validation_error'


class NotFound(DomainError):
    """A referenced user, film, rating or genre does not exist."""

    code = 'not_found'

    def __init__(self, kind: str, entity_id: int) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f'{kind} with id={entity_id} not found')

    def to_detail(self) -> dict[str, Any]:
        detail = super().to_detail()
        detail.update(kind=self.kind, id=self.entity_id)
        return detail


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Turn driver failures into opaque `mongo_<operation>_error` ones."""
    try:
        yield
    except PyMongoError as error:
        raise RuntimeError(f'mongo_{operation}_error: {error}') from error
