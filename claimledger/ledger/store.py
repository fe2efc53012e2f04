"""
Entity Store

Typed get/put/list over composite keys. Each entity is one JSON record
under the key built from its class prefix and the given attributes.
"""
from typing import Iterator, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from claimledger.core.errors import DecodingError, NotFound
from claimledger.core.models import Entity
from claimledger.ledger.keys import build_key, parse_key, scan
from claimledger.ledger.stub import LedgerStub


E = TypeVar("E", bound=Entity)


def _decode(entity_type: Type[E], raw: bytes) -> E:
    try:
        return entity_type.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise DecodingError(f"Stored {entity_type.prefix} record is malformed: {exc}") from exc


class EntityStore:
    """Read/modify/write access to ledger entities for one invocation."""

    def __init__(self, stub: LedgerStub):
        self.stub = stub

    def find(self, entity_type: Type[E], attrs: Sequence[str]) -> Optional[E]:
        """Return the entity under the key, or None if nothing is stored there."""
        raw = self.stub.get_state(build_key(entity_type.prefix, attrs))
        if not raw:
            return None
        return _decode(entity_type, raw)

    def get(self, entity_type: Type[E], attrs: Sequence[str], message: Optional[str] = None) -> E:
        """
        Return the entity under the key.

        Raises:
            NotFound: With `message` if given, when nothing is stored there
        """
        entity = self.find(entity_type, attrs)
        if entity is None:
            raise NotFound(message or f"Could not find {entity_type.prefix} {'/'.join(attrs)}")
        return entity

    def put(self, entity: Entity, attrs: Sequence[str]) -> None:
        key = build_key(type(entity).prefix, attrs)
        self.stub.put_state(key, entity.model_dump_json().encode("utf-8"))

    def list(
        self, entity_type: Type[E], attr_prefix: Sequence[str] = ()
    ) -> Iterator[Tuple[str, E]]:
        """
        Lazily yield (identifier, entity) for every record under the partial key.

        The identifier is the key's trailing segment, or the prefix itself for a
        key without attributes.
        """
        for key, raw in scan(self.stub, entity_type.prefix, attr_prefix):
            prefix, attrs = parse_key(key)
            yield (attrs[-1] if attrs else prefix), _decode(entity_type, raw)

    def list_keyed(
        self, entity_type: Type[E], attr_prefix: Sequence[str] = ()
    ) -> Iterator[Tuple[Tuple[str, ...], E]]:
        """Like `list`, but yield every attribute of the key."""
        for key, raw in scan(self.stub, entity_type.prefix, attr_prefix):
            _, attrs = parse_key(key)
            yield tuple(attrs), _decode(entity_type, raw)
