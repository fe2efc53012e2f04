"""
Composite Key Index

A composite key is the namespace marker, the entity prefix and each attribute,
every segment terminated by the separator. Ordering attributes from most to
least general lets a partial key act as a range-scan prefix.
"""
from typing import Iterator, List, Sequence, Tuple

from claimledger.core.errors import EncodingError


NAMESPACE = "\x00"
SEPARATOR = "\x00"
# Highest code point; appended to a partial key to close its scan range
MAX_RUNE = "\U0010ffff"


def _validate_segment(segment: str) -> None:
    if not isinstance(segment, str):
        raise EncodingError(f"Key segment must be a string, got {type(segment).__name__}")
    if SEPARATOR in segment or MAX_RUNE in segment:
        raise EncodingError(f"Key segment {segment!r} contains a reserved character")


def build_key(prefix: str, attrs: Sequence[str] = ()) -> str:
    """
    Build a composite key from an entity prefix and ordered attributes.

    Raises:
        EncodingError: If the prefix is empty or a segment holds a reserved character
    """
    if not prefix:
        raise EncodingError("Key prefix must not be empty")
    _validate_segment(prefix)
    for attr in attrs:
        _validate_segment(attr)
    return NAMESPACE + prefix + SEPARATOR + "".join(attr + SEPARATOR for attr in attrs)


def parse_key(key: str) -> Tuple[str, List[str]]:
    """Split a composite key back into (prefix, attrs)."""
    if not key.startswith(NAMESPACE) or not key.endswith(SEPARATOR) or len(key) < 3:
        raise EncodingError(f"Malformed composite key {key!r}")
    segments = key[len(NAMESPACE):-len(SEPARATOR)].split(SEPARATOR)
    prefix, attrs = segments[0], segments[1:]
    if not prefix:
        raise EncodingError(f"Malformed composite key {key!r}")
    return prefix, attrs


def key_range(prefix: str, attr_prefix: Sequence[str] = ()) -> Tuple[str, str]:
    """Half-open [start, end) range covering every key under a partial key."""
    start = build_key(prefix, attr_prefix)
    return start, start + MAX_RUNE


def scan(stub, prefix: str, attr_prefix: Sequence[str] = ()) -> Iterator[Tuple[str, bytes]]:
    """
    Lazily yield (key, raw value) for every key under the partial key.

    Order follows the stub's key ordering. Each call starts a fresh iteration.
    """
    start, end = key_range(prefix, attr_prefix)
    for key, value in stub.get_state_by_range(start, end):
        yield key, value
