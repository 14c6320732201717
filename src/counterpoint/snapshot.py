"""
Snapshot serialization.

Converts graph snapshots to and from plain dicts and JSON so that callers
can persist them. The format is:

    {
        "entities": {id: entity_record, ...},
        "relationships": [relationship_record, ...]
    }

Relationship records use the keys "from", "to", "type" and "data". A
snapshot missing either top-level key, or holding a record whose fields have
the wrong type, is rejected as a whole; loads() falls back to an empty graph
in that case.
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple, Type, Union

from .errors import MalformedSnapshotError
from .models import (
    Entity,
    GraphSnapshot,
    LineType,
    PotentialConnection,
    Relationship,
    RelationshipMetadata,
)

logger = logging.getLogger(__name__)


def _field(
    data: Dict[str, Any],
    key: str,
    expected: Union[Type, Tuple[Type, ...]],
    default: Any = None,
    required: bool = False,
) -> Any:
    """
    Read a typed field from a record.

    Args:
        data: The record
        key: Field name
        expected: Accepted type(s) for a present, non-null value
        default: Value used when the field is absent or null
        required: Whether the field must be present and non-null

    Raises:
        MalformedSnapshotError: If the field is missing when required or has
            the wrong type. Booleans never count as integers.
    """
    value = data.get(key)
    if value is None:
        if required:
            raise MalformedSnapshotError(f"Missing field '{key}'")
        return default
    if isinstance(value, bool) or not isinstance(value, expected):
        raise MalformedSnapshotError(f"Field '{key}' has invalid value {value!r}")
    return value


def _record(value: Any, kind: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedSnapshotError(f"{kind} record must be an object")
    return value


def _cell(value: Any, key: str) -> Tuple[int, int]:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        raise MalformedSnapshotError(f"Field '{key}' must be a pair of integers")
    return (value[0], value[1])


def _line_type(data: Dict[str, Any]) -> LineType:
    value = _field(data, "type", str, required=True)
    try:
        return LineType(value)
    except ValueError as e:
        raise MalformedSnapshotError(f"Unknown line type {value!r}") from e


def _metadata_to_dict(metadata: RelationshipMetadata) -> Dict[str, Any]:
    return {
        "role": metadata.role,
        "years": metadata.years,
        "titles": list(metadata.titles) if metadata.titles else None,
    }


def _metadata_from_dict(data: Optional[Any]) -> RelationshipMetadata:
    if data is None:
        return RelationshipMetadata()
    data = _record(data, "Relationship data")
    titles = _field(data, "titles", list, default=[])
    if not all(isinstance(title, str) for title in titles):
        raise MalformedSnapshotError("Field 'titles' must be a list of strings")
    return RelationshipMetadata(
        role=_field(data, "role", str),
        years=_field(data, "years", str),
        titles=tuple(titles),
    )


def relationship_to_dict(rel: Relationship) -> Dict[str, Any]:
    """Serialize a relationship."""
    return {
        "from": rel.source,
        "to": rel.target,
        "type": rel.type.value,
        "data": _metadata_to_dict(rel.metadata),
    }


def relationship_from_dict(data: Any) -> Relationship:
    """
    Deserialize a relationship.

    Raises:
        MalformedSnapshotError: If a field is missing or has the wrong type.
    """
    data = _record(data, "Relationship")
    return Relationship(
        source=_field(data, "from", str, required=True),
        target=_field(data, "to", str, required=True),
        type=_line_type(data),
        metadata=_metadata_from_dict(data.get("data")),
    )


def entity_to_dict(entity: Entity) -> Dict[str, Any]:
    """Serialize an entity."""
    return {
        "id": entity.id,
        "name": entity.name,
        "category": entity.category,
        "year": entity.origin_year,
        "x": entity.x,
        "y": entity.y,
        "hub": list(entity.hub),
        "potentialConnections": [
            {
                "targetId": conn.target_id,
                "targetName": conn.target_name,
                "type": conn.type.value,
                "data": _metadata_to_dict(conn.metadata),
            }
            for conn in entity.potential_connections
        ],
        "extra": dict(entity.extra),
    }


def _connection_from_dict(data: Any) -> PotentialConnection:
    data = _record(data, "Potential connection")
    target_id = _field(data, "targetId", str, required=True)
    return PotentialConnection(
        target_id=target_id,
        target_name=_field(data, "targetName", str, default=target_id),
        type=_line_type(data),
        metadata=_metadata_from_dict(data.get("data")),
    )


def entity_from_dict(data: Any) -> Entity:
    """
    Deserialize an entity.

    Raises:
        MalformedSnapshotError: If a field is missing or has the wrong type.
    """
    data = _record(data, "Entity")
    hub = data.get("hub")
    return Entity(
        id=_field(data, "id", str, required=True),
        name=_field(data, "name", str, required=True),
        category=_field(data, "category", str, default="artist"),
        origin_year=_field(data, "year", int),
        x=_field(data, "x", int, default=0),
        y=_field(data, "y", int, default=0),
        hub=(0, 0) if hub is None else _cell(hub, "hub"),
        potential_connections=tuple(
            _connection_from_dict(conn)
            for conn in _field(data, "potentialConnections", list, default=[])
        ),
        extra=dict(_field(data, "extra", dict, default={})),
    )


def snapshot_to_dict(snapshot: GraphSnapshot) -> Dict[str, Any]:
    """Serialize a snapshot to plain dicts and lists."""
    return {
        "entities": {
            entity_id: entity_to_dict(entity)
            for entity_id, entity in snapshot.entities.items()
        },
        "relationships": [relationship_to_dict(rel) for rel in snapshot.relationships],
    }


def snapshot_from_dict(data: Any) -> GraphSnapshot:
    """
    Deserialize a snapshot.

    Raises:
        MalformedSnapshotError: If a top-level key is missing or any record
            is invalid. Nothing is partially loaded.
    """
    if not isinstance(data, dict):
        raise MalformedSnapshotError("Snapshot must be an object")
    if "entities" not in data or "relationships" not in data:
        raise MalformedSnapshotError(
            "Snapshot must contain 'entities' and 'relationships'"
        )
    if not isinstance(data["entities"], dict) or not isinstance(
        data["relationships"], list
    ):
        raise MalformedSnapshotError(
            "'entities' must be an object and 'relationships' a list"
        )

    try:
        entities = {
            entity_id: entity_from_dict(record)
            for entity_id, record in data["entities"].items()
        }
        relationships = [relationship_from_dict(rec) for rec in data["relationships"]]
    except (KeyError, TypeError, ValueError, AttributeError, IndexError) as e:
        raise MalformedSnapshotError(f"Invalid snapshot record: {e}") from e

    for entity_id, entity in entities.items():
        if entity.id != entity_id:
            raise MalformedSnapshotError(
                f"Entity key '{entity_id}' does not match id '{entity.id}'"
            )

    return GraphSnapshot(entities=entities, relationships=relationships)


def dumps(snapshot: GraphSnapshot) -> str:
    """Serialize a snapshot to a JSON string."""
    return json.dumps(snapshot_to_dict(snapshot))


def loads(text: str) -> GraphSnapshot:
    """
    Load a snapshot from JSON, falling back to an empty graph.

    Invalid JSON and malformed snapshots are logged and replaced by an
    empty snapshot.
    """
    try:
        return snapshot_from_dict(json.loads(text))
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse snapshot JSON: %s", e)
    except MalformedSnapshotError as e:
        logger.warning("Rejected malformed snapshot: %s", e)
    return GraphSnapshot()
