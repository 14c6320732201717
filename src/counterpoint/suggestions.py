"""Suggested entities from connections that point off the map."""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from .constants import MAX_SUGGESTIONS
from .models import Entity, LineType


@dataclass
class Suggestion:
    """An entity referenced by stations on the map but not on it yet."""

    target_id: str
    name: str
    count: int = 0
    line_types: List[LineType] = field(default_factory=list)
    connected_from: List[str] = field(default_factory=list)


def suggest(
    entities: Mapping[str, Entity], limit: int = MAX_SUGGESTIONS
) -> List[Suggestion]:
    """
    Rank off-map entities by how often stations reference them.

    Args:
        entities: Entities on the map, keyed by id
        limit: Maximum number of suggestions

    Returns:
        Suggestions sorted by reference count, most referenced first
    """
    counts: Dict[str, Suggestion] = {}

    for entity in entities.values():
        for conn in entity.potential_connections:
            if conn.target_id in entities:
                continue
            suggestion = counts.get(conn.target_id)
            if suggestion is None:
                suggestion = Suggestion(target_id=conn.target_id, name=conn.target_name)
                counts[conn.target_id] = suggestion
            suggestion.count += 1
            if conn.type not in suggestion.line_types:
                suggestion.line_types.append(conn.type)
            if entity.name not in suggestion.connected_from:
                suggestion.connected_from.append(entity.name)

    ranked = sorted(counts.values(), key=lambda s: s.count, reverse=True)
    return ranked[:limit]
