"""
Bundling of parallel lines.

Relationships that join the same unordered pair of entities form a bundle
and are drawn as parallel lines. Each line gets a perpendicular offset made
of a fixed per-type offset plus a symmetric fan-out within its bundle.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from .constants import LINE_GAP
from .models import LineType, Relationship

# Perpendicular offset per line type, in multiples of LINE_GAP
TYPE_OFFSET_FACTORS = {
    LineType.MEMBERSHIP: 0,  # Center line
    LineType.STUDIO: 1,
    LineType.WRITING: -1,
    LineType.LABEL: 1.5,
    LineType.FEATURE: -1.5,
    LineType.COVER: 2,
}


@dataclass
class BundledLine:
    """A relationship with its position inside its bundle."""

    relationship: Relationship
    key: str
    index: int
    count: int
    offset: float


def bundle_key(a: str, b: str) -> str:
    """Undirected key for a pair of entity ids."""
    return "-".join(sorted((a, b)))


def bundle(relationships: Iterable[Relationship]) -> Dict[str, List[Relationship]]:
    """
    Group relationships by unordered endpoint pair.

    Each list keeps the relationships in insertion order.
    """
    bundles: Dict[str, List[Relationship]] = {}
    for rel in relationships:
        bundles.setdefault(bundle_key(rel.source, rel.target), []).append(rel)
    return bundles


def bundle_offset(index: int, total: int, gap: float = LINE_GAP) -> float:
    """
    Offset of line `index` in a bundle of `total` lines.

    Lines fan out symmetrically around the centerline.
    """
    if total == 1:
        return 0
    return (index - (total - 1) / 2) * gap


def type_offset(line_type: LineType, gap: float = LINE_GAP) -> float:
    """Fixed offset for a line type. Unlisted types sit on the centerline."""
    return TYPE_OFFSET_FACTORS.get(line_type, 0) * gap


def line_offsets(
    relationships: Iterable[Relationship], gap: float = LINE_GAP
) -> List[BundledLine]:
    """
    Compute the total offset of every relationship.

    Args:
        relationships: Relationships in insertion order
        gap: Spacing between parallel lines

    Returns:
        One BundledLine per relationship, in the input order
    """
    relationships = list(relationships)
    bundles = bundle(relationships)
    seen: Dict[str, int] = {}
    lines: List[BundledLine] = []

    for rel in relationships:
        key = bundle_key(rel.source, rel.target)
        index = seen.get(key, 0)
        seen[key] = index + 1
        count = len(bundles[key])
        lines.append(
            BundledLine(
                relationship=rel,
                key=key,
                index=index,
                count=count,
                offset=type_offset(rel.type, gap) + bundle_offset(index, count, gap),
            )
        )

    return lines
