"""Domain services - pure business logic, no external dependencies."""

from .coordinate_mapping import map_box_to_overlay, map_lines_to_overlays
from .entity_extraction import (
    EntityRuleRegistry,
    build_registry,
    extract_entities,
    unique_in_order,
)

__all__ = [
    'map_box_to_overlay',
    'map_lines_to_overlays',
    'EntityRuleRegistry',
    'build_registry',
    'extract_entities',
    'unique_in_order',
]
