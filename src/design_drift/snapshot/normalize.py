"""Normalization of raw design entities into comparison-stable forms.

A normalized form keeps only the fields whose change a design-system
consumer would notice. Geometry, prototype interactions, export settings and
render caches are dropped, so a node that was merely moved on the canvas
produces the same form as before.

Paint stacks keep their order: the first paint is drawn underneath the rest.
"""

from typing import Any, Callable, Dict, List, Mapping

from ..logging_config import get_logger
from .schema import (
    KNOWN_STYLE_TYPES,
    ComponentRecord,
    EntityCategory,
    Paint,
    StyleRecord,
    VariableRecord,
)

logger = get_logger(__name__)

NormalizedForm = Dict[str, Any]


def normalize_paints(paints) -> List[Dict[str, Any]]:
    """Normalize a fill/stroke stack; accepts raw dicts or ``Paint`` records."""
    result = []
    for paint in paints or ():
        if not isinstance(paint, Paint):
            paint = Paint.from_raw(paint)
        result.append({
            "type": paint.type,
            "visible": paint.visible,
            "opacity": paint.opacity,
            "color": list(paint.color) if paint.color is not None else None,
        })
    return result


def normalize_component(raw: Mapping[str, Any]) -> NormalizedForm:
    record = ComponentRecord.from_raw(raw)
    return {
        "id": record.id,
        "name": record.name,
        "description": record.description,
        "component_property_definitions": record.property_definitions,
        "fills": normalize_paints(record.fills),
        "strokes": normalize_paints(record.strokes),
        "corner_radius": record.corner_radius,
        "layout_mode": record.layout_mode,
        "padding": {
            "top": record.padding.top,
            "right": record.padding.right,
            "bottom": record.padding.bottom,
            "left": record.padding.left,
        },
    }


def normalize_style(raw: Mapping[str, Any]) -> NormalizedForm:
    record = StyleRecord.from_raw(raw)
    if record.style_type not in KNOWN_STYLE_TYPES:
        logger.debug(f"Style {record.id} has unrecognised style_type {record.style_type!r}")
    return {
        "id": record.id,
        "name": record.name,
        "style_type": record.style_type,
    }


def normalize_variable(raw: Mapping[str, Any]) -> NormalizedForm:
    record = VariableRecord.from_raw(raw)
    return {
        "id": record.id,
        "name": record.name,
        "collection_id": record.collection_id,
        "scopes": record.scopes,
        "values_by_mode": record.values_by_mode,
    }


_NORMALIZERS: Dict[EntityCategory, Callable[[Mapping[str, Any]], NormalizedForm]] = {
    EntityCategory.COMPONENT: normalize_component,
    EntityCategory.STYLE: normalize_style,
    EntityCategory.VARIABLE: normalize_variable,
}


def normalize(raw: Mapping[str, Any], category: EntityCategory) -> NormalizedForm:
    """Reduce a raw entity of the given category to its normalized form.

    Raises:
        KeyError: if the entity has no identifier field.
    """
    return _NORMALIZERS[EntityCategory(category)](raw)
