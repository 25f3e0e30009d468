"""Strict internal schema for raw Figma payloads.

Raw API dictionaries are loosely typed and fields come and go depending on
node kind and plan. Every raw entity is mapped into one of the frozen
records below at the boundary; missing optional fields take their documented
default here so that downstream code never has to guess.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class EntityCategory(str, Enum):
    """The three kinds of design entity tracked for drift."""

    COMPONENT = "component"
    STYLE = "style"
    VARIABLE = "variable"


# Node ``type`` tags that define a component.
COMPONENT_NODE_TYPES = frozenset({"COMPONENT", "COMPONENT_SET"})

# Style ``style_type`` tags published by the styles endpoint.
KNOWN_STYLE_TYPES = frozenset({"FILL", "TEXT", "EFFECT", "GRID"})


@dataclass(frozen=True)
class Paint:
    """One entry of a fill or stroke paint stack."""

    type: Optional[str]
    visible: bool = True
    opacity: float = 1.0
    color: Optional[Tuple[float, float, float]] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Paint":
        color = raw.get("color")
        rgb = None
        if color:
            rgb = (color.get("r"), color.get("g"), color.get("b"))
        return cls(
            type=raw.get("type"),
            visible=_default(raw.get("visible"), True),
            opacity=_default(raw.get("opacity"), 1.0),
            color=rgb,
        )


@dataclass(frozen=True)
class Padding:
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0


@dataclass(frozen=True)
class ComponentRecord:
    """Semantically relevant fields of a COMPONENT / COMPONENT_SET node."""

    id: str
    name: Optional[str]
    description: str = ""
    property_definitions: Dict[str, Any] = field(default_factory=dict)
    fills: Tuple[Paint, ...] = ()
    strokes: Tuple[Paint, ...] = ()
    corner_radius: Optional[float] = None
    layout_mode: Optional[str] = None
    padding: Padding = field(default_factory=Padding)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ComponentRecord":
        return cls(
            id=raw["id"],
            name=raw.get("name"),
            description=_default(raw.get("description"), ""),
            property_definitions=_default(raw.get("componentPropertyDefinitions"), {}),
            fills=tuple(Paint.from_raw(p) for p in raw.get("fills") or ()),
            strokes=tuple(Paint.from_raw(p) for p in raw.get("strokes") or ()),
            corner_radius=raw.get("cornerRadius"),
            layout_mode=raw.get("layoutMode"),
            padding=Padding(
                top=_default(raw.get("paddingTop"), 0),
                right=_default(raw.get("paddingRight"), 0),
                bottom=_default(raw.get("paddingBottom"), 0),
                left=_default(raw.get("paddingLeft"), 0),
            ),
        )


@dataclass(frozen=True)
class StyleRecord:
    id: str
    name: Optional[str]
    style_type: Optional[str]

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "StyleRecord":
        return cls(
            id=raw["node_id"],
            name=raw.get("name"),
            style_type=raw.get("style_type"),
        )


@dataclass(frozen=True)
class VariableRecord:
    id: str
    name: Optional[str]
    collection_id: Optional[str]
    scopes: List[str] = field(default_factory=list)
    values_by_mode: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "VariableRecord":
        # The REST API uses camelCase; older exports use snake_case.
        return cls(
            id=raw["id"],
            name=raw.get("name"),
            collection_id=_first(raw, "variableCollectionId", "collection_id"),
            scopes=list(_default(raw.get("scopes"), [])),
            values_by_mode=_default(_first(raw, "valuesByMode", "values_by_mode"), {}),
        )


def _default(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None
