"""Capture a design Snapshot from raw Figma payloads.

The builder never talks to the network: callers hand it the already-fetched
document tree, style list and variable list. ``load_variables`` is the one
place where a fetch failure is absorbed, because the variables endpoint is
not available on every plan.
"""

from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence

from ..exceptions import RemoteAPIError
from ..logging_config import get_logger
from .fingerprint import fingerprint
from .models import Snapshot, SnapshotMeta, utc_now_iso
from .normalize import normalize_component, normalize_style, normalize_variable
from .schema import COMPONENT_NODE_TYPES

logger = get_logger(__name__)

RawEntity = Mapping[str, Any]


def iter_component_nodes(node: Optional[RawEntity]) -> Iterator[RawEntity]:
    """Yield COMPONENT / COMPONENT_SET nodes in document order.

    Parents come before their children and siblings keep their order.
    Iterative so that very deep frames cannot hit the recursion limit.
    """
    if not node:
        return
    stack: List[RawEntity] = [node]
    while stack:
        current = stack.pop()
        if current.get("type") in COMPONENT_NODE_TYPES:
            yield current
        children = current.get("children") or []
        stack.extend(reversed(children))


def build_snapshot(
    document: Optional[RawEntity],
    styles: Sequence[RawEntity],
    variables: Optional[Sequence[RawEntity]],
) -> Snapshot:
    """Build a Snapshot from the raw file document, style list and variables.

    Parameters
    ----------
    document:
        The ``document`` node of the file payload (root of the node tree).
    styles:
        Entries of the styles endpoint (``node_id``, ``name``, ``style_type``).
    variables:
        Local variables, or ``None`` when the source is unavailable. An empty
        or missing list yields empty variable maps.

    Returns
    -------
    Snapshot
        Fingerprints and names for every entity. Version fields of ``meta``
        are left empty for the caller to fill via ``Snapshot.stamp_revision``.
    """
    components, component_names = _fingerprint_all(
        iter_component_nodes(document), "id", normalize_component,
    )
    style_map, style_names = _fingerprint_all(styles or (), "node_id", normalize_style)

    if not variables:
        if variables is not None:
            logger.warning("No local variables in this file. Skipping variables diff.")
        variable_map: Dict[str, str] = {}
        variable_names: Dict[str, str] = {}
    else:
        variable_map, variable_names = _fingerprint_all(variables, "id", normalize_variable)

    logger.info(
        f"Captured {len(components)} components, {len(style_map)} styles, "
        f"{len(variable_map)} variables"
    )

    return Snapshot(
        meta=SnapshotMeta(taken_at=utc_now_iso()),
        components=components,
        styles=style_map,
        variables=variable_map,
        component_names=component_names,
        style_names=style_names,
        variable_names=variable_names,
    )


def load_variables(
    fetch: Callable[[], Sequence[RawEntity]],
) -> Optional[List[RawEntity]]:
    """Call ``fetch``; return ``None`` when the variables API is forbidden.

    Any error other than HTTP 403 propagates unchanged.
    """
    try:
        return list(fetch() or [])
    except RemoteAPIError as e:
        if not e.is_forbidden:
            raise
        logger.warning(
            "Variables API returned 403 (plan or token scope restriction). "
            "Skipping variables diff."
        )
        return None


# ── Private helpers ──────────────────────────────────────────────────


def _fingerprint_all(entities, id_field: str, normalizer):
    hashes: Dict[str, str] = {}
    names: Dict[str, str] = {}
    for raw in entities:
        entity_id = raw[id_field]
        hashes[entity_id] = fingerprint(normalizer(raw))
        names[entity_id] = raw.get("name") or entity_id
    return hashes, names
