"""Render delta trees as indented text, in the style of az what-if output."""

import json
from typing import Any, List
from .tree import DeltaNode, DeltaTree
from ..ingest.document import DocumentView
from ..ingest.models import PropertyChangeType

SYMBOLS = {
    PropertyChangeType.CREATE: "+",
    PropertyChangeType.DELETE: "-",
    PropertyChangeType.MODIFY: "~",
    PropertyChangeType.ARRAY: "~",
    PropertyChangeType.NO_EFFECT: "x",
}


def _format_value(view: DocumentView) -> str:
    if not view.exists():
        return ""
    value: Any = view.value
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True)
    return json.dumps(value)


def format_node(node: DeltaNode, indent: str = "  ") -> str:
    symbol = SYMBOLS.get(node.property_change_type, "?")
    line = f"{indent * node.depth}{symbol} {node.path}"

    before = _format_value(node.before())
    after = _format_value(node.after())
    if before and after:
        line += f": {before} => {after}"
    elif after:
        line += f": {after}"
    elif before:
        line += f": {before}"
    return line


def format_delta_tree(tree: DeltaTree, indent: str = "  ") -> List[str]:
    """One line per node, depth-first, children indented under their parent."""
    return [format_node(node, indent) for node in tree.walk()]
