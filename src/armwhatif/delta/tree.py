"""Index-addressed arena over a resource's property delta tree."""

import networkx as nx
from typing import Iterator, List, Optional, Union
from ..ingest.document import Document, DocumentView
from ..ingest.models import PropertyChange, PropertyChangeType
from ..utils.logging import get_logger

logger = get_logger("delta.tree")


class DeltaNode:
    """One property change plus its lazily materialized before/after values."""

    __slots__ = ("index", "depth", "change", "_before", "_after")

    def __init__(self, index: int, depth: int, change: PropertyChange):
        self.index = index
        self.depth = depth
        self.change = change
        self._before = Document(change.before)
        self._after = Document(change.after)

    @property
    def path(self) -> str:
        return self.change.path

    @property
    def property_change_type(self) -> Union[PropertyChangeType, str]:
        return self.change.property_change_type

    def before(self) -> DocumentView:
        return self._before.view()

    def after(self) -> DocumentView:
        return self._after.view()

    def __repr__(self) -> str:
        return f"DeltaNode(index={self.index}, depth={self.depth}, path={self.path!r})"


class DeltaTree:
    """
    Directed tree: nodes are integer indices, edges run parent -> child.

    Children keep the order they had in the source payload. Sibling paths
    are never merged.
    """

    def __init__(self):
        self.graph = nx.DiGraph()
        self.roots: List[int] = []

    @classmethod
    def from_changes(cls, changes: List[PropertyChange]) -> "DeltaTree":
        tree = cls()
        for change in changes:
            tree.roots.append(tree._add(change, parent=None, depth=0))
        logger.debug(f"Built delta tree with {tree.graph.number_of_nodes()} nodes")
        return tree

    def _add(self, change: PropertyChange, parent: Optional[int], depth: int) -> int:
        index = self.graph.number_of_nodes()
        self.graph.add_node(index, node=DeltaNode(index, depth, change))
        if parent is not None:
            self.graph.add_edge(parent, index)
        for child in change.children:
            self._add(child, parent=index, depth=depth + 1)
        return index

    def node(self, index: int) -> DeltaNode:
        return self.graph.nodes[index]["node"]

    def children(self, index: int) -> List[DeltaNode]:
        return [self.node(i) for i in self.graph.successors(index)]

    def parent(self, index: int) -> Optional[DeltaNode]:
        parents = list(self.graph.predecessors(index))
        return self.node(parents[0]) if parents else None

    def walk(self) -> Iterator[DeltaNode]:
        """Depth-first preorder over every root, in source order."""
        for root in self.roots:
            for index in nx.dfs_preorder_nodes(self.graph, source=root):
                yield self.node(index)

    def paths(self) -> List[str]:
        return [node.path for node in self.walk()]

    def depth(self) -> int:
        """Number of levels in the tree; 0 when empty."""
        if not self.roots:
            return 0
        return 1 + max(node.depth for node in self.walk())

    def __len__(self) -> int:
        return self.graph.number_of_nodes()
