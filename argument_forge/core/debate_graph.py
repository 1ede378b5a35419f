"""Debate Graph — argument nodes, causal edges and rebuttal satellite lists.

Invariants:
    - Argument text IS the node identity: at most one node per text per graph
    - nodes preserves insertion order (deterministic display and serialization)
    - An edge is keyed by (cause argument, effect argument); both endpoints must be
      the graph's own node instances at insertion
    - Adding an existing edge is a no-op that returns the stored edge
    - effect.causes holds every incoming edge exactly once
    - Structural violations raise; the graph never repairs itself

Design Decisions:
    - Pure core module: no IO, no async, no oracle access
    - Identity check on BOTH endpoints (not only the effect): a cause node copied
      from another graph would otherwise be wired into this one unnoticed
    - Nodes are never removed; only edges are (enhancement splits an edge in two)
    - Satellite rebuttal lists are owned here but populated through
      core/rebuttal_records.py binders, which resolve their targets by text
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from argument_forge.core.domain_types import Argument
from argument_forge.core.errors import (
    DanglingEndpointError,
    DuplicateNodeError,
    EdgeNotFoundError,
    EndpointIdentityMismatchError,
)

if TYPE_CHECKING:
    from argument_forge.core.rebuttal_records import (
        CounterArgumentRebuttal,
        EdgeRebuttal,
        NodeRebuttal,
        TurnArgumentRebuttal,
    )


EdgeKey = tuple[Argument, Argument]


@dataclass(eq=False)
class ArgumentNode:
    """A claim in the debate. Compared by identity, keyed by argument text."""
    argument: Argument
    is_rebuttal: bool = False
    importance: list[str] = field(default_factory=list)
    uniqueness: list[str] = field(default_factory=list)
    importance_rebuttals: list[str] = field(default_factory=list)
    uniqueness_rebuttals: list[str] = field(default_factory=list)
    causes: list["CausalEdge"] = field(default_factory=list, repr=False)


@dataclass(eq=False)
class CausalEdge:
    """Directed link: cause contributes to effect."""
    cause: ArgumentNode
    effect: ArgumentNode
    is_rebuttal: bool = False
    certainty: list[str] = field(default_factory=list)
    uniqueness: list[str] = field(default_factory=list)
    certainty_rebuttal: list[str] = field(default_factory=list)
    uniqueness_rebuttals: list[str] = field(default_factory=list)

    @property
    def key(self) -> EdgeKey:
        return (self.cause.argument, self.effect.argument)


class DebateGraph:
    """Mutable argument graph owned by a single operation at a time."""

    def __init__(self):
        self.nodes: list[ArgumentNode] = []
        self.node_rebuttals: list["NodeRebuttal"] = []
        self.edge_rebuttals: list["EdgeRebuttal"] = []
        self.counter_argument_rebuttals: list["CounterArgumentRebuttal"] = []
        self.turn_argument_rebuttals: list["TurnArgumentRebuttal"] = []
        self._node_index: dict[str, ArgumentNode] = {}
        self._edge_index: dict[EdgeKey, CausalEdge] = {}

    def __contains__(self, argument: object) -> bool:
        return argument in self._node_index

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edge_index)

    # --- Nodes ------------------------------------------------------------

    def add_node(self, node: ArgumentNode) -> ArgumentNode:
        if node.argument in self._node_index:
            raise DuplicateNodeError(node.argument)
        self.nodes.append(node)
        self._node_index[node.argument] = node
        return node

    def get_node(self, argument: str) -> ArgumentNode | None:
        return self._node_index.get(argument)

    def ensure_node(
        self, argument: str, is_rebuttal: bool = False,
    ) -> tuple[ArgumentNode, bool]:
        """Get-or-create by text. Returns (node, created).

        An existing node keeps its own is_rebuttal flag.
        """
        existing = self._node_index.get(argument)
        if existing is not None:
            return existing, False
        return self.add_node(ArgumentNode(argument, is_rebuttal=is_rebuttal)), True

    # --- Edges ------------------------------------------------------------

    def add_edge(self, edge: CausalEdge) -> CausalEdge:
        cause_arg, effect_arg = edge.key
        for endpoint in (edge.cause, edge.effect):
            stored = self._node_index.get(endpoint.argument)
            if stored is None:
                raise DanglingEndpointError(cause_arg, effect_arg, endpoint.argument)
            if stored is not endpoint:
                raise EndpointIdentityMismatchError(
                    cause_arg, effect_arg, endpoint.argument,
                )

        existing = self._edge_index.get(edge.key)
        if existing is not None:
            return existing

        self._edge_index[edge.key] = edge
        edge.effect.causes.append(edge)
        return edge

    def connect(
        self, cause: str, effect: str, is_rebuttal: bool = False,
    ) -> CausalEdge:
        """Resolve both endpoints by text and add the edge between them."""
        for argument in (cause, effect):
            if argument not in self._node_index:
                raise DanglingEndpointError(cause, effect, argument)
        return self.add_edge(CausalEdge(
            self._node_index[cause], self._node_index[effect],
            is_rebuttal=is_rebuttal,
        ))

    def get_edge(self, cause: str, effect: str) -> CausalEdge | None:
        return self._edge_index.get((cause, effect))

    def remove_edge(self, cause: str, effect: str) -> CausalEdge:
        edge = self._edge_index.pop((cause, effect), None)
        if edge is None:
            raise EdgeNotFoundError(cause, effect)
        edge.effect.causes = [e for e in edge.effect.causes if e is not edge]
        return edge

    def edges(self) -> list[CausalEdge]:
        """All edges. Order is not part of the contract; walk nodes for that."""
        return list(self._edge_index.values())

    def edges_in_node_order(self) -> list[CausalEdge]:
        """Edges grouped by effect node, following node insertion order."""
        return [edge for node in self.nodes for edge in node.causes]
