"""Rebuttal Records — the four rebuttal kinds and how each binds into a graph.

Invariants:
    - Records reference nodes/edges of the graph they are bound into (never copies)
    - Binders resolve every reference by argument text BEFORE appending anything
    - An unresolvable target raises UnresolvedRebuttalTargetError; the graph is unchanged
    - A rebuttal type outside the taxonomy raises UnrecognizedRebuttalKindError

Design Decisions:
    - Frozen dataclasses: a record is a fact about the graph, not mutable state
    - TurnArgumentRebuttal has no target: it concedes part of the opposing chain and
      redirects it, so it is only recorded as a satellite fact
    - Callers decide whether an unresolved target is fatal (codec) or skippable
      (expansion items, proposal commit)
"""

from dataclasses import dataclass

from argument_forge.core.debate_graph import ArgumentNode, CausalEdge, DebateGraph
from argument_forge.core.domain_types import EdgeRebuttalType, NodeRebuttalType
from argument_forge.core.errors import (
    UnrecognizedRebuttalKindError,
    UnresolvedRebuttalTargetError,
    edge_label,
)


@dataclass(frozen=True, eq=False)
class NodeRebuttal:
    """rebuttal attacks the importance or uniqueness of target."""
    target: ArgumentNode
    rebuttal_type: NodeRebuttalType
    rebuttal: ArgumentNode


@dataclass(frozen=True, eq=False)
class EdgeRebuttal:
    """rebuttal attacks the certainty or uniqueness of target."""
    target: CausalEdge
    rebuttal_type: EdgeRebuttalType
    rebuttal: ArgumentNode


@dataclass(frozen=True, eq=False)
class CounterArgumentRebuttal:
    """rebuttal asserts the negation of target."""
    target: ArgumentNode
    rebuttal: ArgumentNode


@dataclass(frozen=True, eq=False)
class TurnArgumentRebuttal:
    rebuttal: ArgumentNode


# --- Type coercion ------------------------------------------------------------

def parse_node_rebuttal_type(value: str | NodeRebuttalType) -> NodeRebuttalType:
    try:
        return NodeRebuttalType(value)
    except ValueError:
        raise UnrecognizedRebuttalKindError(str(value)) from None


def parse_edge_rebuttal_type(value: str | EdgeRebuttalType) -> EdgeRebuttalType:
    try:
        return EdgeRebuttalType(value)
    except ValueError:
        raise UnrecognizedRebuttalKindError(str(value)) from None


# --- Binders ------------------------------------------------------------------

def _require_node(graph: DebateGraph, argument: str) -> ArgumentNode:
    node = graph.get_node(argument)
    if node is None:
        raise UnresolvedRebuttalTargetError(argument)
    return node


def bind_node_rebuttal(
    graph: DebateGraph,
    target_argument: str,
    rebuttal_type: str | NodeRebuttalType,
    rebuttal_argument: str,
) -> NodeRebuttal:
    kind = parse_node_rebuttal_type(rebuttal_type)
    target = _require_node(graph, target_argument)
    rebuttal = _require_node(graph, rebuttal_argument)
    record = NodeRebuttal(target, kind, rebuttal)
    graph.node_rebuttals.append(record)
    return record


def bind_edge_rebuttal(
    graph: DebateGraph,
    target_cause: str,
    target_effect: str,
    rebuttal_type: str | EdgeRebuttalType,
    rebuttal_argument: str,
) -> EdgeRebuttal:
    kind = parse_edge_rebuttal_type(rebuttal_type)
    target = graph.get_edge(target_cause, target_effect)
    if target is None:
        raise UnresolvedRebuttalTargetError(edge_label(target_cause, target_effect))
    rebuttal = _require_node(graph, rebuttal_argument)
    record = EdgeRebuttal(target, kind, rebuttal)
    graph.edge_rebuttals.append(record)
    return record


def bind_counter_argument(
    graph: DebateGraph, target_argument: str, rebuttal_argument: str,
) -> CounterArgumentRebuttal:
    target = _require_node(graph, target_argument)
    rebuttal = _require_node(graph, rebuttal_argument)
    record = CounterArgumentRebuttal(target, rebuttal)
    graph.counter_argument_rebuttals.append(record)
    return record


def bind_turn_argument(
    graph: DebateGraph, rebuttal_argument: str,
) -> TurnArgumentRebuttal:
    record = TurnArgumentRebuttal(_require_node(graph, rebuttal_argument))
    graph.turn_argument_rebuttals.append(record)
    return record
