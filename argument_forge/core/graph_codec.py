"""Graph Codec — DebateGraph <-> JSON-safe document (the wire and storage format).

Invariants:
    - graph_to_document produces only dicts, lists, str and bool
    - Empty optional arrays are omitted on output; absent arrays read back as empty
    - Reconstruction order is fixed: nodes, edges, node rebuttals, edge rebuttals,
      counter-arguments, turn-arguments (each later section resolves by text
      against what the earlier sections materialized)
    - Any unresolved reference raises DanglingReferenceError and nothing is returned
    - Edges are emitted grouped by effect node in node order (deterministic output)

Design Decisions:
    - Plain dicts in the core, like the session snapshot: pydantic document models
      live in schemas/ and only guard the HTTP boundary
    - A rebuttal type outside the taxonomy is a hard error, not a dangling reference
"""

import json
from typing import Any

from argument_forge.core.debate_graph import ArgumentNode, CausalEdge, DebateGraph
from argument_forge.core.errors import (
    DanglingEndpointError,
    DanglingReferenceError,
    MalformedGraphDocumentError,
    UnresolvedRebuttalTargetError,
)
from argument_forge.core.rebuttal_records import (
    bind_counter_argument,
    bind_edge_rebuttal,
    bind_node_rebuttal,
    bind_turn_argument,
)

NODE_LIST_FIELDS = (
    "importance", "uniqueness", "importance_rebuttals", "uniqueness_rebuttals",
)
EDGE_LIST_FIELDS = (
    "certainty", "uniqueness", "certainty_rebuttal", "uniqueness_rebuttals",
)


# --- Encoding -----------------------------------------------------------------

def node_to_document(node: ArgumentNode) -> dict:
    doc: dict[str, Any] = {
        "argument": node.argument,
        "is_rebuttal": node.is_rebuttal,
    }
    for name in NODE_LIST_FIELDS:
        values = getattr(node, name)
        if values:
            doc[name] = list(values)
    return doc


def edge_to_document(edge: CausalEdge) -> dict:
    doc: dict[str, Any] = {
        "cause": edge.cause.argument,
        "effect": edge.effect.argument,
        "is_rebuttal": edge.is_rebuttal,
    }
    for name in EDGE_LIST_FIELDS:
        values = getattr(edge, name)
        if values:
            doc[name] = list(values)
    return doc


def graph_to_document(graph: DebateGraph) -> dict:
    doc: dict[str, Any] = {
        "nodes": [node_to_document(n) for n in graph.nodes],
        "edges": [edge_to_document(e) for e in graph.edges_in_node_order()],
    }
    if graph.node_rebuttals:
        doc["node_rebuttals"] = [
            {
                "target_argument": r.target.argument,
                "rebuttal_type": r.rebuttal_type.value,
                "rebuttal_argument": r.rebuttal.argument,
            }
            for r in graph.node_rebuttals
        ]
    if graph.edge_rebuttals:
        doc["edge_rebuttals"] = [
            {
                "target_cause_argument": r.target.cause.argument,
                "target_effect_argument": r.target.effect.argument,
                "rebuttal_type": r.rebuttal_type.value,
                "rebuttal_argument": r.rebuttal.argument,
            }
            for r in graph.edge_rebuttals
        ]
    if graph.counter_argument_rebuttals:
        doc["counter_argument_rebuttals"] = [
            {
                "rebuttal_argument": r.rebuttal.argument,
                "target_argument": r.target.argument,
            }
            for r in graph.counter_argument_rebuttals
        ]
    if graph.turn_argument_rebuttals:
        doc["turn_argument_rebuttals"] = [
            {"rebuttal_argument": r.rebuttal.argument}
            for r in graph.turn_argument_rebuttals
        ]
    return doc


def graph_to_json(graph: DebateGraph, indent: int | None = None) -> str:
    return json.dumps(graph_to_document(graph), ensure_ascii=False, indent=indent)


# --- Decoding -----------------------------------------------------------------

def _section(doc: dict, key: str) -> list[dict]:
    raw = doc.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise MalformedGraphDocumentError(f"'{key}' must be an array of objects")
    return raw


def _text(item: dict, key: str, section: str) -> str:
    value = item.get(key)
    if not isinstance(value, str):
        raise MalformedGraphDocumentError(f"{section} entry needs string '{key}'")
    return value


def _strings(item: dict, key: str, section: str) -> list[str]:
    values = item.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise MalformedGraphDocumentError(
            f"{section} field '{key}' must be an array of strings",
        )
    return list(values)


def _load_nodes(graph: DebateGraph, doc: dict) -> None:
    for item in _section(doc, "nodes"):
        node = ArgumentNode(
            _text(item, "argument", "nodes"),
            is_rebuttal=bool(item.get("is_rebuttal", False)),
        )
        for name in NODE_LIST_FIELDS:
            setattr(node, name, _strings(item, name, "nodes"))
        graph.add_node(node)


def _load_edges(graph: DebateGraph, doc: dict) -> None:
    for item in _section(doc, "edges"):
        cause = _text(item, "cause", "edges")
        effect = _text(item, "effect", "edges")
        try:
            edge = graph.connect(
                cause, effect, is_rebuttal=bool(item.get("is_rebuttal", False)),
            )
        except DanglingEndpointError as e:
            raise DanglingReferenceError("edges", e.missing) from e
        for name in EDGE_LIST_FIELDS:
            setattr(edge, name, _strings(item, name, "edges"))


def _load_rebuttals(graph: DebateGraph, doc: dict) -> None:
    section = "node_rebuttals"
    try:
        for item in _section(doc, section):
            bind_node_rebuttal(
                graph,
                _text(item, "target_argument", section),
                _text(item, "rebuttal_type", section),
                _text(item, "rebuttal_argument", section),
            )

        section = "edge_rebuttals"
        for item in _section(doc, section):
            bind_edge_rebuttal(
                graph,
                _text(item, "target_cause_argument", section),
                _text(item, "target_effect_argument", section),
                _text(item, "rebuttal_type", section),
                _text(item, "rebuttal_argument", section),
            )

        section = "counter_argument_rebuttals"
        for item in _section(doc, section):
            bind_counter_argument(
                graph,
                _text(item, "target_argument", section),
                _text(item, "rebuttal_argument", section),
            )

        section = "turn_argument_rebuttals"
        for item in _section(doc, section):
            bind_turn_argument(graph, _text(item, "rebuttal_argument", section))
    except UnresolvedRebuttalTargetError as e:
        raise DanglingReferenceError(section, e.target) from e


def graph_from_document(doc: dict) -> DebateGraph:
    """Rebuild a graph from its document. All-or-nothing."""
    if not isinstance(doc, dict):
        raise MalformedGraphDocumentError("document must be an object")
    graph = DebateGraph()
    _load_nodes(graph, doc)
    _load_edges(graph, doc)
    _load_rebuttals(graph, doc)
    return graph


def graph_from_json(text: str) -> DebateGraph:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedGraphDocumentError(f"invalid JSON ({e.msg})") from e
    return graph_from_document(doc)
