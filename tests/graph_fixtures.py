"""Graph builders and structural comparison helpers shared by tests."""

from argument_forge.core.debate_graph import ArgumentNode, DebateGraph
from argument_forge.core.graph_codec import graph_to_document


def chain(*arguments: str, is_rebuttal: bool = False) -> DebateGraph:
    """Graph A -> B -> C ... over the given arguments."""
    graph = DebateGraph()
    for argument in arguments:
        graph.add_node(ArgumentNode(argument, is_rebuttal=is_rebuttal))
    for cause, effect in zip(arguments, arguments[1:]):
        graph.connect(cause, effect, is_rebuttal=is_rebuttal)
    return graph


def structure(graph: DebateGraph) -> dict:
    """Order-insensitive structural fingerprint of a graph."""
    doc = graph_to_document(graph)

    def freeze(items):
        return sorted(
            tuple(sorted(
                (k, tuple(v) if isinstance(v, list) else v) for k, v in item.items()
            ))
            for item in items
        )

    return {
        key: freeze(doc.get(key, []))
        for key in (
            "nodes", "edges", "node_rebuttals", "edge_rebuttals",
            "counter_argument_rebuttals", "turn_argument_rebuttals",
        )
    }
