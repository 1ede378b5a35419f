"""Graph Format — human-readable renderings of a DebateGraph.

Invariants:
    - PURE: returns strings, never prints or logs
    - Output follows node insertion order (stable across runs)
"""

from argument_forge.core.debate_graph import ArgumentNode, CausalEdge, DebateGraph


def _bullets(title: str, values: list[str], indent: str) -> list[str]:
    if not values:
        return []
    return [f"{indent}{title}:"] + [f"{indent}  - {v}" for v in values]


def _node_block(node: ArgumentNode) -> list[str]:
    tag = " [rebuttal]" if node.is_rebuttal else ""
    lines = [f"Node: {node.argument}{tag}"]
    lines += _bullets("Importance", node.importance, "  ")
    lines += _bullets("Uniqueness", node.uniqueness, "  ")
    lines += _bullets("Importance rebuttals", node.importance_rebuttals, "  ")
    lines += _bullets("Uniqueness rebuttals", node.uniqueness_rebuttals, "  ")
    if node.causes:
        lines.append("  Caused by:")
        lines += [f"    - {edge.cause.argument}" for edge in node.causes]
    return lines


def _edge_block(edge: CausalEdge) -> list[str]:
    tag = " [rebuttal]" if edge.is_rebuttal else ""
    lines = [f"Edge: {edge.cause.argument} -> {edge.effect.argument}{tag}"]
    lines += _bullets("Certainty", edge.certainty, "  ")
    lines += _bullets("Uniqueness", edge.uniqueness, "  ")
    lines += _bullets("Certainty rebuttals", edge.certainty_rebuttal, "  ")
    lines += _bullets("Uniqueness rebuttals", edge.uniqueness_rebuttals, "  ")
    return lines


def describe_graph(graph: DebateGraph) -> str:
    """Multi-line dump: every node with its lists and causes, then every edge."""
    if not graph.nodes:
        return "Graph is empty."
    lines: list[str] = []
    for node in graph.nodes:
        lines += _node_block(node)
    for edge in graph.edges_in_node_order():
        lines += _edge_block(edge)
    rebuttal_count = (
        len(graph.node_rebuttals) + len(graph.edge_rebuttals)
        + len(graph.counter_argument_rebuttals) + len(graph.turn_argument_rebuttals)
    )
    if rebuttal_count:
        lines.append(f"Rebuttal records: {rebuttal_count}")
    return "\n".join(lines)


def list_causal_relationships(graph: DebateGraph) -> list[str]:
    return [
        f'- "{edge.cause.argument}" leads to "{edge.effect.argument}"'
        for edge in graph.edges_in_node_order()
    ]
