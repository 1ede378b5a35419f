"""Logic Enhancement — three oracle-directed edits that strengthen one causal edge.

Invariants:
    - The working subgraph starts as exactly {cause, effect} and the edge between them
    - The context graph is serialized once and never mutated
    - Exactly ENHANCEMENT_ITERATIONS actions are applied and returned, in order
    - insert_node adds a new intermediate node (an existing argument raises
      DuplicateNodeError before any change), removes the split edge, then adds
      cause->intermediate and intermediate->effect; the named cause/effect must be
      in the working subgraph
    - strengthen_edge appends to the edge's certainty or uniqueness list; an unknown
      enhancement_type raises UnrecognizedEnhancementTypeError
    - Any failure aborts the call: no partial action list is returned

Design Decisions:
    - Actions are recorded verbatim (the oracle's model), not as a diff
    - Seed nodes copy only the argument text: the context's annotations are visible to
      the oracle through the context document, the subgraph stays minimal
"""

import logging
from dataclasses import dataclass

from argument_forge.core.debate_graph import ArgumentNode, CausalEdge, DebateGraph
from argument_forge.core.domain_types import (
    ENHANCEMENT_ITERATIONS,
    EnhancementType,
    OracleTask,
)
from argument_forge.core.errors import (
    DanglingEndpointError,
    EdgeNotFoundError,
    ResourceNotFoundError,
    UnrecognizedEnhancementTypeError,
    edge_label,
)
from argument_forge.core.graph_codec import graph_to_json
from argument_forge.core.graph_format import describe_graph
from argument_forge.schemas.oracle_responses import (
    EnhancementAction,
    InsertNode,
    StrengthenEdge,
)
from argument_forge.services.oracle import Oracle

logger = logging.getLogger(__name__)


@dataclass
class EnhancementResult:
    actions: list[EnhancementAction]
    subgraph: DebateGraph


def seed_subgraph(cause: str, effect: str) -> DebateGraph:
    """Two-node working graph holding only the edge to strengthen."""
    subgraph = DebateGraph()
    cause_node = subgraph.add_node(ArgumentNode(cause))
    effect_node = subgraph.add_node(ArgumentNode(effect))
    subgraph.add_edge(CausalEdge(cause_node, effect_node))
    return subgraph


def require_edge_endpoints(graph: DebateGraph, cause: str, effect: str) -> None:
    """Raise ResourceNotFoundError unless both arguments are nodes of graph."""
    for argument in (cause, effect):
        if argument not in graph:
            raise ResourceNotFoundError("Argument", argument)


def apply_insert_node(subgraph: DebateGraph, action: InsertNode) -> None:
    cause, effect = action.cause_argument, action.effect_argument
    for argument in (cause, effect):
        if argument not in subgraph:
            raise DanglingEndpointError(cause, effect, argument)
    if subgraph.get_edge(cause, effect) is None:
        raise EdgeNotFoundError(cause, effect)
    intermediate = subgraph.add_node(ArgumentNode(action.intermediate_argument))
    subgraph.remove_edge(cause, effect)
    subgraph.add_edge(CausalEdge(subgraph.get_node(cause), intermediate))
    subgraph.add_edge(CausalEdge(intermediate, subgraph.get_node(effect)))


def apply_strengthen_edge(subgraph: DebateGraph, action: StrengthenEdge) -> None:
    match action.enhancement_type:
        case EnhancementType.UNIQUENESS.value:
            list_name = "uniqueness"
        case EnhancementType.CERTAINTY.value:
            list_name = "certainty"
        case _:
            raise UnrecognizedEnhancementTypeError(action.enhancement_type)
    edge = subgraph.get_edge(action.cause_argument, action.effect_argument)
    if edge is None:
        raise EdgeNotFoundError(action.cause_argument, action.effect_argument)
    getattr(edge, list_name).append(action.content)


def apply_action(subgraph: DebateGraph, action: EnhancementAction) -> None:
    if action.insert_node is not None:
        apply_insert_node(subgraph, action.insert_node)
    else:
        apply_strengthen_edge(subgraph, action.strengthen_edge)


class LogicEnhancer:
    """Runs the fixed-length enhancement loop for one edge."""

    def __init__(self, oracle: Oracle, iterations: int = ENHANCEMENT_ITERATIONS):
        self.oracle = oracle
        self.iterations = iterations

    async def enhance(
        self, context_graph: DebateGraph, cause: str, effect: str,
    ) -> EnhancementResult:
        subgraph = seed_subgraph(cause, effect)
        context_json = graph_to_json(context_graph)
        actions: list[EnhancementAction] = []

        for iteration in range(1, self.iterations + 1):
            action = await self.oracle.ask(
                OracleTask.ENHANCE_LOGIC,
                {"debate_graph": context_json, "subgraph": graph_to_json(subgraph)},
                EnhancementAction,
            )
            apply_action(subgraph, action)
            actions.append(action)
            logger.info(
                f"Enhancement {iteration}/{self.iterations} applied: "
                f"{'insert_node' if action.insert_node else 'strengthen_edge'}",
                extra={"iteration": iteration, "edge": edge_label(cause, effect)},
            )

        logger.debug(f"Enhanced subgraph:\n{describe_graph(subgraph)}")
        return EnhancementResult(actions=actions, subgraph=subgraph)
