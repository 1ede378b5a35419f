"""Rebuttal Expansion — installs a rebuttal document's claims and their causal ancestry.

Invariants:
    - Step 1: one find_rebuttals call; each item binds one satellite record; only
      nodes created by this run are enqueued
    - Step 2: FIFO breadth-first drain; per dequeued node, find_rebuttal_causes then
      find_new_arguments, then one validated commit
    - Every used cause resolves to an existing node or to a new argument of the same
      step, otherwise DanglingEndpointError before anything of that step is applied
    - Nodes and edges introduced here are flagged is_rebuttal
    - Each argument text is processed at most once; at most max_nodes are processed,
      the remaining frontier is dropped and reported (truncated)
    - Step 3: one create_annotations call per paragraph; "argument" annotations are
      discarded; unresolved annotation targets are logged and skipped
    - Oracle and structural failures abort; steps committed before them are kept

Design Decisions:
    - An item whose target does not exist is skipped with a warning (the oracle
      misquoted a node); an item with an unknown kind is fatal (exhaustive match)
    - An existing argument text is reused, never duplicated; a reused node keeps its
      own is_rebuttal flag and is not enqueued again
    - Self-loop causes are ignored: a claim cannot be its own cause
"""

import json
import logging
from collections import deque
from dataclasses import dataclass

from argument_forge.core.annotations import Annotation, apply_annotations
from argument_forge.core.debate_graph import ArgumentNode, DebateGraph
from argument_forge.core.domain_types import OracleTask, RebuttalKind
from argument_forge.core.errors import (
    DanglingEndpointError,
    UnrecognizedRebuttalKindError,
    edge_label,
)
from argument_forge.core.graph_codec import graph_to_json
from argument_forge.core.graph_format import list_causal_relationships
from argument_forge.core.paragraphs import split_paragraphs
from argument_forge.core.rebuttal_records import (
    bind_counter_argument,
    bind_edge_rebuttal,
    bind_node_rebuttal,
    bind_turn_argument,
    parse_edge_rebuttal_type,
    parse_node_rebuttal_type,
)
from argument_forge.schemas.oracle_responses import (
    AnalyzedRebuttals,
    FoundCauses,
    LogicAnnotations,
    NewArgumentsResult,
    RebuttalItem,
)
from argument_forge.services.oracle import Oracle

logger = logging.getLogger(__name__)

DEFAULT_MAX_NODES = 64


@dataclass
class ExpansionReport:
    items_applied: int = 0
    items_skipped: int = 0
    nodes_added: int = 0
    edges_added: int = 0
    nodes_processed: int = 0
    frontier_dropped: int = 0
    annotations_applied: int = 0
    annotations_skipped: int = 0

    @property
    def truncated(self) -> bool:
        return self.frontier_dropped > 0

    def to_dict(self) -> dict:
        return {
            "items_applied": self.items_applied,
            "items_skipped": self.items_skipped,
            "nodes_added": self.nodes_added,
            "edges_added": self.edges_added,
            "nodes_processed": self.nodes_processed,
            "frontier_dropped": self.frontier_dropped,
            "annotations_applied": self.annotations_applied,
            "annotations_skipped": self.annotations_skipped,
            "truncated": self.truncated,
        }


def _distinct(texts: list[str]) -> list[str]:
    """Drop blanks and repeats, keep first-seen order."""
    seen: set[str] = set()
    result = []
    for text in texts:
        if text.strip() and text not in seen:
            seen.add(text)
            result.append(text)
    return result


class RebuttalExpander:
    """Grows a DebateGraph from one free-text rebuttal document."""

    def __init__(self, oracle: Oracle, max_nodes: int = DEFAULT_MAX_NODES):
        self.oracle = oracle
        self.max_nodes = max_nodes

    async def expand(self, graph: DebateGraph, rebuttal: str) -> ExpansionReport:
        report = ExpansionReport()
        queue = await self._install_rebuttals(graph, rebuttal, report)
        await self._drain(graph, rebuttal, queue, report)
        await self._annotate(graph, rebuttal, report)
        logger.info(
            f"Expansion finished: {report.nodes_added} nodes, "
            f"{report.edges_added} edges",
            extra={
                "nodes_added": report.nodes_added,
                "edges_added": report.edges_added,
                "skipped": report.items_skipped + report.annotations_skipped,
            },
        )
        logger.debug(
            "Causal relationships after expansion:\n"
            + "\n".join(list_causal_relationships(graph)),
        )
        return report

    # --- Step 1: rebuttal items -------------------------------------------

    async def _install_rebuttals(
        self, graph: DebateGraph, rebuttal: str, report: ExpansionReport,
    ) -> deque[ArgumentNode]:
        found = await self.oracle.ask(
            OracleTask.FIND_REBUTTALS,
            {"debate_graph": graph_to_json(graph), "rebuttal": rebuttal},
            AnalyzedRebuttals,
        )
        queue: deque[ArgumentNode] = deque()
        for item in found.rebuttals:
            installed = self._install_item(graph, item, report)
            if installed is not None:
                queue.append(installed)
        return queue

    def _install_item(
        self, graph: DebateGraph, item: RebuttalItem, report: ExpansionReport,
    ) -> ArgumentNode | None:
        """Bind one item. Returns the rebuttal node when this call created it."""
        match item.rebuttal_kind:
            case RebuttalKind.EDGE_REBUTTAL.value:
                payload = item.edge_rebuttal
                kind = parse_edge_rebuttal_type(payload.rebuttal_type)
                cause, effect = payload.target_edge_cause, payload.target_edge_effect
                if graph.get_edge(cause, effect) is None:
                    return self._skip_item(item, edge_label(cause, effect), report)
                argument = payload.rebuttal_argument
                if not argument.strip():
                    return self._skip_item(item, edge_label(cause, effect), report)
                node = self._materialize(graph, argument, report)
                bind_edge_rebuttal(graph, cause, effect, kind, argument)

            case RebuttalKind.NODE_REBUTTAL.value:
                payload = item.node_rebuttal
                kind = parse_node_rebuttal_type(payload.rebuttal_type)
                target = payload.target_node
                argument = payload.rebuttal_argument
                if target not in graph or not argument.strip():
                    return self._skip_item(item, target, report)
                node = self._materialize(graph, argument, report)
                bind_node_rebuttal(graph, target, kind, argument)

            case RebuttalKind.COUNTER_ARGUMENT.value:
                payload = item.counter_argument
                target = payload.target_node
                if target not in graph or not payload.argument.strip():
                    return self._skip_item(item, target, report)
                node = self._materialize(graph, payload.argument, report)
                bind_counter_argument(graph, target, payload.argument)

            case RebuttalKind.TURN_ARGUMENT.value:
                argument = item.turn_argument.effect_argument
                if not argument.strip():
                    return self._skip_item(item, "", report)
                node = self._materialize(graph, argument, report)
                bind_turn_argument(graph, argument)

            case _:
                raise UnrecognizedRebuttalKindError(item.rebuttal_kind)

        report.items_applied += 1
        return node

    def _materialize(
        self, graph: DebateGraph, argument: str, report: ExpansionReport,
    ) -> ArgumentNode | None:
        node, created = graph.ensure_node(argument, is_rebuttal=True)
        if not created:
            return None
        report.nodes_added += 1
        return node

    def _skip_item(
        self, item: RebuttalItem, target: str, report: ExpansionReport,
    ) -> None:
        logger.warning(
            f"Skipping {item.rebuttal_kind}: target not in graph or empty rebuttal",
            extra={"argument": target},
        )
        report.items_skipped += 1
        return None

    # --- Step 2: breadth-first cause discovery -----------------------------

    async def _drain(
        self,
        graph: DebateGraph,
        rebuttal: str,
        queue: deque[ArgumentNode],
        report: ExpansionReport,
    ) -> None:
        visited: set[str] = set()
        while queue:
            if report.nodes_processed >= self.max_nodes:
                report.frontier_dropped = len(queue)
                logger.warning(
                    f"Expansion cap of {self.max_nodes} nodes reached; "
                    f"dropping {len(queue)} queued arguments",
                )
                return
            current = queue.popleft()
            if current.argument in visited:
                continue
            visited.add(current.argument)
            report.nodes_processed += 1
            queue.extend(await self._expand_node(graph, rebuttal, current, report))

    async def _expand_node(
        self,
        graph: DebateGraph,
        rebuttal: str,
        current: ArgumentNode,
        report: ExpansionReport,
    ) -> list[ArgumentNode]:
        causes = await self.oracle.ask(
            OracleTask.FIND_REBUTTAL_CAUSES,
            {
                "debate_graph": graph_to_json(graph),
                "rebuttal": rebuttal,
                "argument": current.argument,
            },
            FoundCauses,
        )
        argument_and_causes = json.dumps(
            {"argument": current.argument, "causes": causes.causes},
            ensure_ascii=False,
        )
        step = await self.oracle.ask(
            OracleTask.FIND_NEW_ARGUMENTS,
            {
                "debate_graph": graph_to_json(graph),
                "argument_and_causes": argument_and_causes,
            },
            NewArgumentsResult,
        )

        new_arguments = _distinct(step.new_nodes)
        used_causes = [
            c for c in _distinct(step.used_causes) if c != current.argument
        ]
        pending = set(new_arguments)
        for cause in used_causes:
            if cause not in graph and cause not in pending:
                raise DanglingEndpointError(cause, current.argument, cause)

        created = []
        for argument in new_arguments:
            node = self._materialize(graph, argument, report)
            if node is not None:
                created.append(node)
        for cause in used_causes:
            before = graph.edge_count
            graph.connect(cause, current.argument, is_rebuttal=True)
            report.edges_added += graph.edge_count - before

        logger.info(
            f"Expanded argument: {len(created)} new, {len(used_causes)} causes",
            extra={"argument": current.argument},
        )
        return created

    # --- Step 3: paragraph annotations -------------------------------------

    async def _annotate(
        self, graph: DebateGraph, rebuttal: str, report: ExpansionReport,
    ) -> None:
        graph_json = graph_to_json(graph)
        annotations: list[Annotation] = []
        for paragraph in split_paragraphs(rebuttal):
            answer = await self.oracle.ask(
                OracleTask.CREATE_ANNOTATIONS,
                {
                    "debate_graph": graph_json,
                    "rebuttal": rebuttal,
                    "paragraph": paragraph,
                },
                LogicAnnotations,
            )
            annotations.extend(a.to_annotation() for a in answer.annotations)

        outcome = apply_annotations(graph, annotations)
        for skipped in outcome.skipped:
            logger.warning(
                f"Annotation skipped: {skipped.reason}",
                extra={"argument": skipped.annotation.target_label},
            )
        report.annotations_applied = outcome.applied
        report.annotations_skipped = len(outcome.skipped)
