"""Rebuttal Proposals — oracle-found rebuttals against a subgraph, as a flat report.

Invariants:
    - propose() never mutates the context graph or the target subgraph
    - One find_evidence_rebuttals call per subgraph edge; a failure there is logged
      and that edge is skipped (edges_failed)
    - One find_product_fit_rebuttals call for the whole subgraph; its failure is fatal
    - Product-fit items must target a subgraph node, otherwise skipped with a warning
    - Evidence items with a type outside {certainty, uniqueness} are skipped
    - commit_proposals() is the only mutating step and applies to the graph it is given

Design Decisions:
    - Proposals carry argument texts, not node references: they outlive both graphs
      and can be shown to a person before commit
    - Both status_quo and affirmative_plan items become importance proposals
    - Per-edge failures are limited to OracleCallError; anything else propagates
"""

import json
import logging
from dataclasses import dataclass, field

from argument_forge.core.debate_graph import DebateGraph
from argument_forge.core.domain_types import (
    EdgeRebuttalType,
    NodeRebuttalType,
    OracleTask,
)
from argument_forge.core.errors import (
    OracleCallError,
    edge_label,
)
from argument_forge.core.graph_codec import (
    edge_to_document,
    graph_to_json,
    node_to_document,
)
from argument_forge.core.rebuttal_records import bind_edge_rebuttal, bind_node_rebuttal
from argument_forge.schemas.oracle_responses import (
    EvidenceRebuttals,
    ProductFitRebuttals,
)
from argument_forge.services.oracle import Oracle

logger = logging.getLogger(__name__)


def _fragment(doc: dict) -> str:
    return json.dumps(doc, ensure_ascii=False)


@dataclass(frozen=True)
class RebuttalProposal:
    """Edge proposals set the cause/effect pair; importance proposals set target_argument."""
    rebuttal_type: str
    rebuttal: str
    target_argument: str | None = None
    target_cause_argument: str | None = None
    target_effect_argument: str | None = None

    @property
    def targets_edge(self) -> bool:
        return self.target_cause_argument is not None


@dataclass
class ProposalReport:
    proposals: list[RebuttalProposal] = field(default_factory=list)
    edges_scanned: int = 0
    edges_failed: int = 0
    items_skipped: int = 0


class RebuttalProposer:
    """Collects rebuttal proposals without touching either graph."""

    def __init__(self, oracle: Oracle):
        self.oracle = oracle

    async def propose(
        self, context_graph: DebateGraph, subgraph: DebateGraph,
    ) -> ProposalReport:
        report = ProposalReport()
        context_json = graph_to_json(context_graph)

        for edge in subgraph.edges_in_node_order():
            report.edges_scanned += 1
            cause, effect = edge.key
            try:
                answer = await self.oracle.ask(
                    OracleTask.FIND_EVIDENCE_REBUTTALS,
                    {
                        "debate_graph": context_json,
                        "cause_node": _fragment(node_to_document(edge.cause)),
                        "effect_node": _fragment(node_to_document(edge.effect)),
                        "edge": _fragment(edge_to_document(edge)),
                    },
                    EvidenceRebuttals,
                )
            except OracleCallError as e:
                report.edges_failed += 1
                logger.warning(
                    f"Evidence rebuttal search failed, skipping edge: {e.message}",
                    extra={"edge": edge_label(cause, effect), "error_code": e.code},
                )
                continue

            for item in answer.rebuttals:
                if item.rebuttal_type not in {t.value for t in EdgeRebuttalType}:
                    report.items_skipped += 1
                    logger.warning(
                        f"Skipping evidence rebuttal of type {item.rebuttal_type!r}",
                        extra={"edge": edge_label(cause, effect)},
                    )
                    continue
                report.proposals.append(RebuttalProposal(
                    rebuttal_type=item.rebuttal_type,
                    rebuttal=item.rebuttal,
                    target_cause_argument=cause,
                    target_effect_argument=effect,
                ))

        product_fit = await self.oracle.ask(
            OracleTask.FIND_PRODUCT_FIT_REBUTTALS,
            {"subgraph": graph_to_json(subgraph)},
            ProductFitRebuttals,
        )
        for item in product_fit.status_quo + product_fit.affirmative_plan:
            if item.target_argument not in subgraph:
                report.items_skipped += 1
                logger.warning(
                    "Skipping importance rebuttal: target not in subgraph",
                    extra={"argument": item.target_argument},
                )
                continue
            report.proposals.append(RebuttalProposal(
                rebuttal_type=NodeRebuttalType.IMPORTANCE.value,
                rebuttal=item.rebuttal,
                target_argument=item.target_argument,
            ))

        logger.info(
            f"Proposed {len(report.proposals)} rebuttals over "
            f"{report.edges_scanned} edges ({report.edges_failed} failed)",
        )
        return report


# --- Commit -------------------------------------------------------------------

@dataclass
class CommitOutcome:
    committed: int = 0
    skipped: int = 0


def commit_proposals(
    graph: DebateGraph, proposals: list[RebuttalProposal],
) -> CommitOutcome:
    """Install proposals as rebuttal nodes and records in graph."""
    outcome = CommitOutcome()
    for proposal in proposals:
        if proposal.targets_edge:
            target_ok = graph.get_edge(
                proposal.target_cause_argument, proposal.target_effect_argument,
            ) is not None
        else:
            target_ok = proposal.target_argument in graph
        if not target_ok or not proposal.rebuttal.strip():
            outcome.skipped += 1
            logger.warning(
                "Skipping proposal: target not in graph or empty rebuttal",
                extra={"argument": proposal.target_argument},
            )
            continue

        graph.ensure_node(proposal.rebuttal, is_rebuttal=True)
        if proposal.targets_edge:
            bind_edge_rebuttal(
                graph,
                proposal.target_cause_argument,
                proposal.target_effect_argument,
                proposal.rebuttal_type,
                proposal.rebuttal,
            )
        else:
            bind_node_rebuttal(
                graph, proposal.target_argument,
                proposal.rebuttal_type, proposal.rebuttal,
            )
        outcome.committed += 1
    return outcome
