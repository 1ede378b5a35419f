"""Rebuttal Routes — expand a rebuttal document, propose and create rebuttals.

Invariants:
    - Request graphs are rebuilt through the codec; structure errors surface as 400
    - Proposals never mutate the request graphs
    - create commits proposals into a freshly rebuilt subgraph and returns it
    - Oracle failures surface as 503 via the global ForgeError handler

Design Decisions:
    - Thin routes: deserialize, call one service, serialize (all logic in services/)
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from argument_forge.config import Settings
from argument_forge.core.graph_codec import graph_to_document
from argument_forge.api.dependencies import get_app_settings, get_oracle
from argument_forge.schemas.requests import (
    AnalyzeRebuttalRequest,
    AnalyzeRebuttalResponse,
    CreateRebuttalResponse,
    ProposalReportResponse,
    SubgraphRequest,
)
from argument_forge.services.expand_rebuttal import RebuttalExpander
from argument_forge.services.oracle import Oracle
from argument_forge.services.propose_rebuttals import (
    RebuttalProposer,
    commit_proposals,
)

router = APIRouter(prefix="/api/v1/rebuttals", tags=["rebuttals"])


@router.post("/analyze", response_model=AnalyzeRebuttalResponse)
async def analyze_rebuttal(
    body: AnalyzeRebuttalRequest,
    oracle: Oracle = Depends(get_oracle),
    settings: Settings = Depends(get_app_settings),
):
    """Install the rebuttal's claims and causal structure into the graph."""
    graph = body.debate_graph.to_graph()
    expander = RebuttalExpander(oracle, max_nodes=settings.expansion_max_nodes)
    report = await expander.expand(graph, body.rebuttal)
    return {"debate_graph": graph_to_document(graph), "report": report.to_dict()}


@router.post("/proposals", response_model=ProposalReportResponse)
async def propose_rebuttals(
    body: SubgraphRequest, oracle: Oracle = Depends(get_oracle),
):
    """Flat list of proposed rebuttals; neither graph is changed."""
    report = await RebuttalProposer(oracle).propose(
        body.debate_graph.to_graph(), body.subgraph.to_graph(),
    )
    return asdict(report)


@router.post("/create", response_model=CreateRebuttalResponse)
async def create_rebuttal(
    body: SubgraphRequest, oracle: Oracle = Depends(get_oracle),
):
    """Propose rebuttals and commit them into the subgraph."""
    report = await RebuttalProposer(oracle).propose(
        body.debate_graph.to_graph(), body.subgraph.to_graph(),
    )
    subgraph = body.subgraph.to_graph()
    outcome = commit_proposals(subgraph, report.proposals)
    return {
        "subgraph": graph_to_document(subgraph),
        "committed": outcome.committed,
        "skipped": outcome.skipped,
    }
