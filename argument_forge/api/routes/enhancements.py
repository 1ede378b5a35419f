"""Enhancement Routes — strengthen one causal edge, suggest follow-up TODOs.

Invariants:
    - enhance-logic answers 404 when cause or effect is not a node of the context graph
    - A successful enhance-logic response holds exactly three actions
"""

from fastapi import APIRouter, Depends

from argument_forge.api.dependencies import get_oracle
from argument_forge.core.graph_codec import graph_to_document
from argument_forge.schemas.requests import (
    EnhanceLogicRequest,
    EnhanceLogicResponse,
    EnhanceTodoResponse,
    SubgraphRequest,
)
from argument_forge.services.enhance_logic import LogicEnhancer, require_edge_endpoints
from argument_forge.services.oracle import Oracle
from argument_forge.services.suggest_todos import TodoSuggester

router = APIRouter(prefix="/api/v1/enhancements", tags=["enhancements"])


@router.post("/logic", response_model=EnhanceLogicResponse)
async def enhance_logic(
    body: EnhanceLogicRequest, oracle: Oracle = Depends(get_oracle),
):
    graph = body.debate_graph.to_graph()
    require_edge_endpoints(graph, body.cause, body.effect)
    result = await LogicEnhancer(oracle).enhance(graph, body.cause, body.effect)
    return {
        "actions": result.actions,
        "subgraph": graph_to_document(result.subgraph),
    }


@router.post("/todos", response_model=EnhanceTodoResponse)
async def enhance_todo(
    body: SubgraphRequest, oracle: Oracle = Depends(get_oracle),
):
    todo = await TodoSuggester(oracle).suggest(
        body.debate_graph.to_graph(), body.subgraph.to_graph(),
    )
    return {"todo": todo}
