"""Request/Response Schemas — API boundary models for the rebuttal and enhancement routes.

Invariants:
    - Every request carries a context graph (debate_graph)
    - rebuttal text is stripped and non-empty
    - cause/effect names are non-blank and kept verbatim (argument text is the node key)
    - Graph-bearing responses carry codec documents (empty optional arrays omitted)
"""

from pydantic import BaseModel, Field, field_validator

from argument_forge.schemas.graph_document import GraphDocument
from argument_forge.schemas.oracle_responses import EnhancementAction, EnhancementTodo


def _strip_non_empty(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v


def _reject_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("cannot be empty or whitespace")
    return v


class AnalyzeRebuttalRequest(BaseModel):
    """Expand a free-text rebuttal into the context graph."""
    debate_graph: GraphDocument
    rebuttal: str = Field(min_length=1, max_length=50_000)

    @field_validator("rebuttal")
    @classmethod
    def strip_rebuttal(cls, v: str) -> str:
        return _strip_non_empty(v)


class SubgraphRequest(BaseModel):
    """Context graph plus the subgraph under attack or enhancement."""
    debate_graph: GraphDocument
    subgraph: GraphDocument


class EnhanceLogicRequest(BaseModel):
    debate_graph: GraphDocument
    cause: str
    effect: str

    @field_validator("cause", "effect")
    @classmethod
    def reject_blank_argument(cls, v: str) -> str:
        return _reject_blank(v)


# --- Responses ----------------------------------------------------------------

class ExpansionReportResponse(BaseModel):
    items_applied: int
    items_skipped: int
    nodes_added: int
    edges_added: int
    nodes_processed: int
    frontier_dropped: int
    annotations_applied: int
    annotations_skipped: int
    truncated: bool


class AnalyzeRebuttalResponse(BaseModel):
    debate_graph: dict
    report: ExpansionReportResponse


class RebuttalProposalResponse(BaseModel):
    rebuttal_type: str
    rebuttal: str
    target_argument: str | None = None
    target_cause_argument: str | None = None
    target_effect_argument: str | None = None


class ProposalReportResponse(BaseModel):
    proposals: list[RebuttalProposalResponse]
    edges_scanned: int
    edges_failed: int
    items_skipped: int


class CreateRebuttalResponse(BaseModel):
    subgraph: dict
    committed: int
    skipped: int


class EnhanceLogicResponse(BaseModel):
    actions: list[EnhancementAction]
    subgraph: dict


class EnhanceTodoResponse(BaseModel):
    todo: list[EnhancementTodo]
