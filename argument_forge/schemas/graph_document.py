"""Graph Document Schemas — Pydantic mirror of the serialized graph for API boundaries.

Invariants:
    - Field names match core/graph_codec.py exactly
    - Optional arrays default to empty; absence or null is never a validation error
    - to_graph() delegates to the core codec (reference resolution happens there)

Design Decisions:
    - Shape validation here, reference validation in the codec: pydantic reports
      field-level 400s, the codec reports DanglingReference with the section name
"""

from pydantic import BaseModel, Field, field_validator

from argument_forge.core.debate_graph import DebateGraph
from argument_forge.core.graph_codec import graph_from_document


def _null_as_empty(v):
    return [] if v is None else v


class NodeDocument(BaseModel):
    argument: str = Field(min_length=1)
    is_rebuttal: bool = False
    importance: list[str] = Field(default_factory=list)
    uniqueness: list[str] = Field(default_factory=list)
    importance_rebuttals: list[str] = Field(default_factory=list)
    uniqueness_rebuttals: list[str] = Field(default_factory=list)

    @field_validator(
        "importance", "uniqueness", "importance_rebuttals", "uniqueness_rebuttals",
        mode="before",
    )
    @classmethod
    def null_as_empty(cls, v):
        return _null_as_empty(v)


class EdgeDocument(BaseModel):
    cause: str
    effect: str
    is_rebuttal: bool = False
    certainty: list[str] = Field(default_factory=list)
    uniqueness: list[str] = Field(default_factory=list)
    certainty_rebuttal: list[str] = Field(default_factory=list)
    uniqueness_rebuttals: list[str] = Field(default_factory=list)

    @field_validator(
        "certainty", "uniqueness", "certainty_rebuttal", "uniqueness_rebuttals",
        mode="before",
    )
    @classmethod
    def null_as_empty(cls, v):
        return _null_as_empty(v)


class NodeRebuttalDocument(BaseModel):
    target_argument: str
    rebuttal_type: str
    rebuttal_argument: str


class EdgeRebuttalDocument(BaseModel):
    target_cause_argument: str
    target_effect_argument: str
    rebuttal_type: str
    rebuttal_argument: str


class CounterArgumentRebuttalDocument(BaseModel):
    rebuttal_argument: str
    target_argument: str


class TurnArgumentRebuttalDocument(BaseModel):
    rebuttal_argument: str


class GraphDocument(BaseModel):
    """Serialized DebateGraph as accepted on the wire."""
    nodes: list[NodeDocument] = Field(default_factory=list)
    edges: list[EdgeDocument] = Field(default_factory=list)
    node_rebuttals: list[NodeRebuttalDocument] = Field(default_factory=list)
    edge_rebuttals: list[EdgeRebuttalDocument] = Field(default_factory=list)
    counter_argument_rebuttals: list[CounterArgumentRebuttalDocument] = Field(
        default_factory=list,
    )
    turn_argument_rebuttals: list[TurnArgumentRebuttalDocument] = Field(
        default_factory=list,
    )

    @field_validator(
        "nodes", "edges", "node_rebuttals", "edge_rebuttals",
        "counter_argument_rebuttals", "turn_argument_rebuttals",
        mode="before",
    )
    @classmethod
    def null_as_empty(cls, v):
        return _null_as_empty(v)

    def to_graph(self) -> DebateGraph:
        return graph_from_document(self.model_dump())
