"""Oracle Response Schemas — typed answers the oracle must return, one model per task.

Invariants:
    - Each model's JSON schema is sent as the forced tool's input_schema
    - Discriminators (rebuttal_kind, rebuttal_type, enhancement_type, annotation_type)
      stay plain strings; the enum is advertised in the schema, and call sites match
      exhaustively and raise the domain error on an unknown value
    - A known rebuttal_kind must carry its matching payload (model_validator)
    - EnhancementAction carries exactly one of insert_node / strengthen_edge

Design Decisions:
    - Pydantic v2 models: model_json_schema() doubles as the tool definition and
      model_validate() as the output check (ADR: one source of truth for the contract)
    - Wire names follow the graph document vocabulary (cause/effect, target_*)
"""

from pydantic import BaseModel, Field, model_validator

from argument_forge.core.annotations import Annotation
from argument_forge.core.domain_types import (
    AnnotationTarget,
    EdgeAnnotationType,
    EdgeRebuttalType,
    EnhancementType,
    NodeAnnotationType,
    NodeRebuttalType,
    RebuttalKind,
)


def _enum_of(enum_cls) -> dict:
    return {"enum": [member.value for member in enum_cls]}


# --- find_rebuttals -----------------------------------------------------------

class EdgeRebuttalPayload(BaseModel):
    rebuttal_type: str = Field(json_schema_extra=_enum_of(EdgeRebuttalType))
    target_edge_cause: str
    target_edge_effect: str
    certainty_rebuttal: str = ""
    uniqueness_rebuttal: str = ""

    @property
    def rebuttal_argument(self) -> str:
        if self.rebuttal_type == EdgeRebuttalType.CERTAINTY.value:
            return self.certainty_rebuttal
        return self.uniqueness_rebuttal


class NodeRebuttalPayload(BaseModel):
    rebuttal_type: str = Field(json_schema_extra=_enum_of(NodeRebuttalType))
    target_node: str
    importance_rebuttal: str = ""
    uniqueness_rebuttal: str = ""

    @property
    def rebuttal_argument(self) -> str:
        if self.rebuttal_type == NodeRebuttalType.IMPORTANCE.value:
            return self.importance_rebuttal
        return self.uniqueness_rebuttal


class CounterArgumentPayload(BaseModel):
    target_node: str = Field(description="Claim being negated")
    argument: str = Field(description="The opposite claim")


class TurnArgumentPayload(BaseModel):
    target_cause_nodes: list[str] = Field(
        default_factory=list,
        description="Opposing nodes the turn concedes",
    )
    effect_argument: str = Field(description="Opposite conclusion the turn reaches")


_PAYLOAD_FIELD = {
    RebuttalKind.EDGE_REBUTTAL.value: "edge_rebuttal",
    RebuttalKind.NODE_REBUTTAL.value: "node_rebuttal",
    RebuttalKind.COUNTER_ARGUMENT.value: "counter_argument",
    RebuttalKind.TURN_ARGUMENT.value: "turn_argument",
}


class RebuttalItem(BaseModel):
    rebuttal_kind: str = Field(json_schema_extra=_enum_of(RebuttalKind))
    edge_rebuttal: EdgeRebuttalPayload | None = None
    node_rebuttal: NodeRebuttalPayload | None = None
    counter_argument: CounterArgumentPayload | None = None
    turn_argument: TurnArgumentPayload | None = None

    @model_validator(mode="after")
    def payload_matches_kind(self):
        field_name = _PAYLOAD_FIELD.get(self.rebuttal_kind)
        if field_name is not None and getattr(self, field_name) is None:
            raise ValueError(
                f"rebuttal_kind '{self.rebuttal_kind}' requires '{field_name}'",
            )
        return self


class AnalyzedRebuttals(BaseModel):
    rebuttals: list[RebuttalItem] = Field(default_factory=list)


# --- BFS steps ----------------------------------------------------------------

class FoundCauses(BaseModel):
    causes: list[str] = Field(default_factory=list)


class NewArgumentsResult(BaseModel):
    new_nodes: list[str] = Field(
        default_factory=list,
        description="Candidate causes that are genuinely new arguments",
    )
    used_causes: list[str] = Field(
        default_factory=list,
        description="Candidates to wire as causes of the current argument",
    )


# --- create_annotations -------------------------------------------------------

class NodeAnnotationPayload(BaseModel):
    annotation_type: str = Field(json_schema_extra=_enum_of(NodeAnnotationType))
    argument: str
    importance: str = ""
    uniqueness: str = ""


class EdgeAnnotationPayload(BaseModel):
    annotation_type: str = Field(json_schema_extra=_enum_of(EdgeAnnotationType))
    cause_argument: str
    effect_argument: str
    certainty: str = ""
    uniqueness: str = ""


class LogicAnnotation(BaseModel):
    target_type: str = Field(json_schema_extra=_enum_of(AnnotationTarget))
    target_text: str = Field(
        default="", description="Excerpt of the paragraph the annotation rests on",
    )
    node_annotation: NodeAnnotationPayload | None = None
    edge_annotation: EdgeAnnotationPayload | None = None

    def to_annotation(self) -> Annotation:
        """Flatten into the core Annotation; content comes from the dimension field."""
        if self.target_type == AnnotationTarget.EDGE.value and self.edge_annotation:
            edge = self.edge_annotation
            content = (
                edge.uniqueness if edge.annotation_type.startswith("uniqueness")
                else edge.certainty
            )
            return Annotation(
                target_type=self.target_type,
                annotation_type=edge.annotation_type,
                content=content,
                cause_argument=edge.cause_argument,
                effect_argument=edge.effect_argument,
            )
        if self.target_type == AnnotationTarget.NODE.value and self.node_annotation:
            node = self.node_annotation
            content = (
                node.uniqueness if node.annotation_type.startswith("uniqueness")
                else node.importance
            )
            return Annotation(
                target_type=self.target_type,
                annotation_type=node.annotation_type,
                content=content,
                argument=node.argument,
            )
        return Annotation(
            target_type=self.target_type, annotation_type="", content="",
        )


class LogicAnnotations(BaseModel):
    annotations: list[LogicAnnotation] = Field(default_factory=list)


# --- enhance_logic ------------------------------------------------------------

class StrengthenEdge(BaseModel):
    cause_argument: str
    effect_argument: str
    enhancement_type: str = Field(json_schema_extra=_enum_of(EnhancementType))
    content: str


class InsertNode(BaseModel):
    cause_argument: str
    effect_argument: str
    intermediate_argument: str


class StrengthenNode(BaseModel):
    target_argument: str
    content: str


class EnhancementAction(BaseModel):
    strengthen_edge: StrengthenEdge | None = None
    insert_node: InsertNode | None = None

    @model_validator(mode="after")
    def exactly_one_action(self):
        if (self.strengthen_edge is None) == (self.insert_node is None):
            raise ValueError("exactly one of strengthen_edge / insert_node is required")
        return self


# --- find_evidence_rebuttals / find_product_fit_rebuttals ---------------------

class EvidenceRebuttal(BaseModel):
    rebuttal_type: str = Field(json_schema_extra=_enum_of(EdgeRebuttalType))
    rebuttal: str


class EvidenceRebuttals(BaseModel):
    rebuttals: list[EvidenceRebuttal] = Field(default_factory=list)


class ProductFitRebuttal(BaseModel):
    target_argument: str
    rebuttal: str


class ProductFitRebuttals(BaseModel):
    status_quo: list[ProductFitRebuttal] = Field(default_factory=list)
    affirmative_plan: list[ProductFitRebuttal] = Field(default_factory=list)


# --- suggest_todos ------------------------------------------------------------

class EnhancementTodo(BaseModel):
    title: str
    strengthen_edge: StrengthenEdge | None = None
    strengthen_node: StrengthenNode | None = None
    insert_node: InsertNode | None = None


class TodoSuggestions(BaseModel):
    todo: list[EnhancementTodo] = Field(default_factory=list)
