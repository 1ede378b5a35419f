"""Annotation Merge — attaches paragraph-level evidence to existing nodes and edges.

Invariants:
    - PURE: no IO, no logging; skips are returned to the caller, who logs them
    - "argument" annotations restate a node's own text and are discarded, never applied
    - Targets are resolved by argument text; an unresolved target skips that item only
    - Application is best-effort per item: one bad item never blocks the rest

Design Decisions:
    - Annotation is a core dataclass, decoupled from the oracle's pydantic model
    - Type strings are matched through the domain enums; an unknown type is a skip
      (annotations are advisory, unlike rebuttal kinds)
"""

from dataclasses import dataclass, field

from argument_forge.core.debate_graph import DebateGraph
from argument_forge.core.domain_types import (
    AnnotationTarget,
    EdgeAnnotationType,
    NodeAnnotationType,
)
from argument_forge.core.errors import edge_label

_NODE_LISTS = {
    NodeAnnotationType.IMPORTANCE: "importance",
    NodeAnnotationType.UNIQUENESS: "uniqueness",
    NodeAnnotationType.IMPORTANCE_REBUTTAL: "importance_rebuttals",
    NodeAnnotationType.UNIQUENESS_REBUTTAL: "uniqueness_rebuttals",
}

_EDGE_LISTS = {
    EdgeAnnotationType.CERTAINTY: "certainty",
    EdgeAnnotationType.UNIQUENESS: "uniqueness",
    EdgeAnnotationType.CERTAINTY_REBUTTAL: "certainty_rebuttal",
    EdgeAnnotationType.UNIQUENESS_REBUTTAL: "uniqueness_rebuttals",
}


@dataclass
class Annotation:
    """One statement to attach. Nodes use argument; edges use cause/effect."""
    target_type: str
    annotation_type: str
    content: str
    argument: str = ""
    cause_argument: str = ""
    effect_argument: str = ""

    @property
    def target_label(self) -> str:
        if self.target_type == AnnotationTarget.EDGE.value:
            return edge_label(self.cause_argument, self.effect_argument)
        return self.argument


@dataclass
class SkippedAnnotation:
    annotation: Annotation
    reason: str


@dataclass
class AnnotationOutcome:
    applied: int = 0
    discarded: int = 0
    skipped: list[SkippedAnnotation] = field(default_factory=list)


def is_restatement(annotation: Annotation) -> bool:
    return (
        annotation.target_type == AnnotationTarget.NODE.value
        and annotation.annotation_type == NodeAnnotationType.ARGUMENT.value
    )


def apply_annotations(
    graph: DebateGraph, annotations: list[Annotation],
) -> AnnotationOutcome:
    outcome = AnnotationOutcome()
    for annotation in annotations:
        if is_restatement(annotation):
            outcome.discarded += 1
            continue
        reason = _apply_one(graph, annotation)
        if reason is None:
            outcome.applied += 1
        else:
            outcome.skipped.append(SkippedAnnotation(annotation, reason))
    return outcome


def _apply_one(graph: DebateGraph, annotation: Annotation) -> str | None:
    """Append the annotation to its target list. Returns a skip reason or None."""
    match annotation.target_type:
        case AnnotationTarget.NODE.value:
            return _apply_to_node(graph, annotation)
        case AnnotationTarget.EDGE.value:
            return _apply_to_edge(graph, annotation)
        case _:
            return f"unknown target type {annotation.target_type!r}"


def _apply_to_node(graph: DebateGraph, annotation: Annotation) -> str | None:
    try:
        list_name = _NODE_LISTS[NodeAnnotationType(annotation.annotation_type)]
    except (ValueError, KeyError):
        return f"unknown node annotation type {annotation.annotation_type!r}"
    node = graph.get_node(annotation.argument)
    if node is None:
        return "target node not found"
    getattr(node, list_name).append(annotation.content)
    return None


def _apply_to_edge(graph: DebateGraph, annotation: Annotation) -> str | None:
    try:
        list_name = _EDGE_LISTS[EdgeAnnotationType(annotation.annotation_type)]
    except ValueError:
        return f"unknown edge annotation type {annotation.annotation_type!r}"
    edge = graph.get_edge(annotation.cause_argument, annotation.effect_argument)
    if edge is None:
        return "target edge not found"
    getattr(edge, list_name).append(annotation.content)
    return None
