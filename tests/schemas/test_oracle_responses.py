"""Schema tests — oracle answer models and the graph document boundary model.

Invariants:
    - A known rebuttal_kind without its payload is rejected; unknown kinds pass through
    - EnhancementAction holds exactly one action
    - Annotation content is taken from the dimension named by annotation_type
    - Discriminator enums are advertised in the JSON schema
    - Graph documents read null arrays as empty; enhance names are kept verbatim
"""

import pytest
from pydantic import ValidationError

from argument_forge.schemas.graph_document import GraphDocument
from argument_forge.schemas.oracle_responses import (
    EdgeRebuttalPayload,
    EnhancementAction,
    LogicAnnotation,
    RebuttalItem,
)
from argument_forge.schemas.requests import EnhanceLogicRequest


# -- RebuttalItem --------------------------------------------------------------


def test_known_kind_requires_payload():
    with pytest.raises(ValidationError):
        RebuttalItem.model_validate({"rebuttal_kind": "edge_rebuttal"})


def test_unknown_kind_is_left_to_call_site():
    item = RebuttalItem.model_validate({"rebuttal_kind": "sarcasm"})
    assert item.rebuttal_kind == "sarcasm"


def test_edge_rebuttal_argument_follows_type():
    payload = EdgeRebuttalPayload(
        rebuttal_type="uniqueness", target_edge_cause="A", target_edge_effect="B",
        certainty_rebuttal="ignored", uniqueness_rebuttal="Happens anyway",
    )
    assert payload.rebuttal_argument == "Happens anyway"


def test_rebuttal_kind_enum_in_schema():
    schema = RebuttalItem.model_json_schema()
    assert set(schema["properties"]["rebuttal_kind"]["enum"]) == {
        "edge_rebuttal", "node_rebuttal", "counter_argument", "turn_argument",
    }


# -- EnhancementAction ---------------------------------------------------------


@pytest.mark.parametrize("data", [
    {},
    {
        "strengthen_edge": {
            "cause_argument": "A", "effect_argument": "B",
            "enhancement_type": "certainty", "content": "x",
        },
        "insert_node": {
            "cause_argument": "A", "effect_argument": "B",
            "intermediate_argument": "M",
        },
    },
])
def test_enhancement_action_requires_exactly_one(data):
    with pytest.raises(ValidationError):
        EnhancementAction.model_validate(data)


# -- LogicAnnotation -----------------------------------------------------------


def test_edge_uniqueness_annotation_content():
    annotation = LogicAnnotation.model_validate({
        "target_type": "edge",
        "edge_annotation": {
            "annotation_type": "uniqueness_rebuttal", "cause_argument": "A",
            "effect_argument": "B", "certainty": "no", "uniqueness": "yes",
        },
    }).to_annotation()
    assert annotation.content == "yes"
    assert annotation.target_label == "A->B"


def test_node_importance_annotation_content():
    annotation = LogicAnnotation.model_validate({
        "target_type": "node",
        "node_annotation": {
            "annotation_type": "importance", "argument": "B", "importance": "big",
        },
    }).to_annotation()
    assert (annotation.argument, annotation.content) == ("B", "big")


def test_annotation_without_payload_flattens_to_empty_type():
    annotation = LogicAnnotation(target_type="node").to_annotation()
    assert annotation.annotation_type == ""


# -- Boundary models -----------------------------------------------------------


def test_graph_document_null_arrays_read_as_empty():
    doc = GraphDocument.model_validate({"nodes": None, "edges": None})
    assert doc.to_graph().node_count == 0


def test_graph_document_null_satellite_and_list_fields_read_as_empty():
    doc = GraphDocument.model_validate({
        "nodes": [
            {"argument": "A", "importance": None, "uniqueness_rebuttals": None},
            {"argument": "B"},
        ],
        "edges": [{"cause": "A", "effect": "B", "certainty": None,
                   "certainty_rebuttal": None}],
        "node_rebuttals": None,
        "edge_rebuttals": None,
        "counter_argument_rebuttals": None,
        "turn_argument_rebuttals": None,
    })

    graph = doc.to_graph()

    assert graph.get_node("A").importance == []
    assert graph.get_edge("A", "B").certainty == []
    assert graph.node_rebuttals == []
    assert graph.turn_argument_rebuttals == []


def test_graph_document_rejects_empty_argument():
    with pytest.raises(ValidationError):
        GraphDocument.model_validate({"nodes": [{"argument": ""}]})


def test_enhance_request_keeps_argument_text_verbatim():
    body = EnhanceLogicRequest.model_validate({
        "debate_graph": {}, "cause": " A ", "effect": "B\n",
    })
    assert (body.cause, body.effect) == (" A ", "B\n")


@pytest.mark.parametrize("blank", ["", "   ", "\n"])
def test_enhance_request_rejects_blank_argument(blank):
    with pytest.raises(ValidationError):
        EnhanceLogicRequest.model_validate({
            "debate_graph": {}, "cause": blank, "effect": "B",
        })
