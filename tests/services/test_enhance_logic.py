"""Logic Enhancement Tests — fixed three-step loop over a two-node working subgraph.

Invariants:
    - Exactly three actions are applied and returned, in order
    - insert_node splits the edge (original removed, two edges added)
    - insert_node naming an existing argument raises and leaves the subgraph as is
    - Unknown enhancement types and missing edges raise
    - An oracle failure mid-loop propagates (no partial result)
    - The context graph is never mutated
"""

import pytest

from argument_forge.core.domain_types import OracleTask
from argument_forge.core.errors import (
    DanglingEndpointError,
    DuplicateNodeError,
    EdgeNotFoundError,
    OracleCallError,
    ResourceNotFoundError,
    UnrecognizedEnhancementTypeError,
)
from argument_forge.schemas.oracle_responses import InsertNode
from argument_forge.services.enhance_logic import (
    LogicEnhancer,
    apply_insert_node,
    require_edge_endpoints,
    seed_subgraph,
)
from tests.fake_oracle import FakeOracle
from tests.graph_fixtures import chain, structure


def _strengthen(cause, effect, enhancement_type="uniqueness", content="X"):
    return {"strengthen_edge": {
        "cause_argument": cause, "effect_argument": effect,
        "enhancement_type": enhancement_type, "content": content,
    }}


def _insert(cause, effect, intermediate):
    return {"insert_node": {
        "cause_argument": cause, "effect_argument": effect,
        "intermediate_argument": intermediate,
    }}


# -- Seeding -------------------------------------------------------------------


def test_seed_subgraph_holds_single_edge():
    subgraph = seed_subgraph("A", "B")
    assert [n.argument for n in subgraph.nodes] == ["A", "B"]
    assert subgraph.edge_count == 1
    assert subgraph.get_edge("A", "B").is_rebuttal is False


def test_require_edge_endpoints_rejects_unknown_argument():
    with pytest.raises(ResourceNotFoundError) as exc:
        require_edge_endpoints(chain("A", "B"), "A", "Z")
    assert exc.value.http_status == 404


# -- Loop ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_three_strengthen_actions():
    context = chain("A", "B")
    before = structure(context)
    oracle = FakeOracle().always(OracleTask.ENHANCE_LOGIC, lambda i: _strengthen("A", "B"))

    result = await LogicEnhancer(oracle).enhance(context, "A", "B")

    assert len(result.actions) == 3
    assert result.subgraph.get_edge("A", "B").uniqueness == ["X", "X", "X"]
    assert structure(context) == before


@pytest.mark.asyncio
async def test_context_serialized_once_subgraph_each_iteration():
    oracle = FakeOracle().script(
        OracleTask.ENHANCE_LOGIC,
        _strengthen("A", "B", "certainty", "c1"),
        _strengthen("A", "B", "certainty", "c2"),
        _strengthen("A", "B", "certainty", "c3"),
    )

    await LogicEnhancer(oracle).enhance(chain("A", "B"), "A", "B")

    calls = oracle.calls_for(OracleTask.ENHANCE_LOGIC)
    assert len({c["debate_graph"] for c in calls}) == 1
    assert "c1" not in calls[0]["subgraph"]
    assert "c1" in calls[1]["subgraph"]
    assert "c2" in calls[2]["subgraph"]


@pytest.mark.asyncio
async def test_insert_node_splits_edge():
    oracle = FakeOracle().script(
        OracleTask.ENHANCE_LOGIC,
        _insert("A", "B", "M"),
        _strengthen("A", "M", "certainty", "first half"),
        _strengthen("M", "B", "uniqueness", "second half"),
    )

    result = await LogicEnhancer(oracle).enhance(chain("A", "B"), "A", "B")

    subgraph = result.subgraph
    assert subgraph.get_edge("A", "B") is None
    assert subgraph.get_edge("A", "M").certainty == ["first half"]
    assert subgraph.get_edge("M", "B").uniqueness == ["second half"]
    assert [e.cause.argument for e in subgraph.get_node("B").causes] == ["M"]
    assert result.actions[0].insert_node.intermediate_argument == "M"


@pytest.mark.parametrize("intermediate", ["A", "B"])
def test_insert_existing_argument_leaves_subgraph_unchanged(intermediate):
    subgraph = seed_subgraph("A", "B")
    before = structure(subgraph)
    action = InsertNode(
        cause_argument="A", effect_argument="B", intermediate_argument=intermediate,
    )

    with pytest.raises(DuplicateNodeError):
        apply_insert_node(subgraph, action)

    assert structure(subgraph) == before


@pytest.mark.asyncio
async def test_insert_endpoint_as_intermediate_aborts_loop():
    oracle = FakeOracle().script(
        OracleTask.ENHANCE_LOGIC,
        _insert("A", "B", "B"),
        _strengthen("A", "B", "certainty", "x"),
        _strengthen("A", "B", "certainty", "x"),
    )
    with pytest.raises(DuplicateNodeError):
        await LogicEnhancer(oracle).enhance(chain("A", "B"), "A", "B")
    assert len(oracle.calls) == 1


@pytest.mark.asyncio
async def test_unknown_enhancement_type_raises():
    oracle = FakeOracle().script(
        OracleTask.ENHANCE_LOGIC, _strengthen("A", "B", "importance"),
    )
    with pytest.raises(UnrecognizedEnhancementTypeError):
        await LogicEnhancer(oracle).enhance(chain("A", "B"), "A", "B")


@pytest.mark.asyncio
async def test_strengthen_missing_edge_raises():
    oracle = FakeOracle().script(OracleTask.ENHANCE_LOGIC, _strengthen("B", "A"))
    with pytest.raises(EdgeNotFoundError):
        await LogicEnhancer(oracle).enhance(chain("A", "B"), "A", "B")


@pytest.mark.asyncio
async def test_insert_between_unknown_nodes_raises():
    oracle = FakeOracle().script(OracleTask.ENHANCE_LOGIC, _insert("A", "Z", "M"))
    with pytest.raises(DanglingEndpointError):
        await LogicEnhancer(oracle).enhance(chain("A", "B"), "A", "B")


@pytest.mark.asyncio
async def test_insert_on_removed_edge_raises():
    oracle = FakeOracle().script(
        OracleTask.ENHANCE_LOGIC,
        _insert("A", "B", "M"),
        _insert("A", "B", "N"),
    )
    with pytest.raises(EdgeNotFoundError):
        await LogicEnhancer(oracle).enhance(chain("A", "B"), "A", "B")


@pytest.mark.asyncio
async def test_oracle_failure_mid_loop_propagates():
    oracle = FakeOracle().script(
        OracleTask.ENHANCE_LOGIC,
        _strengthen("A", "B"),
        OracleCallError("rate limited", "rate_limit"),
    )
    with pytest.raises(OracleCallError):
        await LogicEnhancer(oracle).enhance(chain("A", "B"), "A", "B")
    assert len(oracle.calls) == 2
