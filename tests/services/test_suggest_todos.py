"""TODO suggestion tests: one call, typed items, graphs untouched."""

import pytest

from argument_forge.core.domain_types import OracleTask
from argument_forge.core.errors import OracleCallError
from argument_forge.services.suggest_todos import TodoSuggester
from tests.fake_oracle import FakeOracle
from tests.graph_fixtures import chain, structure


@pytest.mark.asyncio
async def test_suggest_returns_todo_items():
    context, subgraph = chain("A", "B", "C"), chain("A", "B")
    before = (structure(context), structure(subgraph))
    oracle = FakeOracle().script(OracleTask.SUGGEST_TODOS, {"todo": [
        {"title": "Cite a source for A->B", "strengthen_edge": {
            "cause_argument": "A", "effect_argument": "B",
            "enhancement_type": "certainty", "content": "Find a study",
        }},
        {"title": "Explain why B matters", "strengthen_node": {
            "target_argument": "B", "content": "Quantify B",
        }},
    ]})

    todo = await TodoSuggester(oracle).suggest(context, subgraph)

    assert [t.title for t in todo] == ["Cite a source for A->B", "Explain why B matters"]
    assert todo[1].strengthen_node.target_argument == "B"
    assert (structure(context), structure(subgraph)) == before
    assert len(oracle.calls) == 1


@pytest.mark.asyncio
async def test_suggest_failure_propagates():
    oracle = FakeOracle().script(
        OracleTask.SUGGEST_TODOS, OracleCallError("down", "connection_error"),
    )
    with pytest.raises(OracleCallError):
        await TodoSuggester(oracle).suggest(chain("A"), chain("A"))
