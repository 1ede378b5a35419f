"""Rebuttal Proposal Tests — non-mutating aggregation, per-edge tolerance, commit.

Invariants:
    - Neither the context graph nor the subgraph changes during propose()
    - One evidence call per subgraph edge, one product-fit call overall
    - A per-edge OracleCallError is skipped; a product-fit failure is fatal
    - Items targeting unknown nodes or carrying unknown types are skipped
    - commit_proposals installs rebuttal nodes and records, skipping unresolved targets
"""

import pytest

from argument_forge.core.domain_types import OracleTask
from argument_forge.core.errors import OracleCallError
from argument_forge.services.propose_rebuttals import (
    RebuttalProposal,
    RebuttalProposer,
    commit_proposals,
)
from tests.fake_oracle import FakeOracle
from tests.graph_fixtures import chain, structure

NO_PRODUCT_FIT = {"status_quo": [], "affirmative_plan": []}


def _evidence(*pairs):
    return {"rebuttals": [{"rebuttal_type": t, "rebuttal": r} for t, r in pairs]}


# -- propose -------------------------------------------------------------------


@pytest.mark.asyncio
async def test_propose_collects_edge_and_importance_rebuttals():
    context = chain("A", "B", "C", "D")
    subgraph = chain("A", "B", "C")
    before = (structure(context), structure(subgraph))
    oracle = FakeOracle()
    oracle.script(
        OracleTask.FIND_EVIDENCE_REBUTTALS,
        _evidence(("certainty", "Study is old")),
        _evidence(("uniqueness", "Happens anyway")),
    )
    oracle.script(OracleTask.FIND_PRODUCT_FIT_REBUTTALS, {
        "status_quo": [{"target_argument": "C", "rebuttal": "C is minor"}],
        "affirmative_plan": [{"target_argument": "A", "rebuttal": "A costs too much"}],
    })

    report = await RebuttalProposer(oracle).propose(context, subgraph)

    assert (structure(context), structure(subgraph)) == before
    assert report.edges_scanned == 2
    assert report.proposals == [
        RebuttalProposal("certainty", "Study is old",
                         target_cause_argument="A", target_effect_argument="B"),
        RebuttalProposal("uniqueness", "Happens anyway",
                         target_cause_argument="B", target_effect_argument="C"),
        RebuttalProposal("importance", "C is minor", target_argument="C"),
        RebuttalProposal("importance", "A costs too much", target_argument="A"),
    ]


@pytest.mark.asyncio
async def test_evidence_inputs_carry_edge_fragments():
    oracle = FakeOracle()
    oracle.script(OracleTask.FIND_EVIDENCE_REBUTTALS, _evidence())
    oracle.script(OracleTask.FIND_PRODUCT_FIT_REBUTTALS, NO_PRODUCT_FIT)

    await RebuttalProposer(oracle).propose(chain("A", "B"), chain("A", "B"))

    [inputs] = oracle.calls_for(OracleTask.FIND_EVIDENCE_REBUTTALS)
    assert '"argument": "A"' in inputs["cause_node"]
    assert '"argument": "B"' in inputs["effect_node"]
    assert '"cause": "A"' in inputs["edge"]


@pytest.mark.asyncio
async def test_failed_edge_is_skipped():
    oracle = FakeOracle()
    oracle.script(
        OracleTask.FIND_EVIDENCE_REBUTTALS,
        OracleCallError("timed out", "timeout"),
        _evidence(("certainty", "Weak link")),
    )
    oracle.script(OracleTask.FIND_PRODUCT_FIT_REBUTTALS, NO_PRODUCT_FIT)

    report = await RebuttalProposer(oracle).propose(chain("A"), chain("A", "B", "C"))

    assert report.edges_failed == 1
    assert [p.target_cause_argument for p in report.proposals] == ["B"]


@pytest.mark.asyncio
async def test_product_fit_failure_is_fatal():
    oracle = FakeOracle()
    oracle.script(OracleTask.FIND_EVIDENCE_REBUTTALS, _evidence())
    oracle.script(
        OracleTask.FIND_PRODUCT_FIT_REBUTTALS, OracleCallError("refused", "refusal"),
    )
    with pytest.raises(OracleCallError):
        await RebuttalProposer(oracle).propose(chain("A"), chain("A", "B"))


@pytest.mark.asyncio
async def test_unknown_targets_and_types_are_skipped():
    oracle = FakeOracle()
    oracle.script(
        OracleTask.FIND_EVIDENCE_REBUTTALS,
        _evidence(("importance", "wrong kind"), ("certainty", "kept")),
    )
    oracle.script(OracleTask.FIND_PRODUCT_FIT_REBUTTALS, {
        "status_quo": [{"target_argument": "Unlisted claim", "rebuttal": "x"}],
        "affirmative_plan": [],
    })

    report = await RebuttalProposer(oracle).propose(chain("A"), chain("A", "B"))

    assert report.items_skipped == 2
    assert [p.rebuttal for p in report.proposals] == ["kept"]


@pytest.mark.asyncio
async def test_edgeless_subgraph_makes_only_product_fit_call():
    oracle = FakeOracle()
    oracle.script(OracleTask.FIND_PRODUCT_FIT_REBUTTALS, NO_PRODUCT_FIT)

    report = await RebuttalProposer(oracle).propose(chain("A"), chain("A"))

    assert report.edges_scanned == 0
    assert [task for task, _ in oracle.calls] == [OracleTask.FIND_PRODUCT_FIT_REBUTTALS]


# -- commit --------------------------------------------------------------------


def test_commit_installs_nodes_and_records():
    graph = chain("A", "B")
    outcome = commit_proposals(graph, [
        RebuttalProposal("certainty", "Weak link",
                         target_cause_argument="A", target_effect_argument="B"),
        RebuttalProposal("importance", "B is minor", target_argument="B"),
    ])

    assert outcome.committed == 2
    assert graph.get_node("Weak link").is_rebuttal is True
    assert graph.edge_rebuttals[0].target is graph.get_edge("A", "B")
    assert graph.node_rebuttals[0].rebuttal is graph.get_node("B is minor")


def test_commit_skips_unresolved_and_empty():
    graph = chain("A", "B")
    outcome = commit_proposals(graph, [
        RebuttalProposal("importance", "x", target_argument="Unlisted claim"),
        RebuttalProposal("certainty", "y",
                         target_cause_argument="B", target_effect_argument="A"),
        RebuttalProposal("importance", "   ", target_argument="A"),
    ])

    assert outcome.skipped == 3
    assert outcome.committed == 0
    assert graph.node_count == 2


def test_commit_reuses_existing_rebuttal_node():
    graph = chain("A", "B")
    commit_proposals(graph, [
        RebuttalProposal("importance", "Same", target_argument="A"),
        RebuttalProposal("importance", "Same", target_argument="B"),
    ])
    assert graph.node_count == 3
    assert len(graph.node_rebuttals) == 2
