"""TODO Suggestions — one oracle call listing follow-up edits for a subgraph.

Invariants:
    - Non-mutating: neither graph is changed
    - Exactly one suggest_todos oracle call; its failure propagates
"""

import logging

from argument_forge.core.debate_graph import DebateGraph
from argument_forge.core.domain_types import OracleTask
from argument_forge.core.graph_codec import graph_to_json
from argument_forge.schemas.oracle_responses import EnhancementTodo, TodoSuggestions
from argument_forge.services.oracle import Oracle

logger = logging.getLogger(__name__)


class TodoSuggester:

    def __init__(self, oracle: Oracle):
        self.oracle = oracle

    async def suggest(
        self, context_graph: DebateGraph, subgraph: DebateGraph,
    ) -> list[EnhancementTodo]:
        answer = await self.oracle.ask(
            OracleTask.SUGGEST_TODOS,
            {
                "debate_graph": graph_to_json(context_graph),
                "subgraph": graph_to_json(subgraph),
            },
            TodoSuggestions,
        )
        logger.info(f"Suggested {len(answer.todo)} enhancement TODOs")
        return answer.todo
