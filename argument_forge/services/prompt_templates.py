"""Prompt Templates — one immutable template per oracle task.

Invariants:
    - Every OracleTask has exactly one template
    - render() fails with KeyError naming the missing input; extra inputs are ignored
    - Inputs are JSON fragments or raw rebuttal text, substituted verbatim

Design Decisions:
    - Module-level constants, frozen dataclass: loaded once, never mutated
    - str.format over a template engine: substitution only, no logic in prompts
    - Instructions are deliberately short; the response schema carries the structure
"""

from dataclasses import dataclass
from types import MappingProxyType

from argument_forge.core.domain_types import OracleTask

_ROLE = (
    "You analyse competitive debate arguments represented as a causal graph. "
    "Nodes are claims identified by their exact text; an edge means the cause "
    "claim leads to the effect claim. Always refer to existing nodes by their "
    "exact argument text. Answer only by calling the provided tool."
)


@dataclass(frozen=True)
class PromptTemplate:
    system: str
    user: str
    inputs: tuple[str, ...]

    def render(self, values: dict[str, str]) -> str:
        missing = [name for name in self.inputs if name not in values]
        if missing:
            raise KeyError(f"missing template inputs: {', '.join(missing)}")
        return self.user.format(**{name: values[name] for name in self.inputs})


_TEMPLATES = {
    OracleTask.FIND_REBUTTALS: PromptTemplate(
        system=_ROLE,
        user=(
            "Debate graph:\n{debate_graph}\n\n"
            "Rebuttal document:\n{rebuttal}\n\n"
            "List every rebuttal the document makes against the graph. Classify "
            "each as edge_rebuttal (attacks certainty or uniqueness of a link), "
            "node_rebuttal (attacks importance or uniqueness of a claim), "
            "counter_argument (asserts the opposite of a claim) or turn_argument "
            "(concedes part of the chain and redirects it to the opposite conclusion)."
        ),
        inputs=("debate_graph", "rebuttal"),
    ),
    OracleTask.FIND_REBUTTAL_CAUSES: PromptTemplate(
        system=_ROLE,
        user=(
            "Debate graph:\n{debate_graph}\n\n"
            "Rebuttal document:\n{rebuttal}\n\n"
            "Target argument:\n{argument}\n\n"
            "List the claims the rebuttal document gives as causes of the target argument."
        ),
        inputs=("debate_graph", "rebuttal", "argument"),
    ),
    OracleTask.FIND_NEW_ARGUMENTS: PromptTemplate(
        system=_ROLE,
        user=(
            "Debate graph:\n{debate_graph}\n\n"
            "Argument and candidate causes:\n{argument_and_causes}\n\n"
            "Return in new_nodes the candidates that are not yet nodes of the graph, "
            "and in used_causes every candidate (new or existing, exact text) that "
            "should be linked as a cause of the argument."
        ),
        inputs=("debate_graph", "argument_and_causes"),
    ),
    OracleTask.CREATE_ANNOTATIONS: PromptTemplate(
        system=_ROLE,
        user=(
            "Debate graph:\n{debate_graph}\n\n"
            "Full rebuttal document:\n{rebuttal}\n\n"
            "Paragraph under analysis:\n{paragraph}\n\n"
            "Annotate the graph elements this paragraph supports or attacks: "
            "importance/uniqueness of nodes, certainty/uniqueness of edges, or "
            "rebuttals to either."
        ),
        inputs=("debate_graph", "rebuttal", "paragraph"),
    ),
    OracleTask.ENHANCE_LOGIC: PromptTemplate(
        system=_ROLE,
        user=(
            "Full debate graph (context):\n{debate_graph}\n\n"
            "Subgraph being strengthened:\n{subgraph}\n\n"
            "Propose exactly one action that makes the subgraph's reasoning more "
            "convincing: insert_node to split a link with an intermediate claim, "
            "or strengthen_edge to add certainty or uniqueness evidence to a link."
        ),
        inputs=("debate_graph", "subgraph"),
    ),
    OracleTask.FIND_EVIDENCE_REBUTTALS: PromptTemplate(
        system=_ROLE,
        user=(
            "Debate graph:\n{debate_graph}\n\n"
            "Cause node:\n{cause_node}\n\n"
            "Effect node:\n{effect_node}\n\n"
            "Edge:\n{edge}\n\n"
            "Propose evidence-based rebuttals against the certainty or the "
            "uniqueness of this edge."
        ),
        inputs=("debate_graph", "cause_node", "effect_node", "edge"),
    ),
    OracleTask.FIND_PRODUCT_FIT_REBUTTALS: PromptTemplate(
        system=_ROLE,
        user=(
            "Subgraph:\n{subgraph}\n\n"
            "Propose rebuttals against the importance of its claims: reasons the "
            "status quo already achieves them, and reasons the affirmative plan "
            "does not. Name each target by its exact argument text."
        ),
        inputs=("subgraph",),
    ),
    OracleTask.SUGGEST_TODOS: PromptTemplate(
        system=_ROLE,
        user=(
            "Full debate graph (context):\n{debate_graph}\n\n"
            "Subgraph to improve:\n{subgraph}\n\n"
            "Suggest concrete follow-up tasks that would strengthen the subgraph, "
            "each with a short title and one proposed edit."
        ),
        inputs=("debate_graph", "subgraph"),
    ),
}

DEFAULT_TEMPLATES = MappingProxyType(_TEMPLATES)
