"""Domain Types — enums and constants shared across the graph engine and services.

Invariants:
    - Every discriminator the oracle can emit is encoded as an Enum — no raw string matching
    - Enum values equal the wire strings of the graph document and oracle schemas
    - ENHANCEMENT_ITERATIONS is exactly 3

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Argument text is a NewType over str: the text itself is the node identity
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Argument = NewType("Argument", str)


# ─── Rebuttal Taxonomy ───────────────────────────────────────────

class RebuttalKind(str, Enum):
    """Discriminator of a rebuttal item found in a rebuttal document."""
    EDGE_REBUTTAL = "edge_rebuttal"
    NODE_REBUTTAL = "node_rebuttal"
    COUNTER_ARGUMENT = "counter_argument"
    TURN_ARGUMENT = "turn_argument"


class NodeRebuttalType(str, Enum):
    """Which node support dimension a rebuttal attacks."""
    IMPORTANCE = "importance"
    UNIQUENESS = "uniqueness"


class EdgeRebuttalType(str, Enum):
    """Which edge support dimension a rebuttal attacks."""
    CERTAINTY = "certainty"
    UNIQUENESS = "uniqueness"


# ─── Enhancement ─────────────────────────────────────────────────

class EnhancementType(str, Enum):
    """Edge list a strengthen_edge action appends to."""
    CERTAINTY = "certainty"
    UNIQUENESS = "uniqueness"


ENHANCEMENT_ITERATIONS = 3


# ─── Annotations ─────────────────────────────────────────────────

class AnnotationTarget(str, Enum):
    NODE = "node"
    EDGE = "edge"


class NodeAnnotationType(str, Enum):
    """ARGUMENT restates the node itself and is never applied."""
    ARGUMENT = "argument"
    IMPORTANCE = "importance"
    UNIQUENESS = "uniqueness"
    IMPORTANCE_REBUTTAL = "importance_rebuttal"
    UNIQUENESS_REBUTTAL = "uniqueness_rebuttal"


class EdgeAnnotationType(str, Enum):
    CERTAINTY = "certainty"
    UNIQUENESS = "uniqueness"
    CERTAINTY_REBUTTAL = "certainty_rebuttal"
    UNIQUENESS_REBUTTAL = "uniqueness_rebuttal"


# ─── Oracle Tasks ────────────────────────────────────────────────

class OracleTask(str, Enum):
    """Every structured question the services put to the oracle."""
    FIND_REBUTTALS = "find_rebuttals"
    FIND_REBUTTAL_CAUSES = "find_rebuttal_causes"
    FIND_NEW_ARGUMENTS = "find_new_arguments"
    CREATE_ANNOTATIONS = "create_annotations"
    ENHANCE_LOGIC = "enhance_logic"
    FIND_EVIDENCE_REBUTTALS = "find_evidence_rebuttals"
    FIND_PRODUCT_FIT_REBUTTALS = "find_product_fit_rebuttals"
    SUGGEST_TODOS = "suggest_todos"
