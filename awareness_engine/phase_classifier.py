"""Rule-based awareness phase classification.

Texts are scored against a static trigger-phrase lexicon per phase (Dutch and
English). The five phases follow the buying journey:

Unaware -> Problem Aware -> Solution Aware -> Product Aware -> Most Aware
"""

import logging
import time
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from .models import AwarenessPhase, PhaseDistribution
from .text import FieldAccessor, as_item_list, field_getter, item_text

UNAWARE = "unaware"
PROBLEM_AWARE = "problem_aware"
SOLUTION_AWARE = "solution_aware"
PRODUCT_AWARE = "product_aware"
MOST_AWARE = "most_aware"

# Within a phase no entry may contain another, or one phrase would score twice.
AWARENESS_PATTERNS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    UNAWARE: (
        # general curiosity, no problem or solution in sight
        "wat is", "hoe werkt", "waarom zou ik", "is dit normaal", "algemene informatie", "tips voor",
        "advies over", "beste manieren om", "hoe kan ik verbeteren", "wat betekent",
        "what is", "what are", "how does", "why would i", "is it normal", "general information",
        "tips for", "advice on", "what does", "meaning of",
    ),
    PROBLEM_AWARE: (
        "probleem met", "last van", "moeite met", "frustratie", "irritatie", "uitdaging",
        "moeilijk om", "niet tevreden met", "klacht over", "pijn", "stress", "vermoeidheid",
        "zorgen over", "angst voor", "hoe los ik op", "wat te doen tegen", "hulp nodig met",
        "problem with", "struggling with", "suffering from", "frustrated", "frustrating", "annoying",
        "hard to", "not happy with", "complaint about", "painful", "worried about", "afraid of",
        "need help with", "how do i fix", "what to do about",
    ),
    SOLUTION_AWARE: (
        "oplossing voor", "manieren om", "methoden voor", "technieken voor", "strategieën voor",
        "alternatieven voor", "opties voor", "aanpak voor", "behandeling voor", "remedie voor",
        "beste manier om", "effectieve manier om", "vergelijking van", "voor- en nadelen van",
        "werkt dit voor", "helpt dit bij",
        "solution for", "ways to", "methods for", "techniques for", "strategies for",
        "alternatives to", "options for", "approach to", "treatment for", "remedy for",
        "best way to", "pros and cons", "does this work for",
    ),
    PRODUCT_AWARE: (
        "review van", "ervaring met", "mening over", "feedback over", "kwaliteit van", "prijs van",
        "waarde van", "functies van", "specificaties van", "verschil tussen", "beter dan", "versus",
        " vs ", "vs.", "aanbeveling voor", "is het de moeite waard", "zou ik moeten kopen",
        "is dit een goede keuze",
        "review of", "experience with", "opinion on", "quality of", "price of", "features of",
        "difference between", "better than", "comparison of", "is it worth", "should i buy",
        "recommendation for",
    ),
    MOST_AWARE: (
        # purchase intent and post-purchase practicalities
        "waar te koop", "beste prijs voor", "korting op", "met korting", "aanbieding voor",
        "coupon voor", "kopen", "bestellen", "aanschaffen", "levering van", "verzending van",
        "garantie op", "retourneren", "klantenservice voor", "installatie van", "setup van",
        "handleiding voor", "instructies voor", "hoe te gebruiken",
        "where to buy", "where can i buy", "discount", "coupon code", "promo code", "order now",
        "place an order", "buy now", "shipping", "warranty", "return policy", "customer service",
        "user manual", "how to use",
    ),
})

# Ordered by ordinal; classification scans in this order.
AWARENESS_PHASES: Tuple[AwarenessPhase, ...] = (
    AwarenessPhase(
        id=UNAWARE, name="Unaware", ordinal=0,
        description="No awareness of the problem yet",
        lexicon=AWARENESS_PATTERNS[UNAWARE],
    ),
    AwarenessPhase(
        id=PROBLEM_AWARE, name="Problem Aware", ordinal=1,
        description="Aware of the problem, not of solutions",
        lexicon=AWARENESS_PATTERNS[PROBLEM_AWARE],
    ),
    AwarenessPhase(
        id=SOLUTION_AWARE, name="Solution Aware", ordinal=2,
        description="Aware of solution types, not of specific products",
        lexicon=AWARENESS_PATTERNS[SOLUTION_AWARE],
    ),
    AwarenessPhase(
        id=PRODUCT_AWARE, name="Product Aware", ordinal=3,
        description="Aware of specific products, not yet convinced",
        lexicon=AWARENESS_PATTERNS[PRODUCT_AWARE],
    ),
    AwarenessPhase(
        id=MOST_AWARE, name="Most Aware", ordinal=4,
        description="Fully aware and ready to buy",
        lexicon=AWARENESS_PATTERNS[MOST_AWARE],
    ),
)

PHASES_BY_ID: Mapping[str, AwarenessPhase] = MappingProxyType({p.id: p for p in AWARENESS_PHASES})
PHASE_IDS: Tuple[str, ...] = tuple(p.id for p in AWARENESS_PHASES)


def score_awareness_phases(text: Any) -> Dict[str, int]:
    """Return ``phase_id -> number of lexicon entries found in *text*``."""
    scores = {phase.id: 0 for phase in AWARENESS_PHASES}
    if not text or not isinstance(text, str):
        return scores
    lower_text = text.lower()
    for phase in AWARENESS_PHASES:
        scores[phase.id] = sum(1 for pattern in phase.lexicon if pattern in lower_text)
    return scores


def pick_dominant_phase(scores: Mapping[str, int]) -> str:
    """Highest-scoring phase id; ties go to the earliest phase in ordinal order.

    The best phase is only replaced on a strictly greater score, so with all
    scores at zero the result is ``unaware``.
    """
    best_id, best_score = UNAWARE, 0
    for phase_id in PHASE_IDS:
        score = scores.get(phase_id, 0)
        if score > best_score:
            best_id, best_score = phase_id, score
    return best_id


def classify_awareness_phase(text: Any) -> str:
    """Classify *text* into one of the five awareness phase ids.

    Empty or non-string input is ``unaware``. On equal scores the phase with
    the lower ordinal wins, e.g. a text that hits one Unaware and one Most
    Aware trigger is classified ``unaware``.
    """
    if not text or not isinstance(text, str):
        return UNAWARE
    return pick_dominant_phase(score_awareness_phases(text))


def calculate_phase_distribution(counts: Mapping[str, int]) -> List[PhaseDistribution]:
    """Turn ``phase_id -> count`` into one :class:`PhaseDistribution` per phase.

    Percentages are relative to the summed counts and all 0 when that sum is 0.
    The result is ordered by phase ordinal.
    """
    total = sum(max(0, int(counts.get(phase_id, 0))) for phase_id in PHASE_IDS)
    distribution = []
    for phase in AWARENESS_PHASES:
        count = max(0, int(counts.get(phase.id, 0)))
        distribution.append(
            PhaseDistribution(
                phase_id=phase.id,
                name=phase.name,
                count=count,
                percentage=count / total * 100 if total > 0 else 0.0,
            )
        )
    return distribution


class AwarenessPhaseClassifier:
    """Batch facade over the lexicon rules with logging."""

    def __init__(self):
        """Initialize the awareness phase classifier."""
        self.logger = logging.getLogger(__name__)
        self.phases = AWARENESS_PHASES

    def classify(self, text: Any) -> str:
        return classify_awareness_phase(text)

    def score(self, text: Any) -> Dict[str, int]:
        return score_awareness_phases(text)

    def classify_items(self, items: Any, text_field: FieldAccessor = "text") -> Dict[str, List[Any]]:
        """Group *items* by the phase of their text.

        Args:
            items: Records carrying free text (dicts, models, ...)
            text_field: Field name or accessor for the text

        Returns:
            Dict with all five phase ids as keys, each mapping to the original
            items classified into that phase (input order preserved)
        """
        grouped: Dict[str, List[Any]] = {phase.id: [] for phase in self.phases}
        corpus = as_item_list(items)
        if not corpus:
            return grouped

        start_time = time.time()
        getter = field_getter(text_field)
        for item in corpus:
            grouped[classify_awareness_phase(item_text(item, getter))].append(item)

        elapsed = time.time() - start_time
        self.logger.info(f"Classified {len(corpus)} items into awareness phases in {elapsed:.1f}s")
        return grouped

    def calculate_distribution(self, grouped: Mapping[str, List[Any]]) -> List[PhaseDistribution]:
        """Distribution of grouped items (output of :meth:`classify_items`)."""
        if not grouped:
            return calculate_phase_distribution({})
        return calculate_phase_distribution({phase.id: len(grouped.get(phase.id) or []) for phase in self.phases})
