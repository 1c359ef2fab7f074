# src/analysis/counter_content.py — v1
"""Counter-content selection by topic keywords.

Rules are evaluated in order over the lower-cased submitted text; the
first rule with a matching keyword wins. The last rule has no keywords
and always matches.
"""

from __future__ import annotations

from dataclasses import dataclass

from truthgen.core.models import CounterContent


@dataclass(frozen=True)
class CounterContentRule:
    """Keyword set → counter-content template."""

    topic: str
    keywords: tuple[str, ...]
    content: CounterContent

    def matches(self, lowered_text: str) -> bool:
        if not self.keywords:
            return True
        return any(keyword in lowered_text for keyword in self.keywords)


DEFAULT_RULE = CounterContentRule(
    topic="default",
    keywords=(),
    content=CounterContent(
        fact_check=(
            "This claim lacks credible evidence. Always verify information through "
            "reputable sources and fact-checking organizations."
        ),
        visual_content="Guide to identifying reliable sources and fact-checking methods",
        short_form=(
            "🔍 FACT-CHECK: Verify before you share! Check multiple reputable sources "
            "for accurate information. #FactCheck"
        ),
    ),
)

COUNTER_CONTENT_RULES: tuple[CounterContentRule, ...] = (
    CounterContentRule(
        topic="climate",
        keywords=("climate", "global warming"),
        content=CounterContent(
            fact_check=(
                "According to NASA and 97% of climate scientists, human activities are "
                "the primary cause of recent climate change. This is supported by "
                "decades of peer-reviewed research."
            ),
            visual_content=(
                "Interactive chart showing global temperature trends and scientific consensus"
            ),
            short_form=(
                "🌍 FACT: Climate change is real and human-caused. 97% of scientists agree "
                "based on solid evidence. #ClimateScience #FactsFirst"
            ),
        ),
    ),
    CounterContentRule(
        topic="vaccines",
        keywords=("vaccine", "vaccination", "immunization"),
        content=CounterContent(
            fact_check=(
                "Approved vaccines pass multi-phase clinical trials and continuous safety "
                "monitoring by health agencies such as the WHO, CDC and EMA."
            ),
            visual_content="Timeline of vaccine trial phases and post-approval safety monitoring",
            short_form=(
                "💉 FACT: Vaccines are tested in large clinical trials and monitored after "
                "approval. Check official health agencies. #VaccineFacts"
            ),
        ),
    ),
    CounterContentRule(
        topic="elections",
        keywords=("election", "ballot", "voter fraud", "rigged vote"),
        content=CounterContent(
            fact_check=(
                "Election procedures and results are published by official electoral "
                "authorities and reviewed by independent observers and courts."
            ),
            visual_content="Flowchart of ballot handling, counting and audit steps",
            short_form=(
                "🗳️ FACT-CHECK: Get election information from official electoral "
                "authorities, not viral posts. #ElectionFacts"
            ),
        ),
    ),
    DEFAULT_RULE,
)


def select_rule(
    text: str, rules: tuple[CounterContentRule, ...] = COUNTER_CONTENT_RULES,
) -> CounterContentRule:
    """Return the first rule matching ``text``."""
    lowered = text.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule
    return DEFAULT_RULE


def select_counter_content(
    text: str, rules: tuple[CounterContentRule, ...] = COUNTER_CONTENT_RULES,
) -> CounterContent:
    """Counter-content for the first rule matching ``text``."""
    return select_rule(text, rules).content
