# tests/unit/analysis/test_counter_content.py — v1
"""Tests for analysis/counter_content.py — keyword rule selection."""

from __future__ import annotations

from truthgen.analysis.counter_content import (
    COUNTER_CONTENT_RULES,
    DEFAULT_RULE,
    CounterContentRule,
    select_counter_content,
    select_rule,
)
from truthgen.core.models import CounterContent


class TestSelectRule:
    def test_climate(self):
        assert select_rule("Climate change is a hoax").topic == "climate"

    def test_global_warming(self):
        assert select_rule("GLOBAL WARMING stopped in 1998").topic == "climate"

    def test_vaccines(self):
        assert select_rule("The new vaccine alters your DNA").topic == "vaccines"

    def test_elections(self):
        assert select_rule("Millions of fake ballots were counted").topic == "elections"

    def test_default(self):
        assert select_rule("The Earth is flat") is DEFAULT_RULE

    def test_empty_text(self):
        assert select_rule("") is DEFAULT_RULE

    def test_first_match_wins(self):
        text = "Climate activists want a vaccine mandate"
        assert select_rule(text).topic == "climate"

    def test_default_is_last(self):
        assert COUNTER_CONTENT_RULES[-1] is DEFAULT_RULE

    def test_custom_rules(self):
        custom = CounterContentRule(
            topic="moon",
            keywords=("moon landing",),
            content=CounterContent(
                fact_check="Apollo retroreflectors are still used today.",
                visual_content="Photo of a retroreflector",
                short_form="The Moon landings happened. #Apollo",
            ),
        )
        rules = (custom, DEFAULT_RULE)
        assert select_rule("The moon landing was staged", rules) is custom
        assert select_rule("Anything else", rules) is DEFAULT_RULE


def test_select_counter_content_returns_template():
    content = select_counter_content("climate")
    assert content.short_form.startswith("🌍 FACT")
    assert content.visual_content == (
        "Interactive chart showing global temperature trends and scientific consensus"
    )


def test_default_template_text():
    content = select_counter_content("unrelated")
    assert content.visual_content == (
        "Guide to identifying reliable sources and fact-checking methods"
    )
    assert "#FactCheck" in content.short_form
