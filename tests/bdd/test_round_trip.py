"""Behaviour tests for the canonical text round trip.

The scenario in ``round_trip.feature`` renders the sample Docker guide from
``tests/conftest.py``, reads it back and checks that nothing changed.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, scenarios, then, when

from guidetree import read_document, render_text, validate

if typ.TYPE_CHECKING:
    from guidetree import Document

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "round_trip.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("the sample Docker guide")
def given_sample(sample_document: Document, scenario_state: dict[str, object]) -> None:
    scenario_state["original"] = sample_document


@when("the guide is rendered and read back")
def when_round_tripped(scenario_state: dict[str, object]) -> None:
    original = typ.cast("Document", scenario_state["original"])
    text = render_text(original)
    scenario_state["text"] = text
    scenario_state["restored"] = read_document(text)


@then("the documents are equal")
def then_equal(scenario_state: dict[str, object]) -> None:
    assert scenario_state["restored"] == scenario_state["original"], (
        "round trip should produce a structurally equal document"
    )


@then("rendering twice gives identical text")
def then_deterministic(scenario_state: dict[str, object]) -> None:
    restored = typ.cast("Document", scenario_state["restored"])
    assert render_text(restored) == scenario_state["text"], (
        "rendering should be byte-identical for equal documents"
    )


@then("the validation report is empty")
def then_valid(scenario_state: dict[str, object]) -> None:
    restored = typ.cast("Document", scenario_state["restored"])
    assert validate(restored) == [], "a constructed document should validate cleanly"
