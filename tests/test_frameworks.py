"""Tests for codecrafter/frameworks.py."""

import dataclasses

import pytest

from codecrafter import frameworks
from codecrafter.errors import UnknownFramework


def test_catalog_has_eight_targets_in_display_order():
    ids = [entry.id for entry in frameworks.all_entries()]
    assert ids == [
        "html-css", "html-tailwind", "html-bootstrap",
        "react-js", "react-tailwind", "react-bootstrap",
        "next-js", "angular",
    ]


def test_lookup_unknown_raises():
    with pytest.raises(UnknownFramework) as exc_info:
        frameworks.lookup("svelte")
    assert exc_info.value.framework_id == "svelte"


def test_resolve_falls_back_to_html_css():
    assert frameworks.resolve("svelte").id == "html-css"
    assert frameworks.resolve("angular").id == "angular"


@pytest.mark.parametrize("framework_id", ["html-css", "html-tailwind", "html-bootstrap"])
def test_markup_targets_are_static(framework_id):
    assert frameworks.lookup(framework_id).strategy == "static"


@pytest.mark.parametrize("framework_id", ["react-js", "react-tailwind", "react-bootstrap", "next-js", "angular"])
def test_component_targets_are_dynamic(framework_id):
    assert frameworks.lookup(framework_id).strategy == "dynamic"


def test_entries_are_immutable():
    entry = frameworks.lookup("react-js")
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.label = "Preact"


def test_lookup_returns_shared_reference():
    assert frameworks.lookup("next-js") is frameworks.lookup("next-js")
