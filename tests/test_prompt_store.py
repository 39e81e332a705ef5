from __future__ import annotations

import pytest

from brand_investigator.services.prompt_store import render_prompt


def test_render_prompt_substitutes_template_values():
    prompt = render_prompt(
        "analysis.validate_inputs",
        brand_name="Acme Co",
        product_category="toothbrush",
    )
    assert 'Brand Name: "Acme Co"' in prompt
    assert '"isValid": boolean' in prompt
    assert "\n" in prompt


def test_render_prompt_raises_for_unknown_key():
    with pytest.raises(KeyError):
        render_prompt("missing.prompt.key")


def test_render_prompt_raises_for_missing_value():
    with pytest.raises(KeyError, match="product_category"):
        render_prompt("analysis.validate_inputs", brand_name="Acme")
