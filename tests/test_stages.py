"""Tests for stage descriptors and query construction."""
from brand_investigator.agents.stages import (
    STAGE_TITLES,
    build_stages,
    get_stage,
    high_priority_stages,
)


def test_stage_order_and_keys():
    stages = build_stages("Acme Co", "toothbrush")
    assert [s.key for s in stages] == ["companyName", "founders", "imports", "sourcing"]
    assert [s.title for s in stages] == list(STAGE_TITLES.values())


def test_build_stages_is_deterministic():
    assert build_stages("Acme Co", "toothbrush") == build_stages("Acme Co", "toothbrush")


def test_queries_quote_brand_and_category():
    stages = {s.key: s for s in build_stages("Acme Co", "toothbrush")}
    assert stages["companyName"].query.startswith('"Acme Co" "private limited"')
    assert "site:zaubacorp.com" in stages["companyName"].query
    assert '"founded by"' in stages["founders"].query
    assert '"HS code"' in stages["imports"].query
    assert stages["sourcing"].query.startswith('"Acme Co" "toothbrush" site:alibaba.com')
    assert "toothbrush" in stages["sourcing"].description


def test_priorities():
    assert [s.key for s in high_priority_stages("Acme", "mugs")] == ["companyName", "imports", "sourcing"]
    assert get_stage("founders", "Acme", "mugs").priority == "medium"
    assert get_stage("unknown", "Acme", "mugs") is None
