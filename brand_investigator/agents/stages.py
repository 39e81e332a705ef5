from __future__ import annotations

from brand_investigator.models.investigation import StageDescriptor

STAGE_TITLES: dict[str, str] = {
    "companyName": "Registered Company Name",
    "founders": "Founder Information",
    "imports": "Import Records",
    "sourcing": "Product Sourcing",
}

TOTAL_STAGES = len(STAGE_TITLES)


def company_name_query(brand_name: str) -> str:
    return (
        f'"{brand_name}" "private limited" OR "LLP" OR "incorporated" '
        'site:zaubacorp.com OR site:zauba.com OR "company registration"'
    )


def founder_query(brand_name: str) -> str:
    return (
        f'"{brand_name}" founder OR CEO OR "founded by" OR "started by" '
        "site:zaubacorp.com OR linkedin.com OR crunchbase.com"
    )


def import_query(brand_name: str) -> str:
    return (
        f'"{brand_name}" "import data" OR "import records" OR "customs data" '
        'site:zauba.com OR site:connect2india.com OR site:seair.co.in OR "HS code"'
    )


def sourcing_query(brand_name: str, product_category: str) -> str:
    return (
        f'"{brand_name}" "{product_category}" site:alibaba.com OR site:aliexpress.com '
        'OR site:made-in-china.com OR "OEM" OR "ODM"'
    )


def build_stages(brand_name: str, product_category: str) -> list[StageDescriptor]:
    """The four investigation stages for a brand, in execution order. Pure."""
    return [
        StageDescriptor(
            key="companyName",
            title=STAGE_TITLES["companyName"],
            query=company_name_query(brand_name),
            description="Finding official company registration and incorporation details.",
            priority="high",
        ),
        StageDescriptor(
            key="founders",
            title=STAGE_TITLES["founders"],
            query=founder_query(brand_name),
            description="Researching founder backgrounds and company history.",
            priority="medium",
        ),
        StageDescriptor(
            key="imports",
            title=STAGE_TITLES["imports"],
            query=import_query(brand_name),
            description="Analyzing import/export patterns and sourcing data.",
            priority="high",
        ),
        StageDescriptor(
            key="sourcing",
            title=STAGE_TITLES["sourcing"],
            query=sourcing_query(brand_name, product_category),
            description=f"Searching for similar {product_category} products on B2B platforms.",
            priority="high",
        ),
    ]


def get_stage(key: str, brand_name: str, product_category: str) -> StageDescriptor | None:
    return next((s for s in build_stages(brand_name, product_category) if s.key == key), None)


def high_priority_stages(brand_name: str, product_category: str) -> list[StageDescriptor]:
    return [s for s in build_stages(brand_name, product_category) if s.priority == "high"]
