"""Markdown rendition of a completed investigation."""
from __future__ import annotations

from datetime import date
from typing import Any

from brand_investigator.agents.stages import STAGE_TITLES
from brand_investigator.models.investigation import InvestigationAggregate, ProfileFindings, StageResult
from brand_investigator.services.json_extract import is_error_object
from brand_investigator.tools.web_utils import safe_filename

HIGH_CONFIDENCE = 70
MEDIUM_CONFIDENCE = 40
MAX_SEARCH_RESULTS_DISPLAY = 3
UNAVAILABLE = "_Analysis unavailable: the language model response could not be parsed._"
ENHANCED_CONTENT_UNAVAILABLE = "_Enhanced content unavailable: the top result could not be fetched._"
PROFILES_UNAVAILABLE = "_LinkedIn profile analysis unavailable: no profiles could be retrieved._"


def _list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item]


def confidence_band(analysis: dict[str, Any]) -> str:
    """high / medium / low; any red flag forces "flagged"."""
    if _list(analysis.get("redFlags")):
        return "flagged"
    try:
        confidence = float(analysis.get("confidence") or 0)
    except (TypeError, ValueError):
        confidence = 0.0
    if confidence > HIGH_CONFIDENCE:
        return "high"
    if confidence > MEDIUM_CONFIDENCE:
        return "medium"
    return "low"


def _bullets(title: str, items: list[str]) -> list[str]:
    if not items:
        return []
    return [f"**{title}:**", *[f"- {item}" for item in items], ""]


def render_analysis(analysis: dict[str, Any]) -> list[str]:
    if not analysis or is_error_object(analysis):
        return [UNAVAILABLE, ""]
    lines = [f"AI confidence: {analysis.get('confidence', 'N/A')}% ({confidence_band(analysis)})", ""]
    lines += _bullets("Key Findings", _list(analysis.get("keyFindings")))
    lines += _bullets("Red Flags", _list(analysis.get("redFlags")))
    lines += _bullets("Positive Indicators", _list(analysis.get("positiveIndicators")))
    if analysis.get("recommendation"):
        lines += [f"**Recommendation:** {analysis['recommendation']}", ""]
    return lines


def _stage_section(result: StageResult, enrichment_attempted: bool = False) -> list[str]:
    lines = [f"### {STAGE_TITLES.get(result.stage, result.stage)}", ""]
    if result.enrichment and result.enrichment.success:
        lines += [f"Enhanced content: [{result.enrichment.title or result.enrichment.url}]({result.enrichment.url})", ""]
    elif enrichment_attempted:
        lines += [ENHANCED_CONTENT_UNAVAILABLE, ""]
    lines += render_analysis(result.analysis)
    if result.hits:
        lines.append("**Top Sources:**")
        for hit in result.hits[:MAX_SEARCH_RESULTS_DISPLAY]:
            lines.append(f"- [{hit.title}]({hit.link}) {hit.snippet}".rstrip())
    else:
        lines.append("No results found.")
    lines.append("")
    return lines


def _profile_section(findings: ProfileFindings) -> list[str]:
    lines = ["### LinkedIn Profile Analysis", ""]
    lines += render_analysis(findings.analysis)
    lines.append(f"**Profiles Analyzed ({len(findings.profiles)}):**")
    for profile in findings.profiles:
        lines.append(
            f"- [{profile.full_name}]({profile.profile_url}): {profile.headline} "
            f"({profile.current_company}, {profile.location})"
        )
    lines.append("")
    return lines


def render_markdown(aggregate: InvestigationAggregate) -> str:
    report = aggregate.final_report or {}
    lines = [
        f"# D2C Brand Investigation Report: {aggregate.brand_name}",
        "",
        f"Category: {aggregate.product_category}  ",
        f"Generated on {date.today().isoformat()}",
        "",
        "## Executive Summary",
        "",
    ]
    if not report or is_error_object(report):
        lines += [UNAVAILABLE, ""]
    else:
        lines += [
            f"- Overall risk: **{report.get('overallRisk', 'N/A')}**",
            f"- Manufacturing likelihood: **{report.get('manufacturingLikelihood', 'N/A')}%**",
            "",
            report.get("summary") or "No summary available.",
            "",
        ]
        lines += _bullets("Key Evidence", _list(report.get("keyEvidence")))
        lines += _bullets("Major Red Flags", _list(report.get("majorRedFlags")))
        lines += _bullets("Recommendations", _list(report.get("recommendations")))
        lines += _bullets("Further Investigation", _list(report.get("furtherInvestigation")))

    validation = aggregate.validation
    if validation.get("industryContext"):
        lines += ["## Industry Context", "", str(validation["industryContext"]), ""]

    lines += ["## Detailed Findings", ""]
    attempted = aggregate.optional_collaborators
    for result in aggregate.stage_results():
        lines += _stage_section(result, attempted.get("firecrawl", False))
    if aggregate.profile_findings is not None:
        lines += _profile_section(aggregate.profile_findings)
    elif attempted.get("rapidapi"):
        lines += ["### LinkedIn Profile Analysis", "", PROFILES_UNAVAILABLE, ""]

    lines += [
        "## Disclaimer",
        "",
        "This report is generated from public search results and AI analysis. "
        "Always conduct additional due diligence and verify findings through multiple "
        "sources before making business decisions.",
        "",
    ]
    return "\n".join(lines)


def report_filename(aggregate: InvestigationAggregate) -> str:
    return f"{safe_filename(aggregate.brand_name)}_Investigation_Report_{date.today().isoformat()}.md"
