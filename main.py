"""Brand Investigator - D2C brand due diligence

Simple CLI for investigating whether a brand manufactures or resells.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from brand_investigator.agents.orchestrator import InvestigationOrchestrator
from brand_investigator.errors import InvestigationError
from brand_investigator.models.investigation import Credentials
from brand_investigator.services.credential_store import CredentialStore, resolve_credentials
from brand_investigator.services.report import render_markdown, report_filename
from brand_investigator.services.streaming import TOTAL_STEPS


def print_progress(step: int, text: str):
    print(f"[{step}/{TOTAL_STEPS}] {text}")


def print_error(kind: str, message: str):
    print(f"\n[!] Error ({kind}): {message}")


async def run_investigation(
    brand: str,
    category: str,
    credentials: Credentials,
    output: str | None = None,
) -> int:
    """Run one investigation; returns the process exit code."""
    print(f"Brand: {brand}")
    print("-" * 50)

    orchestrator = InvestigationOrchestrator()
    try:
        aggregate = await orchestrator.run(
            brand,
            category,
            credentials,
            on_progress=print_progress,
            on_error=print_error,
        )
    except InvestigationError:
        return 1

    report = aggregate.final_report or {}
    print(f"\n[*] Investigation Complete!")
    print(f"   Overall risk: {report.get('overallRisk', 'N/A')}")
    print(f"   Manufacturing likelihood: {report.get('manufacturingLikelihood', 'N/A')}%")
    print(f"   Findings: {', '.join(aggregate.findings)}")

    markdown = render_markdown(aggregate)
    if output:
        path = Path(output)
        if path.is_dir():
            path = path / report_filename(aggregate)
        path.write_text(markdown, encoding="utf-8")
        print(f"\n[+] Report written to {path}")
    else:
        print(f"\n{'='*50}")
        print("REPORT:")
        print(f"{'='*50}")
        print(markdown)
    return 0


def main():
    parser = argparse.ArgumentParser(description="D2C Brand Investigator")
    parser.add_argument("brand", help="Brand name to investigate")
    parser.add_argument("--category", "-c", default="", help="Product category (default: from config)")
    parser.add_argument("--serper-key", default="", help="Serper API key")
    parser.add_argument("--gemini-key", default="", help="Gemini API key")
    parser.add_argument("--firecrawl-key", default="", help="Firecrawl API key (optional)")
    parser.add_argument("--rapidapi-key", default="", help="RapidAPI key for LinkedIn lookups (optional)")
    parser.add_argument("--output", "-o", help="Write the markdown report to this file or directory")
    parser.add_argument("--save-keys", action="store_true", help="Remember the given keys for later runs")

    args = parser.parse_args()

    explicit = Credentials(
        serper=args.serper_key,
        gemini=args.gemini_key,
        firecrawl=args.firecrawl_key,
        rapidapi=args.rapidapi_key,
    )
    store = CredentialStore()
    if args.save_keys:
        store.save(explicit)
    credentials = resolve_credentials(explicit, store)

    sys.exit(asyncio.run(run_investigation(args.brand, args.category, credentials, args.output)))


if __name__ == "__main__":
    main()
