"""companyqa - Company question answering

Simple CLI that streams a multi-step answer about a company domain.
"""

import argparse
import asyncio
import sys

from companyqa.agents.orchestrator import StepPipelineOrchestrator
from companyqa.llm_client import get_provider
from companyqa.providers.base import ProviderError


async def run_question(question: str, domain: str, raw: bool = False) -> str:
    """Stream the answer to stdout and return the full text."""
    kwargs = {}
    if raw:
        kwargs["normalizer"] = lambda fragment: fragment
    orchestrator = StepPipelineOrchestrator(get_provider(), **kwargs)

    parts: list[str] = []
    async for fragment in orchestrator.process(question, domain):
        parts.append(fragment)
        print(fragment, end="", flush=True)
    print()
    return "".join(parts)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Ask a question about a company domain")
    parser.add_argument("--question", "-q", required=True, help="Question to answer")
    parser.add_argument("--domain", "-d", required=True, help="Company domain, e.g. example.com")
    parser.add_argument("--raw", action="store_true", help="Print provider output without cleanup")

    args = parser.parse_args(argv)

    try:
        asyncio.run(run_question(args.question, args.domain, raw=args.raw))
    except ProviderError as exc:
        print(f"\n[!] Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
