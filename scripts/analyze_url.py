#!/usr/bin/env python3
"""
Script to run the marketing analysis for one URL from the command line.
Prints the plain-text report (or the JSON analysis with --json).
"""
import sys
import os
import json
import argparse
from pathlib import Path

from dotenv import load_dotenv

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from marketing_agent.config import get_settings
from marketing_agent.errors import PipelineError
from marketing_agent.log import get_logger, setup_logging
from marketing_agent.pipeline.run import pipeline
from marketing_agent.rendering.report import render_report

ENV_KEYS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a marketing strategy for a web page.")
    parser.add_argument("url", help="Page to analyze")
    parser.add_argument("--api-key", help="Provider API key (defaults to ANTHROPIC_API_KEY / OPENAI_API_KEY)")
    parser.add_argument("--provider", choices=sorted(ENV_KEYS), help="Override LLM_PROVIDER")
    parser.add_argument("--model", help="Override the pinned model identifier")
    parser.add_argument("--json", action="store_true", help="Print the analysis as JSON instead of the report")
    parser.add_argument("--output", "-o", type=Path, help="Write the result to a file instead of stdout")
    parser.add_argument("--log-level", help="Override LOG_LEVEL (e.g. DEBUG)")
    return parser.parse_args(argv)


def main(argv=None):
    load_dotenv()
    args = parse_args(argv)
    setup_logging(args.log_level)
    logger = get_logger("cli")

    provider = args.provider or get_settings().LLM_PROVIDER
    api_key = args.api_key or os.getenv(ENV_KEYS.get(provider, "ANTHROPIC_API_KEY"), "")

    result = pipeline.run(args.url, api_key, model=args.model, provider=provider)
    if isinstance(result, PipelineError):
        print(f"Error: {result.message}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        text = json.dumps(result.to_payload(), indent=2, ensure_ascii=False)
    else:
        text = render_report(result)

    if args.output:
        args.output.write_text(text, encoding="utf-8")
        logger.info(f"Wrote {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    main()
