import asyncio
import json
import logging
import argparse
import sys

import yaml

from servicematch.app_context import AppContext
from servicematch.config_loader import load_config
from servicematch.directory import ProviderDirectory
from servicematch.matcher.models import MatchPreferences
from web.backend.models.requests import JobPayload

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_job(path: str) -> JobPayload:
    """Read a job from YAML or JSON (JSON is valid YAML)."""
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    return JobPayload.model_validate(data)


async def run_matching(args) -> dict:
    config = load_config(args.config)
    if args.providers:
        config.web.providers_file = args.providers

    directory = ProviderDirectory.load(config.web.providers_file) if config.web.providers_file else ProviderDirectory()
    ctx = AppContext.build(config, directory=directory)
    if args.deterministic:
        ctx.llm_handle.swap(None)

    job = load_job(args.job).to_domain(ctx.catalog, config.matching.default_search_radius_km)
    preferences = MatchPreferences(max_results=args.max_results) if args.max_results else None

    match_set = await ctx.orchestrator.find_matches(job, directory.all(), preferences=preferences)
    return match_set.to_dict()


def main():
    parser = argparse.ArgumentParser(description="ServiceMatch - rank providers for a job")
    parser.add_argument('--job', type=str, required=True,
                        help='Path to a job file (YAML or JSON)')
    parser.add_argument('--providers', type=str, default=None,
                        help='Provider seed file; overrides web.providers_file')
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Configuration file (default: config.yaml)')
    parser.add_argument('--max-results', type=int, default=None,
                        help='Maximum matches to return')
    parser.add_argument('--deterministic', action='store_true',
                        help='Skip AI scoring even when an API key is configured')
    args = parser.parse_args()

    try:
        result = asyncio.run(run_matching(args))
    except (OSError, ValueError) as e:
        logger.error(f"Matching failed: {e}")
        sys.exit(1)

    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
