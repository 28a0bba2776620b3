import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import asyncio
import argparse
import json
import logging

from dotenv import load_dotenv

from paths import REPO_ROOT, ensure_dirs
from src.scrapers.config_runtime import load_config
from src.scrapers.orchestrator import HarvestOrchestrator
from src.services.session_provider import PersistentSessionProvider
from src.utils.exceptions import ScraperException
from src.utils.logging_config import setup_logging
from src.utils.output import CsvOutputSink

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Extrae las reacciones de un post de LinkedIn a CSV")
    parser.add_argument("--url", help="URL del post (https://www.linkedin.com/feed/update/urn:li:activity:...)", default=None)
    parser.add_argument("--headless", help="Ejecutar navegador en modo headless (true/false)", default=None)
    parser.add_argument("--output", help="Ruta del CSV de salida", default=None)
    parser.add_argument("--max-scroll-attempts", dest="max_scroll_attempts", type=int, default=None)
    parser.add_argument("--stabilization-wait-ms", dest="stabilization_wait_ms", type=int, default=None)
    parser.add_argument("--log-level", dest="log_level", default=None)
    return parser.parse_args(argv)


def build_config(args):
    headless = None
    if args.headless is not None:
        headless = str(args.headless).strip().lower() in ["1", "true", "yes", "y"]
    return load_config(
        post_url=args.url,
        headless=headless,
        output_path=args.output,
        max_scroll_attempts=args.max_scroll_attempts,
        stabilization_wait_ms=args.stabilization_wait_ms,
        log_level=args.log_level,
    )


async def main_linkedin(argv=None) -> int:
    load_dotenv(os.path.join(REPO_ROOT, '.env'))
    args = parse_args(argv)
    config = build_config(args)
    setup_logging(config.log_level)
    ensure_dirs()

    if not config.post_url:
        logger.error("run.config post_url_missing set --url or LINKEDIN_FEED_URL")
        return 2

    try:
        async with PersistentSessionProvider(config) as session:
            orchestrator = HarvestOrchestrator(session, CsvOutputSink(config.output_path), config)
            report = await orchestrator.run()
    except ScraperException as e:
        logger.error(f"run.fatal error.code={e.code.value} {e}")
        return 1

    logger.info(f"run.report {json.dumps(report.to_dict(), ensure_ascii=False)}")
    estado = "lista completa" if report.complete else "lista posiblemente incompleta"
    print(f"\n🎉 {len(report.records)} reacciones extraídas ({estado})")
    if report.output_path:
        print(f"   CSV: {report.output_path}")
    for err in report.errors:
        print(f"⚠️ {err.code.value}: {err.message}")
    return 0


def main(argv=None) -> int:
    try:
        return asyncio.run(main_linkedin(argv))
    except KeyboardInterrupt:
        logger.warning("run.interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
