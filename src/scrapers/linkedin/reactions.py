import time
import logging
from typing import Dict, List, Tuple

from playwright.async_api import Error as PlaywrightError

from src.scrapers.errors import classify_page_state
from src.scrapers.linkedin.config import LinkedInConfig, PLATFORM
from src.scrapers.resource_blocking import start_list_blocking
from src.scrapers.scrolling import ScrollPhase, ScrollStats, detect_exhaustion
from src.scrapers.selector_registry import registry_version
from src.scrapers.types import ReactionRecord
from src.utils.dom import FieldSpec, resolve_field
from src.utils.exceptions import EmptyOrUnopenableException
from src.utils.list_parser import build_reaction_record

logger = logging.getLogger(__name__)

def _ts() -> str:
    return time.strftime('%Y-%m-%dT%H:%M:%S', time.gmtime())

# Orden en que se resuelven los campos de cada elemento
FIELD_ORDER = ('user_name', 'current_role', 'profile_link', 'reaction_type')


async def extract_record(item, index: int, field_specs: Dict[str, FieldSpec], attach_wait_ms: int) -> Tuple[ReactionRecord, List[str]]:
    """Build one record; returns it with the names of the fields that could not be resolved."""
    values: Dict[str, str] = {}
    missed: List[str] = []
    for name in FIELD_ORDER:
        result = await resolve_field(item, field_specs[name], attach_wait_ms)
        if not result.ok:
            missed.append(name)
        values[name] = result.or_default("")
    record = build_reaction_record(
        index,
        reaction_type=values['reaction_type'],
        user_name=values['user_name'],
        current_role=values['current_role'],
        profile_link=values['profile_link'],
    )
    return record, missed


async def extract_all(items, field_specs: Dict[str, FieldSpec], attach_wait_ms: int = 3000) -> List[ReactionRecord]:
    """Map every list entry present right now to a ReactionRecord, in list order.

    ``items`` is the locator matching all entries. It is enumerated once; the
    result has one record per handle and record i carries index i + 1.
    """
    handles = await items.all()
    logger.info(f"{_ts()} linkedin.reactions extract start total={len(handles)}")
    records: List[ReactionRecord] = []
    misses = 0
    for i, handle in enumerate(handles):
        record, missed = await extract_record(handle, i + 1, field_specs, attach_wait_ms)
        if missed:
            misses += 1
            logger.debug(f"{_ts()} linkedin.reactions field_miss index={i + 1} fields={','.join(missed)}")
        records.append(record)
        logger.info(
            f"{record['index']} | {record['reaction_type']} | {record['user_name']} | "
            f"{record['current_role']} | {record['profile_link']}"
        )
    logger.info(f"{_ts()} linkedin.reactions extract done total={len(records)} records_with_misses={misses}")
    return records


async def open_reactions_modal(page, config: LinkedInConfig) -> None:
    selector = config.selectors.open_button
    try:
        await page.locator(selector).first.click(timeout=config.container_visible_timeout_ms)
    except PlaywrightError as e:
        logger.error(f"{_ts()} linkedin.reactions open_failed selector={selector} err={e}")
        raise EmptyOrUnopenableException(PLATFORM, selector, "No se pudo abrir el modal de reacciones") from e
    logger.info(f"{_ts()} linkedin.reactions modal_opened")


async def _diagnose_unopenable(page) -> None:
    try:
        body = await page.locator('body').inner_text(timeout=2000)
    except PlaywrightError:
        return
    code = classify_page_state(PLATFORM, body)
    if code is not None:
        logger.warning(f"{_ts()} linkedin.reactions page_state code={code.value} url={page.url}")


async def harvest_with_stats(page, config: LinkedInConfig) -> Tuple[List[ReactionRecord], ScrollStats]:
    """Open the reactions list, scroll it to exhaustion and extract every entry.

    Raises EmptyOrUnopenableException when no entry becomes visible and
    ContainerUnavailableException (from the detector) when the modal never
    shows up. Reaching the scroll budget only logs a warning.
    """
    sel = config.selectors
    logger.info(f"{_ts()} linkedin.reactions start url={page.url} registry_ver={registry_version(PLATFORM)}")
    await open_reactions_modal(page, config)

    container = page.locator(sel.scroll_container)
    list_root = page.locator(sel.list_root)
    items = list_root.locator(sel.list_item)
    try:
        await items.first.wait_for(state='visible', timeout=config.item_visible_timeout_ms)
    except PlaywrightError as e:
        await _diagnose_unopenable(page)
        raise EmptyOrUnopenableException(PLATFORM, f"{sel.list_root} {sel.list_item}") from e

    blocker = await start_list_blocking(page, PLATFORM, phase='reactions.scroll', enabled=config.block_heavy_resources)
    try:
        stats = await detect_exhaustion(
            container,
            stabilization_wait_ms=config.stabilization_wait_ms,
            max_attempts=config.max_scroll_attempts,
            stable_threshold=config.stable_threshold,
            visible_timeout_ms=config.container_visible_timeout_ms,
            platform=PLATFORM,
            description=sel.scroll_container,
            log_prefix="linkedin.scroll",
        )
    finally:
        await blocker.stop()

    if stats.outcome is ScrollPhase.ABORTED_AT_BUDGET:
        logger.warning(
            f"{_ts()} linkedin.reactions error.code=ABORTED_AT_BUDGET attempts={stats.attempts} "
            "extracting what is loaded; the list may be incomplete"
        )

    records = await extract_all(items, config.field_specs(), config.field_attach_wait_ms)
    logger.info(
        f"{_ts()} linkedin.reactions done total={len(records)} outcome={stats.outcome.value} "
        f"scroll_ms={stats.duration_ms}"
    )
    return records, stats


async def harvest(page, config: LinkedInConfig) -> List[ReactionRecord]:
    records, _ = await harvest_with_stats(page, config)
    return records
