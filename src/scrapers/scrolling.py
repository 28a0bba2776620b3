import time
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple

from playwright.async_api import Error as PlaywrightError

from src.utils.dom import scroll_height, scroll_to_bottom
from src.utils.exceptions import ContainerUnavailableException

logger = logging.getLogger(__name__)

DEFAULT_STABLE_THRESHOLD = 3
DEFAULT_VISIBLE_TIMEOUT_MS = 30_000
DEFAULT_STABILIZATION_WAIT_MS = 1000
DEFAULT_MAX_ATTEMPTS = 300

class ScrollPhase(str, Enum):
    GROWING = 'growing'
    STABILIZING = 'stabilizing'
    EXHAUSTED = 'exhausted'
    ABORTED_AT_BUDGET = 'aborted_at_budget'

@dataclass
class ScrollState:
    previous_height: int = 0
    attempt: int = 0
    consecutive_stable: int = 0
    phase: ScrollPhase = ScrollPhase.GROWING

class ScrollStats(dict):
    @property
    def duration_ms(self) -> int:
        return self.get('duration_ms', 0)

    @property
    def outcome(self) -> ScrollPhase:
        return self['outcome']

    @property
    def attempts(self) -> int:
        return self.get('attempts', 0)

    @property
    def exhausted(self) -> bool:
        return self.get('outcome') is ScrollPhase.EXHAUSTED


def transition(
    height_before: int,
    height_after: int,
    consecutive_stable: int,
    threshold: int = DEFAULT_STABLE_THRESHOLD,
) -> Tuple[ScrollPhase, int]:
    """Pure step of the exhaustion state machine.

    Returns the next phase and the updated consecutive-stable counter. Growth
    resets the counter; a non-growing reading counts toward the threshold, and
    a zero height never confirms exhaustion.
    """
    if height_after > height_before:
        return ScrollPhase.GROWING, 0
    stable = consecutive_stable + 1
    if stable >= threshold and height_after > 0:
        return ScrollPhase.EXHAUSTED, stable
    return ScrollPhase.STABILIZING, stable


def _default_wait(container) -> Callable[[int], Awaitable[None]]:
    page = container.page
    async def _wait(ms: int) -> None:
        await page.wait_for_timeout(ms)
    return _wait


async def detect_exhaustion(
    container,
    *,
    stabilization_wait_ms: int = DEFAULT_STABILIZATION_WAIT_MS,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    stable_threshold: int = DEFAULT_STABLE_THRESHOLD,
    visible_timeout_ms: int = DEFAULT_VISIBLE_TIMEOUT_MS,
    wait: Optional[Callable[[int], Awaitable[None]]] = None,
    platform: str = 'linkedin',
    description: str = 'scroll_container',
    log_prefix: str = "scroll",
) -> ScrollStats:
    """Scroll a lazy-loaded container to the bottom until its scrollHeight stops growing.

    Every cycle reads the height, scrolls to the maximum offset, waits
    stabilization_wait_ms and reads the height again. stable_threshold
    consecutive non-growing readings with a positive height end the run as
    EXHAUSTED. The attempt budget is shared by growing and stabilizing cycles;
    running out of it ends the run as ABORTED_AT_BUDGET, which is not an error.

    Raises ContainerUnavailableException when the container is not visible
    within visible_timeout_ms.
    """
    try:
        await container.wait_for(state='visible', timeout=visible_timeout_ms)
    except PlaywrightError as e:
        logger.error(f"{log_prefix} container_unavailable timeout_ms={visible_timeout_ms} err={e}")
        raise ContainerUnavailableException(platform, description, visible_timeout_ms) from e

    wait = wait or _default_wait(container)
    state = ScrollState()
    start = time.time()
    logger.info(f"{log_prefix} start max_attempts={max_attempts} wait_ms={stabilization_wait_ms} threshold={stable_threshold}")

    while state.attempt < max_attempts:
        height_before = await scroll_height(container)
        await scroll_to_bottom(container)
        await wait(stabilization_wait_ms)
        height_after = await scroll_height(container)

        state.phase, state.consecutive_stable = transition(
            height_before, height_after, state.consecutive_stable, stable_threshold
        )
        state.attempt += 1
        state.previous_height = height_after
        logger.info(
            f"{log_prefix} progress attempt={state.attempt} before={height_before} after={height_after} "
            f"phase={state.phase.value} stable_seq={state.consecutive_stable}"
        )
        if state.phase is ScrollPhase.EXHAUSTED:
            break
    else:
        state.phase = ScrollPhase.ABORTED_AT_BUDGET

    duration_ms = int((time.time() - start) * 1000)
    if state.phase is ScrollPhase.ABORTED_AT_BUDGET:
        logger.warning(
            f"{log_prefix} budget_reached max_attempts={max_attempts} final_height={state.previous_height} "
            "list may be incomplete"
        )
    logger.info(f"{log_prefix} end outcome={state.phase.value} attempts={state.attempt} duration_ms={duration_ms}")
    return ScrollStats(
        outcome=state.phase,
        attempts=state.attempt,
        final_height=state.previous_height,
        duration_ms=duration_ms,
    )
