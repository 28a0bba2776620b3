import asyncio
import time
import logging
from typing import Dict

logger = logging.getLogger(__name__)

BLOCK_EXTENSIONS = (
    '.jpg', '.jpeg', '.png', '.gif', '.webp', '.avif',
    '.mp4', '.webm', '.mov', '.m3u8',
    '.woff', '.woff2', '.ttf', '.otf'
)

BLOCK_RESOURCE_TYPES = {'image', 'media', 'font'}  # playwright resource_type set

class ListResourceBlocker:
    """Intercepta y bloquea recursos pesados (imágenes, video, fuentes) mientras se hace scroll de una lista.

    Bloquear una imagen no elimina el nodo <img>, así que atributos como alt siguen disponibles.

    Uso:
        blocker = await start_list_blocking(page, platform='linkedin', phase='reactions.scroll', enabled=True)
        ... scroll ...
        stats = await blocker.stop()
    """
    def __init__(self, page, platform: str, phase: str = 'list'):
        self.page = page
        self.platform = platform
        self.phase = phase
        self._pattern = "**/*"
        self.blocked = 0
        self.allowed = 0
        self._active = False
        self._start_ts = 0.0

    def should_block(self, resource_type: str, url: str) -> bool:
        url = (url or '').lower().split('?')[0]
        return (resource_type in BLOCK_RESOURCE_TYPES) or url.endswith(BLOCK_EXTENSIONS)

    async def _handler(self, route):
        request = route.request
        try:
            if self.should_block(request.resource_type, request.url):
                self.blocked += 1
                await route.abort()
                return
            self.allowed += 1
            await route.continue_()
        except Exception as e:
            logger.warning(f"resblock.handler_error platform={self.platform} error={type(e).__name__}:{str(e)[:100]}")

    async def start(self):
        if self._active:
            return self
        self._start_ts = time.time()
        try:
            # Timeout de 5s para evitar deadlock si page.route() no responde
            await asyncio.wait_for(self.page.route(self._pattern, self._handler), timeout=5.0)
        except asyncio.TimeoutError:
            logger.error(f"resblock.timeout platform={self.platform} phase={self.phase} - route installation hung")
            raise RuntimeError(f"Resource blocker timeout for {self.platform}:{self.phase}")
        self._active = True
        logger.info(f"resblock.start platform={self.platform} phase={self.phase}")
        return self

    async def stop(self) -> Dict[str, float]:
        if not self._active:
            return {"blocked": self.blocked, "allowed": self.allowed, "duration_ms": 0.0}
        duration_ms = (time.time() - self._start_ts) * 1000.0
        try:
            await asyncio.wait_for(self.page.unroute(self._pattern, self._handler), timeout=3.0)
        except asyncio.TimeoutError:
            logger.warning(f"resblock.unroute_timeout platform={self.platform} phase={self.phase}")
        except Exception as e:
            logger.warning(f"resblock.unroute_error platform={self.platform} err={e}")
        self._active = False
        stats = {"blocked": self.blocked, "allowed": self.allowed, "duration_ms": duration_ms}
        logger.info(f"resblock.stop platform={self.platform} phase={self.phase} blocked={self.blocked} allowed={self.allowed}")
        return stats

class NoopBlocker:
    """Same start/stop interface as ListResourceBlocker, without touching routing."""
    def __init__(self, page, platform: str, phase: str = 'list'):
        self.page = page
        self.platform = platform
        self.phase = phase
        self._start_ts = time.time()

    async def start(self):
        logger.debug(f"resblock.skip platform={self.platform} phase={self.phase}")
        return self

    async def stop(self) -> Dict[str, float]:
        dur = (time.time() - self._start_ts) * 1000.0
        return {"blocked": 0, "allowed": 0, "duration_ms": dur}

async def start_list_blocking(page, platform: str, phase: str = 'list', enabled: bool = True):
    if not enabled:
        return await NoopBlocker(page, platform, phase).start()
    blocker = ListResourceBlocker(page, platform, phase)
    return await blocker.start()
