"""
Session provider: entrega una página de Playwright autenticada en LinkedIn.

El núcleo del harvest solo depende del protocolo SessionProvider; esta
implementación usa un contexto persistente de Chromium para reutilizar la
sesión (cookies, local storage) entre ejecuciones.
"""
import logging
import os
from typing import Protocol

from playwright.async_api import async_playwright, Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from src.scrapers.linkedin.config import LinkedInConfig, PLATFORM
from src.utils.exceptions import AuthTimeoutException
from src.utils.url import normalize_post_url

logger = logging.getLogger(__name__)


class SessionProvider(Protocol):
    def current_document(self):
        """Page positioned at the target post."""
        ...

    async def await_authentication(self, timeout_ms: int = 0) -> None:
        """Block until logged in; raise AuthTimeoutException otherwise."""
        ...


class PersistentSessionProvider:
    """
    Sesión de LinkedIn sobre launch_persistent_context.

    Flujo:
    1. Abre (o reutiliza) la primera pestaña del perfil persistente y navega al post
    2. Si el indicador de sesión aparece en login_check_timeout_ms, reutiliza la sesión
    3. Si no, va a la página de login, rellena credenciales si están configuradas
       y espera al indicador (timeout 0 = sin límite, para 2FA o captchas a mano)
    4. Tras el login vuelve al post si LinkedIn redirigió a otra página
    """

    def __init__(self, config: LinkedInConfig, playwright_factory=async_playwright):
        self.config = config
        self._playwright_factory = playwright_factory
        self._pw = None
        self.context = None
        self.page = None

    async def start(self) -> "PersistentSessionProvider":
        os.makedirs(self.config.user_data_dir, exist_ok=True)
        logger.info(f"session.start user_data_dir={self.config.user_data_dir} headless={self.config.headless}")
        self._pw = await self._playwright_factory().start()
        self.context = await self._pw.chromium.launch_persistent_context(
            self.config.user_data_dir,
            headless=self.config.headless,
            args=['--start-maximized'],
        )
        existing = self.context.pages
        if existing:
            self.page = existing[0]
            logger.info("session.page reused=true")
        else:
            self.page = await self.context.new_page()
            logger.info("session.page reused=false")
        await self.page.goto(self.config.post_url)
        return self

    async def close(self) -> None:
        try:
            if self.context is not None:
                await self.context.close()
        finally:
            if self._pw is not None:
                await self._pw.stop()
            self.context = None
            self.page = None
            self._pw = None

    async def __aenter__(self) -> "PersistentSessionProvider":
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def current_document(self):
        if self.page is None:
            raise RuntimeError("Session not started; use 'async with PersistentSessionProvider(...)'")
        return self.page

    async def is_logged_in(self, timeout_ms: int) -> bool:
        try:
            await self.current_document().wait_for_selector(
                self.config.selectors.logged_in, state='visible', timeout=timeout_ms
            )
            return True
        except PlaywrightTimeoutError:
            return False

    async def _submit_credentials(self) -> None:
        page = self.current_document()
        sel = self.config.selectors
        if '/login' not in page.url:
            await page.goto(self.config.login_url)
        if not (self.config.username and self.config.password):
            logger.warning("session.login credentials_missing complete the login in the browser window")
            return
        username_box = page.locator(sel.username_input)
        if await username_box.is_visible():
            await username_box.click()
            await username_box.fill(self.config.username)
        else:
            logger.info("session.login username_input_hidden assuming pre-filled account")
        password_box = page.locator(sel.password_input)
        await password_box.click()
        await password_box.fill(self.config.password)
        await page.locator(sel.submit_button).click()
        logger.info("session.login submitted")

    async def await_authentication(self, timeout_ms: int = 0) -> None:
        if await self.is_logged_in(self.config.login_check_timeout_ms):
            logger.info("session.auth reused_session=true")
            return
        logger.info("session.auth reused_session=false not logged in or session expired")
        try:
            await self._submit_credentials()
        except PlaywrightError as e:
            logger.warning(f"session.login autofill_failed err={e} waiting for manual login")

        logger.info(f"session.auth waiting selector={self.config.selectors.logged_in} timeout_ms={timeout_ms}")
        if not await self.is_logged_in(timeout_ms):
            raise AuthTimeoutException(PLATFORM, timeout_ms)
        logger.info("session.auth login_detected")

        page = self.current_document()
        target = normalize_post_url(self.config.post_url)
        if target and normalize_post_url(page.url) != target:
            logger.info(f"session.nav back_to_post url={self.config.post_url}")
            await page.goto(self.config.post_url)

