"""
Configuración centralizada para el scraper de reacciones de LinkedIn.
"""
from typing import Dict, Optional

from pydantic import BaseModel, Field

from paths import USER_DATA_DIR, DEFAULT_OUTPUT_PATH
from src.scrapers.selector_registry import primary_selector
from src.utils.dom import FieldSpec

PLATFORM = 'linkedin'


def _sel(category: str):
    return lambda: primary_selector(PLATFORM, category)


class LinkedInSelectors(BaseModel):
    """Selectores usados por sesión, harvest y extracción. Por defecto salen del registry."""

    logged_in: str = Field(default_factory=_sel('session.logged_in'), description="Elemento visible solo con sesión iniciada")
    username_input: str = Field(default_factory=_sel('session.username_input'))
    password_input: str = Field(default_factory=_sel('session.password_input'))
    submit_button: str = Field(default_factory=_sel('session.submit_button'))
    open_button: str = Field(default_factory=_sel('reactions.open_button'), description="Botón que abre el modal de reacciones")
    scroll_container: str = Field(default_factory=_sel('reactions.scroll_container'), description="Contenedor desplazable del modal")
    list_root: str = Field(default_factory=_sel('reactions.list_root'))
    list_item: str = Field(default_factory=_sel('reactions.list_item'), description="Elemento de la lista, relativo a list_root")
    user_name: str = Field(default_factory=_sel('fields.user_name'))
    current_role: str = Field(default_factory=_sel('fields.current_role'))
    profile_link: str = Field(default_factory=_sel('fields.profile_link'))
    reaction_type: str = Field(default_factory=_sel('fields.reaction_type'))


class LinkedInConfig(BaseModel):
    """Configuración para el scraper de reacciones de LinkedIn."""

    post_url: str = Field(
        default="",
        description="URL del post cuyas reacciones se extraen"
    )

    login_url: str = Field(
        default="https://www.linkedin.com/login",
        description="URL de la página de login"
    )

    username: Optional[str] = Field(
        default=None,
        description="Email de la cuenta; si falta, el login se completa a mano"
    )

    password: Optional[str] = Field(
        default=None,
        description="Contraseña de la cuenta"
    )

    headless: bool = Field(
        default=False,
        description="Ejecutar navegador en modo headless (el login manual requiere ventana visible)"
    )

    user_data_dir: str = Field(
        default=USER_DATA_DIR,
        description="Directorio del perfil persistente de Chromium"
    )

    stabilization_wait_ms: int = Field(
        default=1000,
        ge=0,
        description="Espera tras cada scroll para que cargue y se renderice contenido (milisegundos)"
    )

    max_scroll_attempts: int = Field(
        default=300,
        ge=0,
        description="Presupuesto de ciclos de scroll, compartido entre crecimiento y estabilización"
    )

    stable_threshold: int = Field(
        default=3,
        ge=1,
        description="Lecturas consecutivas sin crecimiento para declarar la lista completa"
    )

    container_visible_timeout_ms: int = Field(
        default=30000,
        description="Timeout para que el contenedor del modal sea visible (milisegundos)"
    )

    item_visible_timeout_ms: int = Field(
        default=5000,
        description="Timeout para que el primer elemento de la lista sea visible (milisegundos)"
    )

    field_attach_wait_ms: int = Field(
        default=3000,
        ge=0,
        description="Espera máxima por campo dentro de cada elemento (milisegundos)"
    )

    login_check_timeout_ms: int = Field(
        default=5000,
        description="Tiempo para detectar una sesión ya iniciada (milisegundos)"
    )

    auth_timeout_ms: int = Field(
        default=0,
        ge=0,
        description="Espera máxima del login; 0 espera indefinidamente"
    )

    output_path: str = Field(
        default=DEFAULT_OUTPUT_PATH,
        description="Ruta del CSV de salida"
    )

    block_heavy_resources: bool = Field(
        default=False,
        description="Bloquear imágenes, video y fuentes durante el scroll"
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging"
    )

    selectors: LinkedInSelectors = Field(default_factory=LinkedInSelectors)

    def field_specs(self) -> Dict[str, FieldSpec]:
        s = self.selectors
        return {
            'user_name': FieldSpec('user_name', s.user_name, immediate_fallback=True),
            'current_role': FieldSpec('current_role', s.current_role),
            'profile_link': FieldSpec('profile_link', s.profile_link, attribute='href'),
            'reaction_type': FieldSpec('reaction_type', s.reaction_type, attribute='alt'),
        }
