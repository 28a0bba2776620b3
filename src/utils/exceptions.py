"""
Excepciones personalizadas para el sistema de scraping.
"""
from src.scrapers.errors import ErrorCode


class ScraperException(Exception):
    """Excepción base para todos los errores de scraping."""
    code: ErrorCode = ErrorCode.UNKNOWN


class ContainerUnavailableException(ScraperException):
    """
    Se lanza cuando el contenedor desplazable de la lista nunca llega a ser visible.
    Es fatal: aborta el harvest antes de extraer cualquier registro.
    """
    code = ErrorCode.CONTAINER_UNAVAILABLE

    def __init__(self, platform: str, selector: str, timeout_ms: int):
        self.platform = platform
        self.selector = selector
        self.timeout_ms = timeout_ms
        self.message = f"[{platform}] Contenedor no visible tras {timeout_ms}ms: {selector}"
        super().__init__(self.message)


class EmptyOrUnopenableException(ScraperException):
    """
    Se lanza cuando el control que abre la lista no produce ningún elemento visible.
    """
    code = ErrorCode.EMPTY_OR_UNOPENABLE

    def __init__(self, platform: str, selector: str, message: str = "La lista no se abrió o está vacía"):
        self.platform = platform
        self.selector = selector
        self.message = f"[{platform}] {message}: {selector}"
        super().__init__(self.message)


class AuthTimeoutException(ScraperException):
    """
    Se lanza cuando no se observa un estado autenticado dentro del tiempo permitido.
    """
    code = ErrorCode.AUTH_TIMEOUT

    def __init__(self, platform: str, timeout_ms: int, message: str = "No se detectó sesión iniciada"):
        self.platform = platform
        self.timeout_ms = timeout_ms
        self.message = f"[{platform}] {message} (timeout_ms={timeout_ms})"
        super().__init__(self.message)


class PersistenceFailureException(ScraperException):
    """
    Se lanza cuando no se pueden escribir los registros en el destino configurado.
    No es fatal para el harvest: el orquestador la registra junto con la ruta intentada.
    """
    code = ErrorCode.PERSISTENCE_FAILURE

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        self.message = f"No se pudo escribir en {path}: {cause}"
        super().__init__(self.message)
