# employee_cache/config/settings.py
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


def _env_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"La variable {name} debe ser un entero (recibido: {raw!r})")
    if minimum is not None and value < minimum:
        raise ValueError(f"La variable {name} debe ser >= {minimum} (recibido: {raw!r})")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"La variable {name} debe ser numérica (recibido: {raw!r})")


@dataclass
class Settings:
    """Configuración del servicio de caché de empleados."""
    # Redis (JSON + Search + ZSET)
    redis_uri: str = "redis://localhost:6379/0"

    # API externa de empleados (fuente de verdad)
    api_base_url: str = "http://localhost:8112/api/v1/employee"
    api_get_all_path: str = ""
    api_create_path: str = ""
    api_delete_path: str = ""
    api_timeout_seconds: float = 10.0

    # Caché
    refresh_interval_ms: int = 300_000  # 5 minutos
    key_prefix: str = "employee:"
    salary_zset: str = "employee_salaries"
    search_index: str = "employeeIdx"
    search_limit: int = 1000
    refresh_workers: int = 8

    log_level: str = "INFO"
    api_port: int = 8000

    @property
    def refresh_interval_seconds(self) -> float:
        return self.refresh_interval_ms / 1000.0


def load_settings() -> Settings:
    """Lee la configuración desde el entorno (y el .env si existe)."""
    load_dotenv()
    defaults = Settings()
    return Settings(
        redis_uri=os.getenv("REDIS_URI", defaults.redis_uri),
        api_base_url=os.getenv("EMPLOYEE_API_BASE_URL", defaults.api_base_url),
        api_get_all_path=os.getenv("EMPLOYEE_API_GET_ALL_PATH", defaults.api_get_all_path),
        api_create_path=os.getenv("EMPLOYEE_API_CREATE_PATH", defaults.api_create_path),
        api_delete_path=os.getenv("EMPLOYEE_API_DELETE_PATH", defaults.api_delete_path),
        api_timeout_seconds=_env_float("EMPLOYEE_API_TIMEOUT_SECONDS", defaults.api_timeout_seconds),
        refresh_interval_ms=_env_int("CACHE_REFRESH_INTERVAL_MS", defaults.refresh_interval_ms, minimum=1),
        key_prefix=os.getenv("CACHE_KEY_PREFIX", defaults.key_prefix),
        salary_zset=os.getenv("CACHE_SALARY_ZSET", defaults.salary_zset),
        search_index=os.getenv("CACHE_SEARCH_INDEX", defaults.search_index),
        search_limit=_env_int("CACHE_SEARCH_LIMIT", defaults.search_limit, minimum=1),
        refresh_workers=_env_int("CACHE_REFRESH_WORKERS", defaults.refresh_workers, minimum=1),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        api_port=_env_int("API_PORT", defaults.api_port),
    )
