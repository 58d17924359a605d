"""
IoTeX Explorer - Configuration Management
===========================================
Gestione centralizzata configurazione con Pydantic Settings.
Supporta environment variables, file .env, override runtime.

Last Updated: 2026-10-19
Version: 1.0.0

Features:
- Validazione automatica tipi
- Environment variables con prefisso IOTEX_EXPLORER_
- File .env support
- Profile multipli (dev/prod)
"""

from pathlib import Path
from typing import Optional, List, Dict
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from iotex_explorer.constants import (
    DEFAULT_GATEWAY_URL,
    DEFAULT_GATEWAY_TIMEOUT,
    DEFAULT_API_PORT,
    DEFAULT_CLIENT_SCRIPT,
)


# ============================================================================
# MAIN CONFIGURATION CLASS
# ============================================================================

class ExplorerSettings(BaseSettings):
    """
    Configurazione principale IoTeX Explorer.

    Supporta:
    - Caricamento da environment variables (IOTEX_EXPLORER_*)
    - Caricamento da file .env
    - Override programmatici
    - Validazione automatica

    Example:
        # Da environment
        export IOTEX_EXPLORER_GATEWAY_URL="http://gateway:14004/"
        export IOTEX_EXPLORER_API_PORT=4100

        # Da codice
        config = ExplorerSettings(gateway_timeout=2.5)
    """

    model_config = SettingsConfigDict(
        env_prefix='IOTEX_EXPLORER_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # ========================================================================
    # GATEWAY (iotexCore)
    # ========================================================================

    gateway_url: str = Field(
        default=DEFAULT_GATEWAY_URL,
        description="Endpoint JSON-RPC del gateway iotexCore"
    )

    gateway_timeout: float = Field(
        default=DEFAULT_GATEWAY_TIMEOUT,
        gt=0,
        description="Timeout per singola chiamata gateway (secondi)"
    )

    gateway_headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Header HTTP extra verso il gateway"
    )

    # ========================================================================
    # SERVER
    # ========================================================================

    api_host: str = Field(
        default="0.0.0.0",
        description="Host server explorer"
    )

    api_port: int = Field(
        default=DEFAULT_API_PORT,
        ge=1024,
        le=65535,
        description="Porta server explorer"
    )

    route_prefix: str = Field(
        default="",
        description="Prefisso comune a tutte le route (es. /explorer)"
    )

    client_script: str = Field(
        default=DEFAULT_CLIENT_SCRIPT,
        description="Bundle JS caricato dalla pagina address"
    )

    static_dir: Optional[Path] = Field(
        default=None,
        description="Directory asset statici (montata su /static)"
    )

    api_cors_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="CORS allowed origins"
    )

    # ========================================================================
    # LOGGING
    # ========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    log_to_file: bool = Field(
        default=True,
        description="Salva log su file"
    )

    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory log files"
    )

    log_format: str = Field(
        default="json",
        description="Formato log: json, text"
    )

    log_rotation_mb: int = Field(
        default=100,
        ge=1,
        description="Dimensione max file log prima rotation (MB)"
    )

    log_retention_days: int = Field(
        default=30,
        ge=1,
        description="Giorni retention log files"
    )

    enable_console: bool = Field(
        default=True,
        description="Log anche su console"
    )

    # ========================================================================
    # DEVELOPMENT
    # ========================================================================

    dev_mode: bool = Field(
        default=False,
        description="Modalita' sviluppo (reload, log verbosi)"
    )

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Valida log level"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Valida formato log"""
        valid_formats = ['json', 'text']
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Invalid log_format: {v}. Must be one of {valid_formats}")
        return v_lower

    @field_validator('gateway_url')
    @classmethod
    def validate_gateway_url(cls, v: str) -> str:
        """Valida schema URL gateway"""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid gateway_url: {v}. Must start with http:// or https://")
        return v

    @field_validator('route_prefix')
    @classmethod
    def validate_route_prefix(cls, v: str) -> str:
        """Normalizza prefisso: '/x' senza slash finale, '' se vuoto"""
        v = v.strip().rstrip('/')
        if v and not v.startswith('/'):
            v = '/' + v
        return v

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    def with_gateway_url(self, gateway_url: str) -> "ExplorerSettings":
        """Copia della config con un altro gateway, validata"""
        return self.__class__(**{**self.model_dump(), "gateway_url": gateway_url})

    def __repr__(self) -> str:
        return (
            f"ExplorerSettings("
            f"gateway_url={self.gateway_url}, "
            f"api_port={self.api_port}, "
            f"route_prefix={self.route_prefix!r})"
        )


# ============================================================================
# SINGLETON INSTANCE
# ============================================================================

@lru_cache(maxsize=1)
def get_settings() -> ExplorerSettings:
    """
    Ottieni singleton instance di ExplorerSettings.

    Cached: chiamate multiple restituiscono la stessa istanza.
    """
    return ExplorerSettings()


def reload_settings() -> ExplorerSettings:
    """
    Ricarica settings (invalida cache).

    Usare quando si cambiano environment variables runtime.
    """
    get_settings.cache_clear()
    return get_settings()


def override_settings(**kwargs) -> ExplorerSettings:
    """
    Override settings con valori custom.

    Utile per testing.

    Example:
        >>> test_config = override_settings(log_to_file=False)
    """
    return ExplorerSettings(**kwargs)


# ============================================================================
# PROFILE PRESETS
# ============================================================================

def get_development_config() -> ExplorerSettings:
    """
    Config preset per development.

    Features:
    - Dev mode enabled
    - Log DEBUG in formato testo, solo console
    """
    return ExplorerSettings(
        dev_mode=True,
        log_level="DEBUG",
        log_format="text",
        log_to_file=False,
    )


def get_production_config() -> ExplorerSettings:
    """
    Config preset per production.

    Features:
    - Log WARNING in JSON su file
    - Nessuna modalita' sviluppo
    """
    return ExplorerSettings(
        dev_mode=False,
        log_level="WARNING",
        log_format="json",
        log_to_file=True,
    )


# ============================================================================
# CONFIGURATION VALIDATION
# ============================================================================

def validate_config(config: ExplorerSettings) -> tuple[bool, list[str]]:
    """
    Valida configurazione completa.

    Returns:
        tuple: (is_valid, errors_list)

    Example:
        >>> is_valid, errors = validate_config(get_settings())
    """
    errors = []

    if not config.client_script.startswith(("/", "http://", "https://")):
        errors.append("client_script must be an absolute path or URL")

    if config.static_dir is not None and not config.static_dir.is_dir():
        errors.append(f"static_dir does not exist: {config.static_dir}")

    if not config.log_to_file and not config.enable_console:
        errors.append("WARNING: all log handlers disabled")

    if "*" in config.api_cors_origins and not config.dev_mode:
        errors.append("WARNING: CORS allows any origin outside dev_mode")

    return (len(errors) == 0, errors)


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "ExplorerSettings",
    "get_settings",
    "reload_settings",
    "override_settings",
    "get_development_config",
    "get_production_config",
    "validate_config",
]
