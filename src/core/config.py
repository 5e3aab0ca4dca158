"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/simulador) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "okto-demo"


def get_user_config_dir() -> Path:
    """Carpeta de config del usuario: APPDATA, Application Support o XDG."""

    home = Path.home()
    if sys.platform.startswith("win"):
        root = Path(os.environ.get("APPDATA") or home)
    elif sys.platform == "darwin":
        root = home / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config")
    return root / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    """Lee `KEY=valor` ignorando comentarios, líneas vacías y comillas."""

    pairs = (line.strip().partition("=") for line in text.splitlines())
    return {
        key.strip(): value.strip().strip("\"'")
        for key, sep, value in pairs
        if sep and key.strip() and not key.lstrip().startswith("#")
    }


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# okto-demo user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="OKTO_DEMO_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="https://sandbox-api.okto.tech",
        min_length=8,
        description="Base URL del backend wallet-as-a-service.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="okto-demo/0.1 (+https://local)",
        min_length=1,
        description="User-Agent enviado al backend.",
    )

    simulator_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        le=30,
        description="Latencia artificial del simulador (modo demo).",
    )
    demo_fallback_enabled: bool = Field(
        default=True,
        description="Pasar a modo demo cuando el backend real no es alcanzable.",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Nivel de logging para la CLI.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value
