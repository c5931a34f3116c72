# loopback_sdk_codegen/settings.py
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class CodegenSettings(BaseSettings):
    """Generator defaults, overridable with LBSDK_* environment variables or a .env file."""

    model_prefix: str = ""
    output_dir: Path = Path("generated")
    templates_dir: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_prefix="LBSDK_",
        env_file=".env",
        extra="ignore",
        protected_namespaces=(),
    )


def get_settings() -> CodegenSettings:
    return CodegenSettings()
