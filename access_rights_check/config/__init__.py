"""
Configuration for the access rights check.
There are three levels of configuration in order of priority
1. cli options
2. yaml config file
3. environment variables
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration with support for:
    - Environment variables (``ACCESS_RIGHTS_`` prefix)
    - YAML configuration file
    - CLI argument overrides

    Precedence: CLI args > YAML config > Environment variables > Defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="ACCESS_RIGHTS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ===== Endpoints =====
    metadata_base_url: str = Field(
        default=(
            "https://datacatalogue.cessda.eu/oai-pmh/v0/oai"
            "?verb=GetRecord&metadataPrefix=oai_ddi25&identifier="
        ),
        description="OAI-PMH GetRecord endpoint; the record identifier is appended",
    )
    vocabulary_url: str = Field(
        default=(
            "https://vocabularies.cessda.eu/v2/vocabularies/CessdaAccessRights/1.0.0"
            "?languageVersion=en-1.0.0&format=json"
        ),
        description="CESSDA Access Rights vocabulary (JSON)",
    )
    ddi_namespace: str = Field(
        default="ddi:codebook:2_5",
        description="Namespace URI bound to the ``ddi`` prefix in lookups",
    )

    # ===== HTTP behaviour =====
    connect_timeout: float = Field(
        default=10.0,
        description="Connect timeout (seconds) shared by all requests",
    )
    metadata_timeout: float = Field(
        default=30.0,
        description="Read timeout (seconds) for the metadata record request",
    )
    vocabulary_timeout: float = Field(
        default=20.0,
        description="Read timeout (seconds) for the vocabulary request",
    )
    user_agent: str = Field(
        default="access-rights-check/0.1 (+https://datacatalogue.cessda.eu)",
        description="Client identity sent with every request",
    )

    # ===== Vocabulary =====
    default_access_terms: List[str] = Field(
        default_factory=lambda: ["Open", "Restricted"],
        description="Terms used when the vocabulary cannot be fetched",
    )

    # ===== Diagnostics =====
    preview_bytes: int = Field(
        default=500,
        description="Bytes of an unparseable payload echoed to the error log",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for the command line tool",
    )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> Settings:
        """
        Load settings from a YAML file.

        The YAML file values will override defaults but can still be
        overridden by CLI arguments.

        Parameters
        ----------
        yaml_path : Path
            Path to YAML configuration file

        Returns
        -------
        Settings
            Configured settings instance
        """
        if not yaml_path.exists():
            raise FileNotFoundError(f"Settings file not found: {yaml_path}")

        with yaml_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        if not isinstance(data, dict):
            raise ValueError("Settings YAML must contain a mapping at the root")

        return cls(**data)

    def merge_overrides(self, overrides: Dict[str, Any]) -> Settings:
        """
        Create a new Settings instance with specific values overridden.

        Parameters
        ----------
        overrides : dict
            Dictionary of values to override (typically from CLI args)

        Returns
        -------
        Settings
            New settings instance with overrides applied
        """
        overrides = overrides or {}
        if not overrides:
            return self

        return self.model_copy(update=overrides)


def load_settings(
    yaml_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """
    Load settings with proper precedence handling.

    Precedence order (highest to lowest):
    1. Overrides (typically from CLI args)
    2. YAML config file
    3. Environment variables
    4. Defaults

    Parameters
    ----------
    yaml_path : Path, optional
        Path to YAML configuration file
    overrides : dict, optional
        Dictionary of override values (typically from CLI)

    Returns
    -------
    Settings
        Configured settings instance
    """
    overrides = overrides or {}

    settings = Settings()

    if yaml_path is not None:
        yaml_settings = Settings.from_yaml(yaml_path)
        settings = settings.merge_overrides(yaml_settings.model_dump(exclude_unset=True))

    if overrides:
        settings = settings.merge_overrides(overrides)

    return settings


__all__ = ["Settings", "load_settings"]
