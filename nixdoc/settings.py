"""Core configuration settings for nixdoc.

This module provides the settings that shape generated documents but are
not part of a single run's command line: the attribute set that library
functions live under, the default output format and the paths used by the
DocBook include placeholders. Settings are loaded from environment
variables with .env file support via pydantic-settings.

Environment variables:
    NIXDOC_ROOT_ATTR: Attribute prefix of generated titles (default "lib")
    NIXDOC_DEFAULT_FORMAT: Output format when --format is omitted
    NIXDOC_OVERRIDES_DIR: Directory of hand-written DocBook overrides
    NIXDOC_LOCATIONS_HREF: Generated source-location index for DocBook

Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values

Example:
    >>> from nixdoc.settings import settings
    >>> print(settings.root_attr)
    lib
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

OutputFormat = Literal["commonmark", "docbook"]


class Settings(BaseSettings):
    """Document-shaping configuration.

    Attributes:
        root_attr: Leading attribute of every fully-qualified entry name,
                   e.g. ``lib`` in ``lib.strings.concatStrings``.

        default_format: Renderer used when the command line does not
                        choose one.

        overrides_dir: Directory holding hand-written DocBook documents
                       that supersede a generated entry body.

        locations_href: Externally generated DocBook document with the
                        source location of every entry.

    Note:
        Settings are immutable after initialization.
    """

    model_config = SettingsConfigDict(
        env_prefix="NIXDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    root_attr: str = "lib"
    default_format: OutputFormat = "commonmark"

    # DocBook include targets
    overrides_dir: str = "./overrides"
    locations_href: str = "./locations.xml"


settings = Settings()
