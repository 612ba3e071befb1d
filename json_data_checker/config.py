"""
Settings for the data checker.

Defaults mirror the original page: five items per page with 5/10/20 choices,
``role`` folded into container headers, and downloads named
``edited_data.json``.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

ENV_PREFIX = "JSON_DATA_CHECKER_"


@dataclass(frozen=True)
class CheckerConfig:
    """
    Attributes:
        default_page_size: Records per page after startup.
        page_size_choices: Options offered by the page size dropdown.
        discriminator_keys: Leaf keys shown in the parent header instead of as editable fields.
        export_file_name: Download name for the exported collection.
        export_indent: Indentation of exported JSON.
        record_id_prefix: Prefix of generated record ids.
        log_level: Level name passed to ``logging.basicConfig``.
    """
    default_page_size: int = 5
    page_size_choices: Tuple[int, ...] = (5, 10, 20)
    discriminator_keys: Tuple[str, ...] = ("role",)
    export_file_name: str = "edited_data.json"
    export_indent: int = 2
    record_id_prefix: str = "item-"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CheckerConfig":
        """Build a config, overriding defaults from ``JSON_DATA_CHECKER_*`` variables."""
        environ = os.environ if environ is None else environ
        config = cls()

        page_size = environ.get(ENV_PREFIX + "PAGE_SIZE")
        if page_size:
            try:
                size = int(page_size)
            except ValueError:
                logger.warning("Ignoring non-integer %sPAGE_SIZE=%r", ENV_PREFIX, page_size)
            else:
                if size >= 1:
                    choices = config.page_size_choices
                    if size not in choices:
                        choices = tuple(sorted(choices + (size,)))
                    config = replace(config, default_page_size=size, page_size_choices=choices)
                else:
                    logger.warning("Ignoring %sPAGE_SIZE below 1: %r", ENV_PREFIX, page_size)

        log_level = environ.get(ENV_PREFIX + "LOG_LEVEL")
        if log_level:
            config = replace(config, log_level=log_level.upper())

        export_name = environ.get(ENV_PREFIX + "EXPORT_NAME")
        if export_name and export_name.strip():
            config = replace(config, export_file_name=export_name.strip())

        return config


DEFAULT_CONFIG = CheckerConfig()
