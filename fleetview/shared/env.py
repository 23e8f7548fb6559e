"""Environment utilities for resolving secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

logger = logging.getLogger(__name__)

SECRET_SUFFIX = "_FILE"


def load_secret_file_variables(
    environ: Optional[MutableMapping[str, str]] = None,
) -> Mapping[str, str]:
    """
    Resolve environment variables that follow Docker secret conventions.

    For every KEY_FILE entry whose KEY is unset, read the referenced file
    and expose its stripped contents via KEY (for example
    TELEMETRY_API_TOKEN_FILE -> TELEMETRY_API_TOKEN). Unreadable files are
    logged and skipped.

    Returns:
        Mapping of the variables that were resolved during this call.
    """
    env = os.environ if environ is None else environ
    resolved: dict[str, str] = {}

    for key, file_path in list(env.items()):
        if not key.endswith(SECRET_SUFFIX):
            continue
        target_key = key[: -len(SECRET_SUFFIX)]
        if env.get(target_key) or not file_path:
            continue
        try:
            value = Path(file_path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        env[target_key] = value
        resolved[target_key] = value

    return resolved
