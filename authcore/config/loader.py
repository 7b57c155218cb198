import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from authcore.config.models import AuthSettings

SIGNING_KEY_ENV = "AUTHCORE_SIGNING_KEY"


def load_settings(path: Path, environ: Mapping[str, str] | None = None) -> AuthSettings:
    """
    Load and validate the auth settings file.

    The signing key may be supplied through AUTHCORE_SIGNING_KEY, which
    takes precedence over the file so secrets can stay out of it.

    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at: {path}")

    env = os.environ if environ is None else environ

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in settings file: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Settings file must contain a mapping at the top level")

    signing_key = env.get(SIGNING_KEY_ENV)
    if signing_key:
        tokens: dict[str, Any] = dict(data.get("tokens") or {})
        tokens["signing_key"] = signing_key
        data["tokens"] = tokens

    try:
        return AuthSettings.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Settings validation failed:\n{e}") from e
