# pdfpack/settings.py

import dataclasses
import json
import logging
from pathlib import Path

from pdfpack.assembler import PackOptions

logger = logging.getLogger(__name__)


def load_settings(config_path: Path) -> dict:
    """Load saved settings from a JSON config file; missing or broken files give {}."""
    config_path = Path(config_path)
    try:
        if config_path.exists():
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring settings in %s: expected a JSON object", config_path)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load settings from %s: %s", config_path, e)
    return {}


def save_settings(config_path: Path, settings: dict) -> None:
    """Save settings dictionary to a JSON config file."""
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(settings, f, indent=4)


def options_from_settings(settings: dict) -> PackOptions:
    """Build PackOptions from a settings dict, ignoring keys it does not know."""
    known = {f.name for f in dataclasses.fields(PackOptions)}
    values = {k: v for k, v in settings.items() if k in known}
    unknown = sorted(set(settings) - known)
    if unknown:
        logger.debug("Ignoring unknown settings: %s", ", ".join(unknown))
    return PackOptions(**values)


def settings_from_options(options: PackOptions) -> dict:
    return dataclasses.asdict(options)
