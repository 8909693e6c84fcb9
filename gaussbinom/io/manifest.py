"""
Manifest — parse manifest.yaml into the run schedule.
"""

import yaml
from pathlib import Path
from typing import Dict, Any

DEFAULT_SCHEDULE = {
    'start': 0,
    'end': 512,
    'step': 16,
    'report_every': 32,
}


def load_manifest(data_path: str) -> Dict[str, Any]:
    """
    Load manifest.yaml from a data directory.

    A missing manifest yields an empty dict (defaults apply).
    """
    manifest_path = Path(data_path) / 'manifest.yaml'

    if not manifest_path.exists():
        return {}

    with open(manifest_path) as f:
        manifest = yaml.safe_load(f) or {}

    if not isinstance(manifest, dict):
        raise ValueError(f"{manifest_path} must contain a mapping, got {type(manifest).__name__}")

    manifest['_manifest_path'] = str(manifest_path)
    return manifest


def get_schedule(manifest: Dict[str, Any]) -> Dict[str, int]:
    """Schedule section merged over defaults."""
    schedule = dict(DEFAULT_SCHEDULE)
    section = manifest.get('schedule') or {}
    unknown = set(section) - set(DEFAULT_SCHEDULE)
    if unknown:
        raise ValueError(f"Unknown schedule keys: {sorted(unknown)}")
    for key, value in section.items():
        schedule[key] = int(value)
    return schedule
