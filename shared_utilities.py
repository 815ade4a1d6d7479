"""Shared constants and config helpers.

Contains the package-wide defaults and the JSON job-file handling used by
the command-line front end.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List


# Simplified error handling - let standard exceptions bubble up naturally


# Constants to replace magic numbers
DEFAULT_PRIMALITY_REPS = 25
DEFAULT_VAR = "x"
DEFAULT_RING = "ZZ"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def load_config_from_json(json_path: str) -> Any:
    """Load a submodule job file.

    Args:
        json_path: Path to the JSON file

    Returns:
        The decoded JSON document, unmodified
    """
    with open(json_path, "r") as f:
        return json.load(f)


def expand_jobs(config: Any) -> List[Dict[str, Any]]:
    """Normalize a config document into a list of job dicts.

    Accepted forms:
    - Single dict: returns [dict]
    - List[dict]: returns the dict items
    - Dict with {"jobs": [dict]}: returns that list

    Each job must be self-contained; nothing is merged across jobs.
    """
    if isinstance(config, list):
        return [c for c in config if isinstance(c, dict)]
    if isinstance(config, dict) and isinstance(config.get("jobs"), list):
        return [c for c in config["jobs"] if isinstance(c, dict)]
    if isinstance(config, dict):
        return [config]
    raise ValueError("Unsupported config format. Expected dict, list[dict], or {jobs:[...]}.")


def parse_vector(text: str) -> List[str]:
    """Split a comma separated coordinate string, e.g. ``"1, -1, x**2"``.

    Entries are returned as stripped strings; coercion into a ring is left to
    the caller. An empty string is the empty vector.
    """
    text = text.strip()
    if not text:
        return []
    entries = [s.strip() for s in text.split(",")]
    if any(not s for s in entries):
        raise ValueError(f"Malformed vector '{text}', empty coordinate")
    return entries
