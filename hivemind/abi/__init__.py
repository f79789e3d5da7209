"""Contract ABIs shipped with the HiveMind client."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

_ABI_DIR = Path(__file__).parent

HIVEMIND = "HiveMind"
USDC = "USDC"


@lru_cache(maxsize=None)
def _read(name: str) -> tuple:
    path = _ABI_DIR / f"{name}.json"
    with open(path) as f:
        raw = json.load(f)

    # Accept either:
    # 1) a plain ABI list
    # 2) a foundry artifact object with an `abi` field
    if isinstance(raw, list):
        abi = raw
    elif isinstance(raw, dict) and isinstance(raw.get("abi"), list):
        abi = raw["abi"]
    else:
        raise ValueError(f"Unsupported ABI JSON shape in {path}")

    normalized = []
    for item in abi:
        if isinstance(item, dict) and item.get("type") == "event" and "anonymous" not in item:
            item = {**item, "anonymous": False}
        normalized.append(item)
    return tuple(normalized)


def load_abi(name: str) -> list[dict[str, Any]]:
    """Load the ABI named *name* (``"HiveMind"`` or ``"USDC"``).

    Returns a fresh list each call; the parsed file is read once.
    """
    return [dict(item) for item in _read(name)]
