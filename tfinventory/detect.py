from typing import Any


def detect_format(data: Any) -> str:
    """
    Return 'legacy' (state versions 1-3), 'modern' (version 4+) or 'unknown'.
    """
    if not isinstance(data, dict):
        return "unknown"

    version = data.get("version")
    if isinstance(version, int) and version >= 4:
        return "modern" if isinstance(data.get("resources", []), list) else "unknown"

    if isinstance(data.get("modules"), list):
        return "legacy"
    if isinstance(data.get("resources"), list):
        return "modern"
    return "unknown"
