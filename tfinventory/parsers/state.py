import json
import os
import sys
from typing import IO, Any, Dict, Iterator, List, Optional, Tuple

from rich.console import Console

from tfinventory.config import DEFAULT_STATE_FILE, InventoryConfig
from tfinventory.detect import detect_format
from tfinventory.models.errors import StateFileError
from tfinventory.models.resource import ResourceState

console = Console(stderr=True)

ResourcePair = Tuple[str, ResourceState]


def _scalar(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    return str(val)


def flatten(val: Any, prefix: str = "", out: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Flatten nested attributes the way version 3 states stored them:
    lists get a "<prefix>.#" count, maps a "<prefix>.%" count. Nulls are dropped.
    """
    if out is None:
        out = {}
    if isinstance(val, dict):
        if prefix:
            out[f"{prefix}.%"] = str(len(val))
        for k, v in val.items():
            flatten(v, f"{prefix}.{k}" if prefix else str(k), out)
    elif isinstance(val, list):
        if prefix:
            out[f"{prefix}.#"] = str(len(val))
        for i, v in enumerate(val):
            flatten(v, f"{prefix}.{i}" if prefix else str(i), out)
    elif val is not None and prefix:
        out[prefix] = _scalar(val)
    return out


def _iter_legacy(data: Dict[str, Any]) -> Iterator[ResourcePair]:
    for module in data.get("modules", []):
        if not isinstance(module, dict):
            continue
        resources = module.get("resources")
        if not isinstance(resources, dict):
            continue
        for key, raw in resources.items():
            if isinstance(raw, dict):
                yield key, ResourceState.from_dict(raw)


def _instance_state(inst: Dict[str, Any]) -> ResourceState:
    # States upgraded from 0.11 keep pre-flattened "attributes_flat" until the next refresh.
    flat = inst.get("attributes_flat")
    if inst.get("attributes") is None and isinstance(flat, dict):
        return ResourceState(attributes={str(k): str(v) for k, v in flat.items()})
    return ResourceState(attributes=flatten(inst.get("attributes") or {}))


def _iter_modern(data: Dict[str, Any]) -> Iterator[ResourcePair]:
    for res in data.get("resources", []):
        if not isinstance(res, dict) or res.get("mode", "managed") != "managed":
            continue
        base = f"{res.get('type', '')}.{res.get('name', '')}"
        for inst in res.get("instances") or []:
            if not isinstance(inst, dict):
                continue
            index = inst.get("index_key")
            if index is None:
                key = base
            elif isinstance(index, int) and not isinstance(index, bool):
                key = f"{base}.{index}"
            else:
                console.print(f"[yellow]Warning:[/yellow] skipping {base}[{index!r}]: non-numeric index")
                continue
            yield key, _instance_state(inst)


def iter_resources(data: Any) -> Iterator[ResourcePair]:
    """Yield (composite key, ResourceState) for every resource in a decoded state."""
    fmt = detect_format(data)
    if fmt == "legacy":
        yield from _iter_legacy(data)
    elif fmt == "modern":
        yield from _iter_modern(data)
    else:
        console.print("[yellow]Warning:[/yellow] unrecognised state format, no resources read")


def load_state(fh: IO[str], source: str = "<stdin>") -> Any:
    try:
        return json.load(fh)
    except ValueError as exc:
        raise StateFileError(source, f"invalid JSON: {exc}") from exc


def load_file(path: str) -> Any:
    if path == "-":
        return load_state(sys.stdin)
    try:
        with open(path, encoding="utf-8") as fh:
            return load_state(fh, path)
    except OSError as exc:
        raise StateFileError(path, exc.strerror or str(exc)) from exc


def resolve_state_path(path: Optional[str], config: InventoryConfig) -> str:
    """
    Pick the state file: explicit path, else TF_STATE, else ./terraform.tfstate.
    A directory is taken to contain terraform.tfstate.
    """
    candidate = path or config.state_path or DEFAULT_STATE_FILE
    if candidate != "-" and os.path.isdir(candidate):
        candidate = os.path.join(candidate, DEFAULT_STATE_FILE)
    return candidate


def parse_file(path: str) -> List[ResourcePair]:
    return list(iter_resources(load_file(path)))
