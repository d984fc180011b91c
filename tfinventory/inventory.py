"""
Builds an inventory from state resources in two passes: parse every key and
index Azure interfaces, then resolve addresses against that index. The result
does not depend on the order resources appear in the state file.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from rich.console import Console

from tfinventory.config import InventoryConfig
from tfinventory.models.errors import ResourceKeyError
from tfinventory.models.resource import AZURE_NIC_TYPE, Resource, ResourceState, parse_key, record_nic
from tfinventory.parsers.state import ResourcePair
from tfinventory.resolvers import tags as tag_resolver
from tfinventory.resolvers.address import AddressResolver

console = Console(stderr=True)

ALL_GROUP = "all"


@dataclass
class Host:
    name: str            # name_with_counter of the resource
    address: str
    resource: Resource
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class Inventory:
    hosts: List[Host] = field(default_factory=list)
    groups: Dict[str, List[str]] = field(default_factory=dict)

    def host(self, address: str) -> Optional[Host]:
        return next((h for h in self.hosts if h.address == address), None)

    def hostvars(self, address: str) -> Dict[str, str]:
        merged: Dict[str, str] = {}
        for h in self.hosts:
            if h.address == address:
                merged.update(h.resource.attributes)
        return merged

    @property
    def addresses(self) -> List[str]:
        return self.groups.get(ALL_GROUP, [])


_UNSAFE_GROUP_CHARS = re.compile(r"\W", re.ASCII)


def safe_group_name(name: str) -> str:
    """Replace characters Ansible rejects in group names with underscores."""
    return _UNSAFE_GROUP_CHARS.sub("_", name)


def _tag_group(key: str, value: str) -> str:
    return safe_group_name(f"{key}_{value}" if value else key)


def group_names(host: Host) -> List[str]:
    r = host.resource
    names = [r.base_name, r.name_with_counter, f"type_{r.resource_type}"]
    names.extend(_tag_group(k, v) for k, v in host.tags.items())
    return names


def parse_all(pairs: Iterable[ResourcePair]) -> List[Resource]:
    """Parse every key, warning about and skipping the ones that don't fit."""
    resources: List[Resource] = []
    for key, state in pairs:
        try:
            resources.append(parse_key(key, state))
        except ResourceKeyError as exc:
            console.print(f"[yellow]Warning:[/yellow] skipping resource: {exc}")
    return resources


def build_nic_index(resources: Iterable[Resource]) -> Dict[str, str]:
    index: Dict[str, str] = {}
    for r in resources:
        if r.resource_type == AZURE_NIC_TYPE:
            record_nic(r.state, index)
    return index


def build(pairs: Iterable[ResourcePair], config: Optional[InventoryConfig] = None) -> Inventory:
    config = config or InventoryConfig()

    # 1. Parse keys and index interfaces
    resources = parse_all(pairs)
    resolver = AddressResolver(config.key_name, build_nic_index(resources))

    # 2. Resolve addresses and group
    inventory = Inventory()
    grouped: Dict[str, Set[str]] = {}
    for r in resources:
        address = resolver.address(r)
        if not address:
            continue
        host = Host(
            name=r.name_with_counter,
            address=address,
            resource=r,
            tags=tag_resolver.tags(r),
        )
        inventory.hosts.append(host)
        for name in group_names(host) + [ALL_GROUP]:
            grouped.setdefault(name, set()).add(address)

    inventory.hosts.sort(key=lambda h: (h.name, h.resource.resource_type, h.address))
    inventory.groups = {name: sorted(grouped[name]) for name in sorted(grouped)}
    return inventory


def from_mapping(resources: Dict[str, Dict], config: Optional[InventoryConfig] = None) -> Inventory:
    """Convenience for callers holding legacy ``{key: {"primary": ...}}`` data."""
    return build(((k, ResourceState.from_dict(v)) for k, v in resources.items()), config)
