"""
Tag extraction. Providers attach tags under different attribute prefixes; the
state file flattens them into ``<prefix>.<key>`` entries.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet

from tfinventory.models.resource import Resource

# Terraform records collection sizes under ".#" (lists, older states) or ".%"
# (maps, newer states). Neither is a tag.
_BOTH_COUNTS = frozenset({"#", "%"})


@dataclass(frozen=True)
class TagPolicy:
    prefix: str
    excluded: FrozenSet[str] = _BOTH_COUNTS
    as_set: bool = False    # tags are a plain list: each value becomes a key


_SET_TAGS = TagPolicy("tags", frozenset({"#"}), as_set=True)

POLICIES: Dict[str, TagPolicy] = {
    "openstack_compute_instance_v2": TagPolicy("metadata"),
    "aws_instance": TagPolicy("tags"),
    "vsphere_virtual_machine": TagPolicy("custom_configuration_parameters"),
    "digitalocean_droplet": _SET_TAGS,
    "google_compute_instance": _SET_TAGS,
    "scaleway_server": _SET_TAGS,
    "triton_machine": TagPolicy("tags", frozenset({"%"})),
    "azurerm_virtual_machine": TagPolicy("tags", frozenset({"%"})),
}


def extract(attributes: Dict[str, str], policy: TagPolicy) -> Dict[str, str]:
    tags: Dict[str, str] = {}
    for k, v in attributes.items():
        parts = k.split(".", 1)
        if len(parts) != 2 or parts[0] != policy.prefix or parts[1] in policy.excluded:
            continue
        if policy.as_set:
            tags[v.lower()] = ""
        else:
            tags[parts[1].lower()] = v.lower()
    return tags


def tags(resource: Resource) -> Dict[str, str]:
    """Return the lower-cased tags of *resource*; empty for unknown types."""
    policy = POLICIES.get(resource.resource_type)
    if policy is None:
        return {}
    return extract(resource.attributes, policy)
