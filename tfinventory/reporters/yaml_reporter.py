"""
Ansible YAML inventory.
"""
from typing import Any, Dict

import yaml

from tfinventory.inventory import ALL_GROUP, Inventory


def build_document(inventory: Inventory) -> Dict[str, Any]:
    children = {
        name: {"hosts": {h: {} for h in hosts}}
        for name, hosts in inventory.groups.items()
        if name != ALL_GROUP
    }
    return {
        ALL_GROUP: {
            "hosts": {address: inventory.hostvars(address) for address in inventory.addresses},
            "children": children,
        }
    }


def build_report(inventory: Inventory) -> str:
    return yaml.safe_dump(build_document(inventory), default_flow_style=False, sort_keys=True)
