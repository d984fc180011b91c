"""
Ansible dynamic inventory JSON (--list / --host).
"""
import json
from typing import Any, Dict

from tfinventory.inventory import Inventory


def list_document(inventory: Inventory) -> Dict[str, Any]:
    doc: Dict[str, Any] = {name: {"hosts": hosts} for name, hosts in inventory.groups.items()}
    doc["_meta"] = {
        "hostvars": {address: inventory.hostvars(address) for address in inventory.addresses},
    }
    return doc


def build_list(inventory: Inventory) -> str:
    return json.dumps(list_document(inventory), indent=2, sort_keys=True)


def build_host(inventory: Inventory, host: str) -> str:
    return json.dumps(inventory.hostvars(host), indent=2, sort_keys=True)
