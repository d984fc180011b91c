import re
from dataclasses import dataclass, field
from typing import Any, Dict, MutableMapping, Optional

from tfinventory.models.errors import InvalidCounterError, MalformedKeyError

# type.name.0
_KEY_RE = re.compile(r"^(\w+)\.([\w\-]+)(?:\.(\d+))?$", re.ASCII)

AZURE_NIC_TYPE = "azurerm_network_interface"
AZURE_VM_TYPE = "azurerm_virtual_machine"
AZURE_NIC_IP_KEY = "private_ip_address"
AZURE_ID_KEY = "id"


@dataclass(frozen=True)
class ResourceState:
    """Primary attributes of one resource, as flattened in the state file."""

    attributes: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ResourceState":
        """Build from a legacy state entry: {"primary": {"attributes": {...}}}."""
        primary = raw.get("primary") or {}
        attrs = primary.get("attributes") or {}
        return cls(attributes={str(k): str(v) for k, v in attrs.items()})


@dataclass(frozen=True)
class Resource:
    resource_type: str     # e.g. "aws_instance"
    base_name: str         # logical name in the configuration
    counter: int = 0       # index from count=, zero when absent
    state: ResourceState = field(default_factory=ResourceState)
    key_name: str = ""

    @property
    def attributes(self) -> Dict[str, str]:
        return self.state.attributes

    @property
    def name_with_counter(self) -> str:
        """Resource name with its counter; zero for resources without count=."""
        return f"{self.base_name}.{self.counter}"


def record_nic(state: ResourceState, nic_index: MutableMapping[str, str]) -> None:
    """Store an Azure interface's primary IP under its id, if both are known."""
    ip = state.attributes.get(AZURE_NIC_IP_KEY, "")
    nic_id = state.attributes.get(AZURE_ID_KEY, "")
    if ip and nic_id:
        nic_index[nic_id] = ip


def parse_key(
    key: str,
    state: ResourceState,
    nic_index: Optional[MutableMapping[str, str]] = None,
) -> Resource:
    """
    Parse a composite state key such as ``aws_instance.web.2`` into a Resource.

    When *nic_index* is given, Azure network interfaces are recorded into it as
    they are parsed. Interfaces must then be parsed before the VMs referring to
    them are resolved; ``tfinventory.inventory.build`` avoids that constraint
    by indexing interfaces in a separate pass.
    """
    m = _KEY_RE.fullmatch(key)
    if m is None:
        raise MalformedKeyError(key)

    resource_type, base_name, raw_counter = m.groups()
    counter = 0
    if raw_counter:
        try:
            counter = int(raw_counter)
        except ValueError:
            raise InvalidCounterError(key, raw_counter) from None

    if nic_index is not None and resource_type == AZURE_NIC_TYPE:
        record_nic(state, nic_index)

    return Resource(
        resource_type=resource_type,
        base_name=base_name,
        counter=counter,
        state=state,
        key_name=key,
    )
