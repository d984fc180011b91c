"""
Address resolution — finds the reachable IP of a resource.
"""
from typing import List, Mapping, Optional

from tfinventory.models.resource import AZURE_NIC_TYPE, AZURE_VM_TYPE, Resource

# Attribute names checked, in order, on each resource. The first one holding a
# non-empty value is its address.
KEY_NAMES: List[str] = [
    "ipv4_address",                                        # DO and SoftLayer
    "public_ip",                                           # AWS
    "public_ipv6",                                         # Scaleway
    "private_ip",                                          # AWS
    "ipaddress",                                           # CS
    "ip_address",                                          # VMware, Docker
    "network_interface.0.ipv4_address",                    # VMware
    "default_ip_address",                                  # provider.vsphere v1.1.1
    "access_ip_v4",                                        # OpenStack
    "floating_ip",                                         # OpenStack
    "network_interface.0.access_config.0.nat_ip",          # GCE
    "network_interface.0.access_config.0.assigned_nat_ip", # GCE
    "network_interface.0.address",                         # GCE
    "ipv4_address_private",                                # SoftLayer
    "networks.0.ip4address",                               # Exoscale
    "primaryip",                                           # Joyent Triton
]

_AZURE_VM_PRIMARY_NIC_KEY = "primary_network_interface_id"
_AZURE_VM_FIRST_NIC_KEY = "network_interface_ids.0"


class AddressResolver:
    """
    Resolves resource addresses.

    *key_name* replaces the ranked attribute list with a single attribute.
    *nic_index* maps Azure network interface ids to their primary IP; VMs are
    resolved through it since Azure keeps the address on the interface.
    """

    def __init__(self, key_name: Optional[str] = None, nic_index: Optional[Mapping[str, str]] = None):
        self.key_name = key_name or None
        self.nic_index: Mapping[str, str] = nic_index if nic_index is not None else {}

    @property
    def key_names(self) -> List[str]:
        if self.key_name:
            return [self.key_name]
        return KEY_NAMES

    def address(self, resource: Resource) -> str:
        if resource.resource_type in (AZURE_NIC_TYPE, AZURE_VM_TYPE):
            return self.azure_address(resource)

        attrs = resource.attributes
        for key in self.key_names:
            ip = attrs.get(key, "")
            if ip:
                return ip
        return ""

    def azure_address(self, resource: Resource) -> str:
        # Interfaces only feed the index, they are not hosts themselves.
        if resource.resource_type != AZURE_VM_TYPE:
            return ""

        attrs = resource.attributes
        nic_id = attrs.get(_AZURE_VM_PRIMARY_NIC_KEY) or attrs.get(_AZURE_VM_FIRST_NIC_KEY, "")
        if not nic_id:
            return ""
        return self.nic_index.get(nic_id, "")

    def is_supported(self, resource: Resource) -> bool:
        return self.address(resource) != ""
