from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from issuer_governance.errors import RoutingError
from issuer_governance.types import ContractRole


class RoutingTable(Mapping[ContractRole, str]):
    """Read-only contract role to address mapping, built once at startup."""

    def __init__(self, addresses: Mapping[ContractRole, str]) -> None:
        self._addresses: Mapping[ContractRole, str] = MappingProxyType(dict(addresses))

    @classmethod
    def from_addresses(cls, addresses: Mapping[ContractRole, str]) -> RoutingTable:
        return cls({role: address.strip() for role, address in addresses.items() if address and address.strip()})

    def resolve(self, role: ContractRole) -> str:
        address = self._addresses.get(role)
        if not address:
            raise RoutingError(f"no contract address configured for role {role.value!r}")
        return address

    def __getitem__(self, role: ContractRole) -> str:
        return self._addresses[role]

    def __iter__(self) -> Iterator[ContractRole]:
        return iter(self._addresses)

    def __len__(self) -> int:
        return len(self._addresses)

    def as_dict(self) -> dict[str, str]:
        return {role.value: address for role, address in self._addresses.items()}
