from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from issuer_governance.proposals.routing import RoutingTable
from issuer_governance.types import ContractRole


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: str = "dev"
    log_level: str = "INFO"
    app_name: str = "issuer-governance"

    chain_id: str = "osmosis-1"
    chain_url: str = "grpc+https://grpc.osmosis.zone:443"
    address_prefix: str = "osmo"
    fee_denom: str = "uosmo"
    gas_price: float = 0.025
    request_timeout_seconds: float = 30.0
    default_page_size: int = 10

    issuer_contract_address: str = ""
    group_contract_address: str = ""
    multisig_contract_address: str = ""

    sender_address: str = ""
    signer_mnemonic: SecretStr | None = None

    def routing_table(self) -> RoutingTable:
        return RoutingTable.from_addresses(
            {
                ContractRole.ISSUER: self.issuer_contract_address,
                ContractRole.GROUP: self.group_contract_address,
                ContractRole.MULTISIG: self.multisig_contract_address,
            }
        )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
