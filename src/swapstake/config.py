import tomllib
from pathlib import Path
from typing import Annotated

import tomlkit
from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    Field,
    HttpUrl,
    PositiveFloat,
    SecretStr,
    WebsocketUrl,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from swapstake.checksum_cache import get_checksum_address
from swapstake.erc20.token import Erc20TokenDescriptor
from swapstake.erc20.tokens import SEPOLIA_CHAIN_ID, SepoliaLink, SepoliaUsdc
from swapstake.exceptions import InvalidFeeTier
from swapstake.logging import logger
from swapstake.types.aliases import ChainId
from swapstake.uniswap.v3_types import FeeTier

CONFIG_DIR = Path.home() / ".config" / "swapstake"
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Values read from the environment are never written back to the configuration file
SECRET_FIELDS = frozenset({"private_key", "rpc_url"})

Address = Annotated[str, AfterValidator(get_checksum_address)]


class NetworkSettings(BaseModel):
    chain_id: ChainId = SEPOLIA_CHAIN_ID
    explorer_url: str | None = "https://sepolia.etherscan.io"


class ContractSettings(BaseModel):
    """
    Contract addresses for the deployment. The factory and router default to the known Uniswap V3
    deployment for the chain when unset. The staking contract has no default.
    """

    factory: Address | None = None
    router: Address | None = None
    staking: Address | None = None


class TokenSettings(BaseModel):
    address: Address
    decimals: int = Field(ge=0, le=255)
    symbol: str
    name: str

    @classmethod
    def from_descriptor(cls, token: Erc20TokenDescriptor) -> "TokenSettings":
        return cls(
            address=token.address,
            decimals=token.decimals,
            symbol=token.symbol,
            name=token.name,
        )

    def to_descriptor(self, chain_id: ChainId) -> Erc20TokenDescriptor:
        return Erc20TokenDescriptor(
            chain_id=chain_id,
            address=get_checksum_address(self.address),
            decimals=self.decimals,
            symbol=self.symbol,
            name=self.name,
        )


class TokensSettings(BaseModel):
    token_in: TokenSettings = TokenSettings.from_descriptor(SepoliaUsdc)
    token_out: TokenSettings = TokenSettings.from_descriptor(SepoliaLink)
    # The token deposited into the staking pool, if it differs from the swap output
    stake: TokenSettings | None = None


class WorkflowSettings(BaseModel):
    fee_tier: int = FeeTier.MEDIUM.value
    confirmation_timeout: PositiveFloat = 120.0
    poll_latency: PositiveFloat = 1.0
    gas_limit_multiplier: float = Field(default=1.5, ge=1.0)

    @field_validator("fee_tier", mode="after")
    def validate_fee_tier(
        cls,  # noqa: N805
        fee_tier: int,
    ) -> int:
        try:
            return FeeTier.from_fee(fee_tier).value
        except InvalidFeeTier as exc:
            raise ValueError(exc.message) from None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    rpc_url: HttpUrl | WebsocketUrl | Path | None = Field(
        default=None,
        validation_alias=AliasChoices("rpc_url", "swapstake_rpc_url"),
    )
    private_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("private_key", "swapstake_private_key"),
    )

    network: NetworkSettings = NetworkSettings()
    contracts: ContractSettings = ContractSettings()
    tokens: TokensSettings = TokensSettings()
    workflow: WorkflowSettings = WorkflowSettings()

    @field_validator("rpc_url", mode="after")
    def validate_path(
        cls,  # noqa: N805
        endpoint: HttpUrl | WebsocketUrl | Path | None,
    ) -> HttpUrl | WebsocketUrl | Path | None:
        """
        Convert an IPC socket path to an absolute reference, leaving HTTP and WS URLs as-is.
        """

        return endpoint.expanduser().absolute() if isinstance(endpoint, Path) else endpoint


def load_config_from_file(config_path: Path) -> Settings:
    return Settings(
        **tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(
                mode="json",
                exclude=set(SECRET_FIELDS),
                exclude_none=True,
            ),
        ),
    )


def load_settings(config_path: Path = CONFIG_FILE) -> Settings:
    """
    Load settings from the TOML file at `config_path`, merged with the RPC endpoint and private key
    from the environment. A default configuration for Sepolia is written first if the file does not
    exist.
    """

    if config_path.exists():
        return load_config_from_file(config_path)

    if not config_path.parent.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created a configuration directory at {config_path.parent}.")

    settings = Settings()
    save_config_to_file(settings, config_path)
    logger.info(f"Created a configuration file at {config_path}.")
    return settings
