from dataclasses import dataclass

import eth_typing
from eth_typing import ChecksumAddress

from swapstake.checksum_cache import get_checksum_address
from swapstake.erc20.tokens import SEPOLIA_CHAIN_ID
from swapstake.exceptions import SwapStakeValueError
from swapstake.types.aliases import ChainId


@dataclass(slots=True, frozen=True)
class UniswapFactoryDeployment:
    address: ChecksumAddress


@dataclass(slots=True, frozen=True)
class UniswapRouterDeployment:
    address: ChecksumAddress


@dataclass(slots=True, frozen=True)
class UniswapV3ExchangeDeployment:
    name: str
    chain_id: ChainId
    factory: UniswapFactoryDeployment
    router: UniswapRouterDeployment


def register_exchange(exchange: UniswapV3ExchangeDeployment) -> None:
    if exchange.chain_id in EXCHANGE_DEPLOYMENTS:
        raise SwapStakeValueError(message="Exchange is already registered.")

    EXCHANGE_DEPLOYMENTS[exchange.chain_id] = exchange


def get_exchange_deployment(chain_id: ChainId) -> UniswapV3ExchangeDeployment:
    try:
        return EXCHANGE_DEPLOYMENTS[chain_id]
    except KeyError:
        raise SwapStakeValueError(
            message=f"No Uniswap V3 deployment is known for chain ID {chain_id}."
        ) from None


# Mainnet DEX --------------- START
EthereumMainnetUniswapV3 = UniswapV3ExchangeDeployment(
    name="Ethereum Mainnet Uniswap V3",
    chain_id=eth_typing.ChainId.ETH,
    factory=UniswapFactoryDeployment(
        address=get_checksum_address("0x1F98431c8aD98523631AE4a59f267346ea31F984"),
    ),
    router=UniswapRouterDeployment(
        # SwapRouter02
        address=get_checksum_address("0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45"),
    ),
)
# Mainnet DEX --------------- END

# Sepolia DEX --------------- START
SepoliaUniswapV3 = UniswapV3ExchangeDeployment(
    name="Sepolia Uniswap V3",
    chain_id=SEPOLIA_CHAIN_ID,
    factory=UniswapFactoryDeployment(
        address=get_checksum_address("0x0227628f3F023bb0B980b67D528571c95c6DaC1c"),
    ),
    router=UniswapRouterDeployment(
        # SwapRouter02
        address=get_checksum_address("0x3bFA4769FB09eefC5a80d6E87c3B9C650f7Ae48E"),
    ),
)
# Sepolia DEX --------------- END


EXCHANGE_DEPLOYMENTS: dict[ChainId, UniswapV3ExchangeDeployment] = {
    exchange.chain_id: exchange
    for exchange in (
        EthereumMainnetUniswapV3,
        SepoliaUniswapV3,
    )
}
