from pathlib import Path

from pydantic import HttpUrl, WebsocketUrl
from web3 import HTTPProvider, IPCProvider, LegacyWebSocketProvider, Web3

from swapstake.config import Settings
from swapstake.exceptions import SwapStakeValueError


def get_web3_from_settings(settings: Settings) -> Web3:
    match endpoint := settings.rpc_url:
        case HttpUrl():
            w3 = Web3(HTTPProvider(str(endpoint)))
        case WebsocketUrl():
            w3 = Web3(LegacyWebSocketProvider(str(endpoint)))
        case Path():
            w3 = Web3(IPCProvider(str(endpoint)))
        case None:
            raise SwapStakeValueError(
                message="No RPC endpoint configured. Set RPC_URL in the environment or .env file."
            )

    return w3
