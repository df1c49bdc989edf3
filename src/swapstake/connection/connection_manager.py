from json import JSONDecodeError
from typing import TYPE_CHECKING, cast

import tenacity
from ujson import loads as ujson_loads
from web3 import JSONBaseProvider, Web3
from web3.types import RPCResponse

from swapstake.exceptions import SwapStakeValueError
from swapstake.exceptions.connection import Web3NotConnected
from swapstake.logging import logger
from swapstake.types.aliases import ChainId

# Seconds to wait for a Web3 instance to report a live connection
CONNECTION_TIMEOUT = 10


def _fast_decode_rpc_response(raw_response: bytes) -> RPCResponse:
    """
    Decode the JSON-RPC response using ujson.
    """

    try:
        return cast("RPCResponse", ujson_loads(raw_response))
    except ValueError:
        # Re-raise as a dummy JSONDecodeError so web3py's exception handling works as intended.
        msg = "JSON failure"
        raise JSONDecodeError(msg, "[]", 0) from None


def check_connection(w3: Web3) -> None:
    """
    Poll the Web3 instance until it reports a live connection, raising `Web3NotConnected` if it
    does not within `CONNECTION_TIMEOUT` seconds.
    """

    w3_connected_check_with_retry = tenacity.Retrying(
        stop=tenacity.stop_after_delay(CONNECTION_TIMEOUT),
        wait=tenacity.wait_exponential_jitter(),
        retry=tenacity.retry_if_result(lambda result: result is False),
    )
    try:
        w3_connected_check_with_retry(fn=w3.is_connected)
    except tenacity.RetryError as exc:
        raise Web3NotConnected from exc


class ConnectionManager:
    def __init__(self) -> None:
        self.connections: dict[ChainId, Web3] = {}
        self._default_chain_id: ChainId | None = None

    def get_web3(self, chain_id: ChainId) -> Web3:
        try:
            return self.connections[chain_id]
        except KeyError:
            raise SwapStakeValueError(
                message="Chain ID does not have a registered Web3 instance."
            ) from None

    def register_web3(
        self,
        w3: Web3,
        *,
        optimize: bool = True,
    ) -> None:
        check_connection(w3)

        if optimize:
            # Remove all middleware and monkey-patch the JSON decoding for RPC responses
            w3.middleware_onion.clear()
            if TYPE_CHECKING:
                assert isinstance(w3.provider, JSONBaseProvider)
            w3.provider.decode_rpc_response = _fast_decode_rpc_response  # type: ignore[method-assign]

        chain_id = w3.eth.chain_id
        self.connections[chain_id] = w3
        logger.debug(f"Registered Web3 instance for chain ID {chain_id}")

    def set_default_chain(self, chain_id: ChainId) -> None:
        self._default_chain_id = chain_id

    @property
    def default_chain_id(self) -> ChainId:
        if self._default_chain_id is None:
            raise SwapStakeValueError(message="A default chain ID has not been provided.")
        return self._default_chain_id

    def reset(self) -> None:
        self.connections.clear()
        self._default_chain_id = None
