"""Basic usage example for dapp-rpc."""

import asyncio
import os
import uuid

from dotenv import load_dotenv

from dapp_rpc import (
    AccountIdentity,
    ProviderConfig,
    ProviderManager,
    Web3ConnectionFactory,
    safe_parse_request,
)
from dapp_rpc.schemas import EthSendTransactionRequest

# Load DAPP_RPC_URL_<chainId> variables from .env file
load_dotenv()


async def main():
    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ValueError("PRIVATE_KEY not found in environment variables")

    manager = ProviderManager(Web3ConnectionFactory(ProviderConfig.from_env()))
    manager.set_on_update(lambda: print(f"Connections changed: {manager.chain_ids}"))
    identity = AccountIdentity.from_key(private_key)

    # A request as it arrives from window.ethereum.request
    raw = {
        "method": "eth_sendTransaction",
        "params": [
            {
                "to": await identity.get_address(),
                "value": "0x0",
                "chainId": "0xaa36a7",
            }
        ],
    }

    result = safe_parse_request(raw, request_id=str(uuid.uuid4()))
    if not result.success:
        print(f"Rejected: {result.error.to_rpc_error()}")
        return

    request = result.request
    assert isinstance(request, EthSendTransactionRequest)
    chain_id = request.transaction.chain_id

    connection = manager.get_connection(chain_id)
    print(f"Latest block on {chain_id}: {connection.web3.eth.block_number}")

    private = await manager.get_private_connection(chain_id, identity)
    print(f"Signing connection bound to {private.web3.eth.default_account}")

    manager.invalidate(chain_id)


if __name__ == "__main__":
    asyncio.run(main())
