"""Sign a Signet Order Example.

This example builds an order on the Signet rollup, signs it with a local
private key, prints its order hash and wire form, and (when an RPC URL is
configured) checks whether it could execute right now.

Prerequisites:
1. pip install signet-sdk
2. Set environment variables:
   - SIGNET_PRIVATE_KEY (required)
   - SIGNET_NETWORK (optional, default: mainnet)
   - SIGNET_RPC_URL (optional, enables the feasibility check)

Usage:
    python sign_order.py
"""

import asyncio
import json
import os

from dotenv import load_dotenv

load_dotenv()

# WETH and USDC on Ethereum mainnet
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


async def main():
    from signet_sdk import SignetOrdersClient, load_config_from_env
    from signet_sdk.orders import (
        LocalAccountSigner,
        now_seconds,
        order_hash,
        serialize_order,
        validate_order,
    )

    private_key = os.environ.get("SIGNET_PRIVATE_KEY")
    if not private_key:
        print("Missing required environment variable: SIGNET_PRIVATE_KEY")
        return

    config = load_config_from_env()
    client = SignetOrdersClient(config)
    signer = LocalAccountSigner(private_key)
    host_chain_id = client.get_config().constants.host_chain_id

    print("=" * 60)
    print("  SIGNET ORDER SIGNING")
    print("=" * 60)
    print(f"\n[1] Network: {client.get_config().network}")
    print(f"    Wallet:  {signer.address}")

    # Offer 0.01 WETH on the rollup for 30 USDC delivered on the host
    print("\n[2] Signing order...")
    order = await (
        client.new_order()
        .with_input(WETH, 10**16)
        .with_output(USDC, 30 * 10**6, signer.address, chain_id=host_chain_id)
        .with_deadline(now_seconds() + 600)
        .sign(signer)
    )
    validate_order(order)

    print(f"    Order hash: {order_hash(order)}")
    print(f"    Nonce:      {order.permit.permit.nonce}")
    print("\n[3] Wire format:")
    print(json.dumps(serialize_order(order), indent=2))

    if not config.get("rpc_url"):
        print("\nSIGNET_RPC_URL not set, skipping feasibility check.")
        return

    print("\n[4] Checking feasibility...")
    result = await client.check_order_feasibility(order)
    if result.feasible:
        print("    Order can execute now.")
    else:
        for issue in result.issues:
            print(f"    - {issue.type.value}: {issue.message}")


if __name__ == "__main__":
    asyncio.run(main())
