#!/usr/bin/env python3
"""
Test-node walkthrough

Advances the clock of a local Anvil/Hardhat node, mines a block and dumps
the first storage slots of a contract.

    python examples/node_walkthrough.py 0x5FbDB2315678afecb367f032d93F642f64180aa3
"""

import argparse
import asyncio
import sys

from evm_chest import create_chest, connect_to_network, load_settings, setup_logging


async def run_walkthrough(address: str, seconds: int, slots: int) -> None:
    """Shift time, mine and print storage"""
    settings = load_settings()
    chest = create_chest(connect_to_network(settings), settings)

    before = await chest.current_block_timestamp()
    await chest.advance_time_and_mine(seconds)
    after = await chest.current_block_timestamp()
    print(f"Block timestamp moved from {before} to {after} (+{after - before}s)")

    await chest.dump_storage(address, 0, slots, sink=print)


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(description="evm-chest test-node walkthrough")
    parser.add_argument("address", help="Deployed contract address")
    parser.add_argument("--seconds", type=int, default=3600, help="Seconds to advance")
    parser.add_argument("--slots", type=int, default=5, help="Storage slots to dump")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    setup_logging(args.log_level, structured=False)

    try:
        asyncio.run(run_walkthrough(args.address, args.seconds, args.slots))
    except Exception as e:
        print(f"Failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
