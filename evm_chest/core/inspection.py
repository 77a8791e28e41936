"""
Debugging and log-parsing helpers

- dump_storage: read a range of raw storage slots of a deployed contract
- extract_event_arg: pull one argument out of a decoded event log
- decode_logs: decode a raw web3 receipt into event log entries
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Tuple

from eth_utils import is_hex_address
from web3 import Web3
from web3.logs import DISCARD

from ..exceptions import NotFoundError
from ..utils.helpers import Timer
from .models import EventLogEntry, TransactionOutcome

logger = logging.getLogger(__name__)


async def dump_storage(w3,
                       address: str,
                       from_slot: int = 0,
                       to_slot: int = 20,
                       sink: Optional[Callable[[str], None]] = None) -> List[Tuple[int, str]]:
    """
    Print the raw storage slots ``[from_slot, to_slot)`` of a contract

    All reads are issued at once; output is in ascending slot order whatever
    order the responses arrive in.

    Args:
        w3: AsyncWeb3 instance
        address: Contract address (or ENS name)
        from_slot: First slot, inclusive
        to_slot: Last slot, exclusive
        sink: Callable receiving each output line (defaults to logger.info)

    Returns:
        List of (slot, hex value) pairs
    """
    if not isinstance(address, str) or not address:
        raise ValueError("address must be a non-empty string")
    if from_slot < 0 or to_slot < from_slot:
        raise ValueError(f"Invalid slot range [{from_slot}, {to_slot})")

    emit = sink or logger.info
    account = Web3.to_checksum_address(address) if is_hex_address(address) else address

    emit(f"Storage listing for {address}")
    slots = range(from_slot, to_slot)

    with Timer(f"Storage read of {len(slots)} slots"):
        values = await asyncio.gather(
            *(w3.eth.get_storage_at(account, slot) for slot in slots)
        )

    emit(f"Printing storage from {from_slot} to {to_slot}...")
    listing = []
    for slot, value in zip(slots, values):
        rendered = value if isinstance(value, str) else Web3.to_hex(value)
        emit(f"slot #{slot} {rendered}")
        listing.append((slot, rendered))

    return listing


def extract_event_arg(outcome: Any, event_name: str, arg_name: str) -> Any:
    """
    Return an argument of the first log entry for an event

    Args:
        outcome: Anything with a ``logs`` list of entries carrying
            ``event`` and ``args`` (dicts, AttributeDicts, TransactionOutcome)
        event_name: Event to look for
        arg_name: Argument to return

    Raises:
        NotFoundError: no entry for the event, or the entry lacks the argument
    """
    for entry in _field(outcome, "logs") or []:
        if _field(entry, "event") != event_name:
            continue

        args = _field(entry, "args") or {}
        if arg_name not in args:
            raise NotFoundError(f"Event {event_name} has no argument {arg_name}")
        return args[arg_name]

    raise NotFoundError(f"Event {event_name} not found")


def decode_logs(contract, receipt) -> TransactionOutcome:
    """
    Decode every event of a contract's ABI out of a transaction receipt

    Logs that belong to other contracts or events are skipped.
    """
    entries = []
    seen = set()

    for item in contract.abi:
        if item.get("type") != "event" or item["name"] in seen:
            continue
        seen.add(item["name"])

        event = getattr(contract.events, item["name"])()
        for decoded in event.process_receipt(receipt, errors=DISCARD):
            entries.append(EventLogEntry(
                event=decoded["event"],
                args=dict(decoded["args"]),
                log_index=decoded.get("logIndex")
            ))

    entries.sort(key=lambda entry: (entry.log_index is None, entry.log_index or 0))
    logger.debug(f"Decoded {len(entries)} event logs")
    return TransactionOutcome(logs=entries, receipt=receipt)


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)
