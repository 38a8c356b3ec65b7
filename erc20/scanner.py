import asyncio
import logging
from typing import Any, AsyncIterator, Iterator, NamedTuple
from hexbytes import HexBytes
from web3 import AsyncWeb3
from eth_typing import ChecksumAddress

from core.exceptions import (
    DecodeFailedException,
    InvalidScanRangeException,
    ScanInterruptedException,
)
from erc20.abi import TransferEventABI
from erc20.addresses import parse_address
from erc20.entities import TransferRecord


class BlockWindow(NamedTuple):
    start: int
    end: int


def iter_block_windows(from_block: int, to_block: int, window_size: int) -> Iterator[BlockWindow]:
    """
    Tile ``[from_block, to_block]`` into inclusive windows of at most
    ``window_size`` blocks, in ascending order, without gaps or overlap.
    """
    cursor = from_block
    while cursor <= to_block:
        end = min(cursor + window_size - 1, to_block)
        yield BlockWindow(cursor, end)
        cursor = end + 1


def _hex(value: Any) -> str:
    if value is None:
        return ""
    return "0x" + bytes(HexBytes(value)).hex()


class TransferLogScanner:
    """
    Scanner for ERC-20 ``Transfer`` events over a block range.

    The range is split into windows queried one after another, since
    nodes cap the block range and result size of ``eth_getLogs``.

    Parameters
    ----------
    web3 : AsyncWeb3
        Connected Web3 client
    logger : logging.Logger
        Logger instance
    request_timeout : float | None
        Timeout in seconds for a single window query
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        logger: logging.Logger,
        request_timeout: float | None = None
    ):
        self.web3 = web3
        self.logger = logger
        self.request_timeout = request_timeout

    async def scan(
        self,
        abi: list[dict[str, Any]],
        contract_address: str,
        from_block: int,
        to_block: int,
        window_size: int
    ) -> AsyncIterator[TransferRecord]:
        """
        Yield decoded Transfer events of a contract, window by window.

        Records of completed windows are yielded before the next window is
        queried, so a failure later in the range does not retract them.

        Parameters
        ----------
        abi : list[dict[str, Any]]
            Contract ABI containing the Transfer event
        contract_address : str
            Token contract address
        from_block : int
            First block, inclusive
        to_block : int
            Last block, inclusive
        window_size : int
            Maximum number of blocks per log query

        Yields
        ------
        TransferRecord
            Decoded transfers in node order

        Raises
        ------
        InvalidScanRangeException
            If the range or window size is invalid
        ScanInterruptedException
            If a window query fails
        DecodeFailedException
            If a Transfer log cannot be decoded
        """
        if from_block < 0 or to_block < from_block:
            raise InvalidScanRangeException(
                f"error.scan.invalid_range: {from_block}-{to_block}"
            )
        if window_size < 1:
            raise InvalidScanRangeException(
                f"error.scan.invalid_window_size: {window_size}"
            )

        event = TransferEventABI.from_abi(abi)
        checksum_address = parse_address(contract_address)

        total_blocks = to_block - from_block + 1
        self.logger.info(
            f"Scanning Transfer events of {checksum_address} in blocks {from_block}-{to_block} "
            f"(total blocks: {total_blocks:,}, window size: {window_size:,})"
        )

        total_records = 0
        for window in iter_block_windows(from_block, to_block, window_size):
            logs = await self._fetch_window(checksum_address, window)

            for log in logs:
                if not event.matches(log):
                    continue
                block_number = log.get("blockNumber")
                if block_number is None or not window.start <= block_number <= window.end:
                    self.logger.warning(
                        f"Dropping log from block {block_number} outside window {window.start}-{window.end}"
                    )
                    continue
                total_records += 1
                yield self._decode(event, log)

        self.logger.info(f"Scan of {checksum_address} done: {total_records} transfers")

    async def collect(
        self,
        abi: list[dict[str, Any]],
        contract_address: str,
        from_block: int,
        to_block: int,
        window_size: int
    ) -> list[TransferRecord]:
        """Run :meth:`scan` to completion and return all records."""
        return [
            record async for record in self.scan(
                abi, contract_address, from_block, to_block, window_size
            )
        ]

    async def _fetch_window(
        self,
        contract_address: ChecksumAddress,
        window: BlockWindow
    ) -> list:
        filter_params = {
            'address': contract_address,
            'fromBlock': window.start,
            'toBlock': window.end
        }

        try:
            logs = await asyncio.wait_for(
                self.web3.eth.get_logs(filter_params),
                timeout=self.request_timeout
            )
        except Exception as e:
            self.logger.warning(f"Error fetching logs for window {window.start}-{window.end}: {e}")
            raise ScanInterruptedException(window.start, window.end, e) from e

        if logs:
            self.logger.debug(f"Window {window.start}-{window.end}: found {len(logs)} logs")
        return logs

    def _decode(self, event: TransferEventABI, log: dict[str, Any]) -> TransferRecord:
        try:
            sender, recipient, value = event.decode(self.web3.codec, log)
        except Exception as e:
            self.logger.warning(
                f"Failed to decode Transfer at block {log.get('blockNumber')} "
                f"log {log.get('logIndex')}: {e}"
            )
            raise DecodeFailedException(log.get("blockNumber"), log.get("logIndex"), e) from e

        return TransferRecord(
            block_number=log["blockNumber"],
            block_hash=_hex(log.get("blockHash")),
            transaction_hash=_hex(log.get("transactionHash")),
            log_index=log.get("logIndex") or 0,
            from_address=sender,
            to_address=recipient,
            value=value
        )
