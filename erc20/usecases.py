from typing import Any, AsyncIterator, NamedTuple
from core.environment.config import Settings
from core.exceptions import (
    DecodeFailedException,
    InvalidScanRangeException,
    ScanInterruptedException,
)
from erc20.abi import ERC20_ABI, TransferEventABI
from erc20.addresses import parse_address
from erc20.scanner import TransferLogScanner
from erc20.schemas import BalanceResponse, TransfersResponse, TransferResponse
from erc20.services import TokenBalanceService


class ScanArgs(NamedTuple):
    abi: list[dict[str, Any]]
    contract_address: str
    from_block: int
    to_block: int
    window_size: int


class GetTokenBalanceUseCase:
    """
    Use case for getting a wallet's token balance.

    Parameters
    ----------
    balance_service : TokenBalanceService
        Token balance service instance
    """

    def __init__(self, balance_service: TokenBalanceService):
        self.balance_service = balance_service

    async def __call__(
        self,
        contract_address: str,
        wallet_address: str
    ) -> BalanceResponse:
        """
        Execute use case.

        Parameters
        ----------
        contract_address : str
            Token contract address
        wallet_address : str
            Wallet address

        Returns
        -------
        BalanceResponse
            Balance response
        """
        token_balance = await self.balance_service.get_balance(
            contract_address=contract_address,
            wallet_address=wallet_address
        )

        return BalanceResponse(
            contract=token_balance.contract,
            wallet=token_balance.wallet,
            symbol=token_balance.symbol,
            decimals=token_balance.decimals,
            balance=str(token_balance.balance),
            balance_formatted=token_balance.balance_string(),
            eth_balance=str(token_balance.eth_balance),
            eth_balance_formatted=token_balance.eth_balance_string()
        )


class ScanTransfersUseCase:
    """
    Use case for scanning a token's Transfer events.

    Parameters
    ----------
    scanner : TransferLogScanner
        Transfer log scanner instance
    settings : Settings
        Application settings
    """

    def __init__(self, scanner: TransferLogScanner, settings: Settings):
        self.scanner = scanner
        self.settings = settings

    def _scan_args(
        self,
        contract_address: str,
        from_block: int,
        to_block: int,
        window_size: int | None,
        abi: list[dict[str, Any]] | None
    ) -> ScanArgs:
        """
        Apply defaults and validate a scan request up front.

        The ABI and contract address are checked here and again by the
        scanner, so a streamed response never starts on bad input.
        """
        total_blocks = to_block - from_block + 1
        if total_blocks > self.settings.scan_max_blocks:
            raise InvalidScanRangeException(
                f"error.scan.range_too_large: {total_blocks} > {self.settings.scan_max_blocks}"
            )
        abi = abi or ERC20_ABI
        TransferEventABI.from_abi(abi)
        parse_address(contract_address)
        return ScanArgs(
            abi=abi,
            contract_address=contract_address,
            from_block=from_block,
            to_block=to_block,
            window_size=window_size or self.settings.scan_window_size,
        )

    async def __call__(
        self,
        contract_address: str,
        from_block: int,
        to_block: int,
        window_size: int | None = None,
        abi: list[dict[str, Any]] | None = None
    ) -> TransfersResponse:
        """
        Execute use case.

        Parameters
        ----------
        contract_address : str
            Token contract address
        from_block : int
            First block, inclusive
        to_block : int
            Last block, inclusive
        window_size : int | None
            Blocks per log query
        abi : list[dict[str, Any]] | None
            Contract ABI

        Returns
        -------
        TransfersResponse
            Transfers response
        """
        records = await self.scanner.collect(
            *self._scan_args(contract_address, from_block, to_block, window_size, abi)
        )

        transfers = [
            TransferResponse(
                block_number=record.block_number,
                block_hash=record.block_hash,
                transaction_hash=record.transaction_hash,
                log_index=record.log_index,
                from_address=record.from_address,
                to_address=record.to_address,
                value=str(record.value)
            )
            for record in records
        ]

        return TransfersResponse(
            contract_address=contract_address,
            from_block=from_block,
            to_block=to_block,
            transfers=transfers,
            total_transfers=len(transfers)
        )

    async def stream_lines(
        self,
        contract_address: str,
        from_block: int,
        to_block: int,
        window_size: int | None = None,
        abi: list[dict[str, Any]] | None = None
    ) -> AsyncIterator[str]:
        """
        Stream transfers as ``BlockNumber,BlockHash,From,To,Value`` lines.

        The scan runs up to its first record before this returns, so input
        errors and failures before any output raise here and reach the
        exception handlers. A failure after output has started is written
        as a final ``error,<from_block>,<to_block>,<message>`` line.

        Returns
        -------
        AsyncIterator[str]
            Newline-terminated CSV lines
        """
        records = self.scanner.scan(
            *self._scan_args(contract_address, from_block, to_block, window_size, abi)
        )
        try:
            first = await anext(records)
        except StopAsyncIteration:
            first = None

        async def lines() -> AsyncIterator[str]:
            if first is None:
                return
            yield first.as_line() + "\n"
            try:
                async for record in records:
                    yield record.as_line() + "\n"
            except (ScanInterruptedException, DecodeFailedException) as e:
                yield _error_line(e)

        return lines()


def _error_line(exc: ScanInterruptedException | DecodeFailedException) -> str:
    if isinstance(exc, ScanInterruptedException):
        start, end = exc.from_block, exc.to_block
    else:
        start = end = exc.block_number
    return f"error,{start},{end},{exc.message}\n"
