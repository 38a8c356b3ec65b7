import logging
from web3 import AsyncWeb3
from eth_typing import ChecksumAddress

from core.exceptions import MetadataUnavailableException
from erc20.abi import ERC20_ABI
from erc20.entities import TokenMetadata
from erc20.overrides import TokenOverrides

BLOCK_IDENTIFIER = "latest"


class ContractMetadataResolver:
    """
    Reads symbol, decimals and balances from an ERC-20 contract.

    All reads are ``eth_call`` against the latest block.

    Parameters
    ----------
    web3 : AsyncWeb3
        Connected Web3 client
    overrides : TokenOverrides
        Known-bad metadata workarounds
    logger : logging.Logger
        Logger instance
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        overrides: TokenOverrides,
        logger: logging.Logger
    ):
        self.web3 = web3
        self.overrides = overrides
        self.logger = logger

    def _contract(self, contract_address: ChecksumAddress):
        return self.web3.eth.contract(address=contract_address, abi=ERC20_ABI)

    async def resolve(self, contract_address: ChecksumAddress) -> TokenMetadata:
        """
        Resolve symbol and decimals of a token.

        Parameters
        ----------
        contract_address : ChecksumAddress
            Token contract address

        Returns
        -------
        TokenMetadata
            Resolved metadata

        Raises
        ------
        MetadataUnavailableException
            If symbol() or decimals() fails and no override is configured
        """
        contract = self._contract(contract_address)
        symbol = await self._resolve_symbol(contract, contract_address)
        decimals = await self._resolve_decimals(contract, contract_address)
        return TokenMetadata(symbol=symbol, decimals=decimals)

    async def _resolve_symbol(self, contract, contract_address: ChecksumAddress) -> str:
        override = self.overrides.symbol_for(contract_address)
        if override is not None:
            self.logger.debug(f"Using symbol override {override} for {contract_address}")
            return override

        try:
            return await contract.functions.symbol().call(block_identifier=BLOCK_IDENTIFIER)
        except Exception as e:
            self.logger.warning(f"symbol() failed for {contract_address}: {e}")
            raise MetadataUnavailableException(
                f"error.metadata.unavailable: symbol() of {contract_address}: {e}"
            ) from e

    async def _resolve_decimals(self, contract, contract_address: ChecksumAddress) -> int:
        try:
            return int(await contract.functions.decimals().call(block_identifier=BLOCK_IDENTIFIER))
        except Exception as e:
            override = self.overrides.decimals_for(contract_address)
            if override is not None:
                self.logger.info(f"decimals() failed for {contract_address}, using override {override}")
                return override
            self.logger.warning(f"decimals() failed for {contract_address}: {e}")
            raise MetadataUnavailableException(
                f"error.metadata.unavailable: decimals() of {contract_address}: {e}"
            ) from e

    async def balance_of(
        self,
        contract_address: ChecksumAddress,
        wallet_address: ChecksumAddress
    ) -> int:
        """
        Read the raw token balance of a wallet.

        Parameters
        ----------
        contract_address : ChecksumAddress
            Token contract address
        wallet_address : ChecksumAddress
            Wallet address

        Returns
        -------
        int
            Balance in the token's smallest unit
        """
        contract = self._contract(contract_address)
        balance = await contract.functions.balanceOf(wallet_address).call(
            block_identifier=BLOCK_IDENTIFIER
        )
        return int(balance)
