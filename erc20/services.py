import logging
from web3 import AsyncWeb3

from core.exceptions import ResolutionFailedException
from erc20.addresses import parse_address_pair
from erc20.entities import TokenBalance
from erc20.metadata import ContractMetadataResolver


class TokenBalanceService:
    """
    Service assembling a wallet's balance of an ERC-20 token.

    Parameters
    ----------
    web3 : AsyncWeb3
        Connected Web3 client
    resolver : ContractMetadataResolver
        Contract metadata resolver
    logger : logging.Logger
        Logger instance
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        resolver: ContractMetadataResolver,
        logger: logging.Logger
    ):
        self.web3 = web3
        self.resolver = resolver
        self.logger = logger

    async def get_balance(
        self,
        contract_address: str,
        wallet_address: str
    ) -> TokenBalance:
        """
        Get token balance, symbol and decimals for a wallet.

        Parameters
        ----------
        contract_address : str
            Token contract address
        wallet_address : str
            Wallet address

        Returns
        -------
        TokenBalance
            Token balance entity

        Raises
        ------
        InvalidAddressException
            If an address is malformed or both addresses are equal
        ResolutionFailedException
            If any contract or node call fails
        """
        contract, wallet = parse_address_pair(contract_address, wallet_address)

        self.logger.info(f"Resolving balance of {wallet} for token {contract}")
        try:
            metadata = await self.resolver.resolve(contract)
            balance = await self.resolver.balance_of(contract, wallet)
            eth_balance = await self.web3.eth.get_balance(wallet)
        except Exception as e:
            self.logger.warning(f"Balance resolution failed for {contract}/{wallet}: {e}")
            raise ResolutionFailedException(e) from e

        return TokenBalance(
            contract=contract,
            wallet=wallet,
            symbol=metadata.symbol,
            decimals=metadata.decimals,
            balance=balance,
            eth_balance=int(eth_balance)
        )
