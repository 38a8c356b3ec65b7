from dishka import Provider, Scope, provide, FromComponent
from erc20.metadata import ContractMetadataResolver
from erc20.overrides import TokenOverrides
from erc20.scanner import TransferLogScanner
from erc20.services import TokenBalanceService
from erc20.usecases import GetTokenBalanceUseCase, ScanTransfersUseCase
from typing import Annotated
from web3 import AsyncWeb3
from core.environment.config import Settings
import logging


class ERC20Provider(Provider):
    """
    Provider for token-related dependencies.
    """

    component = "erc20"

    @provide(scope=Scope.APP)
    def get_web3_client(
        self,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> AsyncWeb3:
        """
        Provide Web3 client for the configured node.

        Parameters
        ----------
        settings : Settings
            Application settings

        Returns
        -------
        AsyncWeb3
            Web3 client instance
        """
        return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(settings.rpc_url))

    @provide(scope=Scope.APP)
    def get_token_overrides(
        self,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> TokenOverrides:
        """
        Provide read-only token metadata overrides.

        Parameters
        ----------
        settings : Settings
            Application settings

        Returns
        -------
        TokenOverrides
            Symbol and decimals override tables
        """
        return TokenOverrides(
            symbols=settings.symbol_overrides,
            decimals=settings.decimals_overrides
        )

    @provide(scope=Scope.APP)
    def get_metadata_resolver(
        self,
        web3: Annotated[AsyncWeb3, FromComponent("erc20")],
        overrides: Annotated[TokenOverrides, FromComponent("erc20")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ContractMetadataResolver:
        """
        Provide contract metadata resolver.

        Parameters
        ----------
        web3 : AsyncWeb3
            Web3 client
        overrides : TokenOverrides
            Token metadata overrides
        logger : logging.Logger
            Logger instance

        Returns
        -------
        ContractMetadataResolver
            Contract metadata resolver instance
        """
        return ContractMetadataResolver(web3=web3, overrides=overrides, logger=logger)

    @provide(scope=Scope.APP)
    def get_token_balance_service(
        self,
        web3: Annotated[AsyncWeb3, FromComponent("erc20")],
        resolver: Annotated[ContractMetadataResolver, FromComponent("erc20")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> TokenBalanceService:
        """
        Provide token balance service.

        Parameters
        ----------
        web3 : AsyncWeb3
            Web3 client
        resolver : ContractMetadataResolver
            Contract metadata resolver
        logger : logging.Logger
            Logger instance

        Returns
        -------
        TokenBalanceService
            Token balance service instance
        """
        return TokenBalanceService(web3=web3, resolver=resolver, logger=logger)

    @provide(scope=Scope.APP)
    def get_transfer_log_scanner(
        self,
        web3: Annotated[AsyncWeb3, FromComponent("erc20")],
        logger: Annotated[logging.Logger, FromComponent("logger")],
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> TransferLogScanner:
        """
        Provide transfer log scanner.

        Parameters
        ----------
        web3 : AsyncWeb3
            Web3 client
        logger : logging.Logger
            Logger instance
        settings : Settings
            Application settings

        Returns
        -------
        TransferLogScanner
            Transfer log scanner instance
        """
        return TransferLogScanner(
            web3=web3,
            logger=logger,
            request_timeout=settings.rpc_request_timeout
        )

    @provide(scope=Scope.REQUEST)
    def get_token_balance_use_case(
        self,
        balance_service: Annotated[TokenBalanceService, FromComponent("erc20")]
    ) -> GetTokenBalanceUseCase:
        """
        Provide get token balance use case.

        Parameters
        ----------
        balance_service : TokenBalanceService
            Token balance service instance

        Returns
        -------
        GetTokenBalanceUseCase
            Get token balance use case
        """
        return GetTokenBalanceUseCase(balance_service=balance_service)

    @provide(scope=Scope.REQUEST)
    def get_scan_transfers_use_case(
        self,
        scanner: Annotated[TransferLogScanner, FromComponent("erc20")],
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> ScanTransfersUseCase:
        """
        Provide scan transfers use case.

        Parameters
        ----------
        scanner : TransferLogScanner
            Transfer log scanner instance
        settings : Settings
            Application settings

        Returns
        -------
        ScanTransfersUseCase
            Scan transfers use case
        """
        return ScanTransfersUseCase(scanner=scanner, settings=settings)
