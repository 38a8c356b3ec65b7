from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from core.environment.providers import EnvironmentProvider
from erc20.providers import ERC20Provider
from core.logging.providers import LoggerProvider


def build_container() -> AsyncContainer:
    """
    Build the application DI container.

    Returns
    -------
    AsyncContainer
        Container with all providers registered
    """
    return make_async_container(
        FastapiProvider(),
        EnvironmentProvider(),
        LoggerProvider(),
        ERC20Provider()
    )
