import logging
import os
import pytest
import pytest_asyncio
from hexbytes import HexBytes
from httpx import AsyncClient, ASGITransport
from unittest.mock import AsyncMock, MagicMock, patch
from web3 import AsyncWeb3


# Set test environment variables before imports
os.environ['RPC_URL'] = 'http://localhost:8545'
os.environ['ENV_FILE'] = os.devnull

TOKEN = "0x1b793e49237758dbd8b752afc9eb4b329d5da016"
WALLET = "0x4bfa8b23efed0cabdc7a7bbe575ea0110792b73e"
OTHER = "0x42d4722b804585cdf6406fa7739e794b0aa8b1ff"
EOS = "0x86Fa049857E0209aa7D9e616F7eb3b3B78ECfdb0"


def address_topic(address: str) -> HexBytes:
    return HexBytes(bytes(12) + bytes.fromhex(address[2:]))


def uint_data(value: int) -> HexBytes:
    return HexBytes(value.to_bytes(32, "big"))


def make_log(
    block_number: int,
    sender: str = WALLET,
    recipient: str = OTHER,
    value: int = 1,
    log_index: int = 0,
    topic0: HexBytes | None = None
) -> dict:
    """Build a raw ``eth_getLogs`` entry for a Transfer event."""
    from erc20.abi import TRANSFER_SIGNATURE_HASH

    return {
        "address": TOKEN,
        "topics": [
            topic0 if topic0 is not None else TRANSFER_SIGNATURE_HASH,
            address_topic(sender),
            address_topic(recipient),
        ],
        "data": uint_data(value),
        "blockNumber": block_number,
        "blockHash": HexBytes(block_number.to_bytes(32, "big")),
        "transactionHash": HexBytes((block_number + 1).to_bytes(32, "big")),
        "logIndex": log_index,
    }


@pytest.fixture
def logger():
    return logging.getLogger("erc20_service.tests")


@pytest.fixture
def mock_web3():
    """Web3 client double with a real ABI codec."""
    mock = MagicMock()
    mock.codec = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider("http://localhost:8545")).codec
    mock.eth.get_logs = AsyncMock(return_value=[])
    mock.eth.get_balance = AsyncMock(return_value=0)
    return mock


def set_contract_calls(mock_web3, symbol="TKN", decimals=18, balance=0):
    """Configure ``symbol()``, ``decimals()`` and ``balanceOf()`` results."""
    functions = mock_web3.eth.contract.return_value.functions
    for name, result in (("symbol", symbol), ("decimals", decimals), ("balanceOf", balance)):
        call = AsyncMock(side_effect=result) if isinstance(result, Exception) else AsyncMock(return_value=result)
        getattr(functions, name).return_value.call = call
    return functions


@pytest_asyncio.fixture
async def client(mock_web3):
    """
    Fixture for async test client with a mocked Web3 client.

    Parameters
    ----------
    mock_web3 : MagicMock
        Mocked Web3 client

    Yields
    ------
    AsyncClient
        Async HTTP client for testing
    """
    with patch('erc20.providers.AsyncWeb3', return_value=mock_web3):
        from main import create_app

        app = create_app()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
