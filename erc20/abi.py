from typing import Any
from hexbytes import HexBytes
from web3 import AsyncWeb3

from core.exceptions import InvalidABIException

TRANSFER_EVENT_SIGNATURE = "Transfer(address,address,uint256)"
TRANSFER_EVENT_TYPES = ("address", "address", "uint256")
TRANSFER_SIGNATURE_HASH = HexBytes(AsyncWeb3.keccak(text=TRANSFER_EVENT_SIGNATURE))

ERC20_ABI: list[dict[str, Any]] = [
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [{"name": "_owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "balance", "type": "uint256"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "from", "type": "address"},
            {"indexed": True, "name": "to", "type": "address"},
            {"indexed": False, "name": "value", "type": "uint256"},
        ],
        "name": "Transfer",
        "type": "event",
    },
]


class TransferEventABI:
    """
    Decoder for the ``Transfer(address,address,uint256)`` event.

    Which of the three inputs are indexed is taken from the ABI, so tokens
    that emit ``Transfer`` without indexed arguments decode as well.

    Parameters
    ----------
    indexed : tuple[bool, bool, bool]
        Indexed flag of the from, to and value inputs
    """

    def __init__(self, indexed: tuple[bool, bool, bool]):
        self.indexed = indexed
        self.signature_hash = TRANSFER_SIGNATURE_HASH

    @classmethod
    def from_abi(cls, abi: list[dict[str, Any]]) -> "TransferEventABI":
        """
        Build the decoder from a contract JSON ABI.

        Parameters
        ----------
        abi : list[dict[str, Any]]
            Contract ABI

        Returns
        -------
        TransferEventABI
            Decoder for the contract's Transfer event

        Raises
        ------
        InvalidABIException
            If the ABI has no ERC-20 compatible Transfer event
        """
        for item in abi:
            if item.get("type") != "event" or item.get("name") != "Transfer":
                continue
            # anonymous events carry no signature topic to match on
            if item.get("anonymous"):
                continue
            inputs = item.get("inputs") or []
            types = tuple(entry.get("type") for entry in inputs)
            if types != TRANSFER_EVENT_TYPES:
                continue
            return cls(tuple(bool(entry.get("indexed")) for entry in inputs))

        raise InvalidABIException(f"error.abi.invalid: no {TRANSFER_EVENT_SIGNATURE} event")

    def matches(self, log: dict[str, Any]) -> bool:
        """Return True if the log's first topic is the Transfer signature hash."""
        topics = log.get("topics") or []
        return bool(topics) and HexBytes(topics[0]) == self.signature_hash

    def decode(self, codec, log: dict[str, Any]) -> tuple[str, str, int]:
        """
        Decode a matching log into (from, to, value).

        Parameters
        ----------
        codec : ABICodec
            ABI codec of the web3 client
        log : dict[str, Any]
            Raw log entry as returned by ``eth_getLogs``

        Returns
        -------
        tuple[str, str, int]
            Checksummed sender, checksummed recipient and raw value

        Raises
        ------
        ValueError
            If the number of topics does not fit the ABI
        """
        topics = [HexBytes(topic) for topic in log["topics"][1:]]
        if len(topics) != sum(self.indexed):
            raise ValueError(
                f"expected {sum(self.indexed)} indexed topics, got {len(topics)}"
            )

        data_types = [t for t, is_indexed in zip(TRANSFER_EVENT_TYPES, self.indexed) if not is_indexed]
        data_values = iter(codec.decode(data_types, HexBytes(log.get("data") or b"")))
        topic_values = iter(topics)

        values = []
        for abi_type, is_indexed in zip(TRANSFER_EVENT_TYPES, self.indexed):
            if is_indexed:
                (value,) = codec.decode([abi_type], next(topic_values))
            else:
                value = next(data_values)
            values.append(value)

        sender, recipient, amount = values
        return (
            AsyncWeb3.to_checksum_address(sender),
            AsyncWeb3.to_checksum_address(recipient),
            int(amount),
        )
