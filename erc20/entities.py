from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.exceptions import InvalidAddressException
from erc20.addresses import parse_address
from erc20.formatting import format_amount

ETHER_DECIMALS = 18


class TokenMetadata(BaseModel):
    """
    Resolved display metadata of a token contract.

    Attributes
    ----------
    symbol : str
        Ticker symbol
    decimals : int
        Number of decimal places
    """
    symbol: str
    decimals: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class TokenBalance(BaseModel):
    """
    Entity representing a wallet's balance of one ERC-20 token.

    Attributes
    ----------
    contract : str
        Token contract address (checksummed)
    wallet : str
        Wallet address (checksummed)
    symbol : str
        Token symbol
    decimals : int
        Token decimal places
    balance : int
        Token balance in the token's smallest unit
    eth_balance : int
        Native coin balance of the wallet in Wei
    """
    contract: str
    wallet: str
    symbol: str
    decimals: int = Field(..., ge=0)
    balance: int = Field(..., ge=0)
    eth_balance: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def validate_addresses(cls, data):
        if isinstance(data, dict) and "contract" in data and "wallet" in data:
            contract = parse_address(data["contract"])
            wallet = parse_address(data["wallet"])
            if contract == wallet:
                raise InvalidAddressException("error.address.same_contract_and_wallet")
            data = {**data, "contract": contract, "wallet": wallet}
        return data

    def balance_string(self) -> str:
        return format_amount(self.balance, self.decimals)

    def eth_balance_string(self) -> str:
        return format_amount(self.eth_balance, ETHER_DECIMALS)


class TransferRecord(BaseModel):
    """
    Entity representing one decoded ``Transfer`` event.

    Attributes
    ----------
    block_number : int
        Block the event was emitted in
    block_hash : str
        Hash of that block
    transaction_hash : str
        Hash of the emitting transaction
    log_index : int
        Position of the log within the block
    from_address : str
        Sender (checksummed)
    to_address : str
        Recipient (checksummed)
    value : int
        Amount in the token's smallest unit
    """
    block_number: int
    block_hash: str
    transaction_hash: str
    log_index: int
    from_address: str
    to_address: str
    value: int

    model_config = ConfigDict(frozen=True)

    def as_line(self) -> str:
        return ",".join([
            str(self.block_number),
            self.block_hash,
            self.from_address,
            self.to_address,
            str(self.value),
        ])
