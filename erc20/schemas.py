from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _validate_hex_address(v: str) -> str:
    if not v.startswith('0x') or len(v) != 42:
        raise ValueError('Invalid Ethereum address format')
    return v


class GetBalanceRequest(BaseModel):
    """
    Request schema for getting a token balance.

    Attributes
    ----------
    contract_address : str
        Token contract address
    wallet_address : str
        Wallet address to check balance for
    """
    contract_address: str = Field(..., description="Token contract address")
    wallet_address: str = Field(..., description="Wallet address to check balance for")

    @field_validator('contract_address', 'wallet_address')
    @classmethod
    def validate_address(cls, v: str) -> str:
        return _validate_hex_address(v)

    model_config = ConfigDict(from_attributes=True)


class BalanceResponse(BaseModel):
    """
    Response schema for balance query.

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
    balance : str
        Raw token balance in the smallest unit
    balance_formatted : str
        Token balance as a fixed-point decimal
    eth_balance : str
        Raw native balance in Wei
    eth_balance_formatted : str
        Native balance as a fixed-point decimal
    """
    contract: str
    wallet: str
    symbol: str
    decimals: int
    balance: str
    balance_formatted: str
    eth_balance: str
    eth_balance_formatted: str

    model_config = ConfigDict(from_attributes=True)


class GetTransfersRequest(BaseModel):
    """
    Request schema for scanning Transfer events.

    Attributes
    ----------
    contract_address : str
        Token contract address
    from_block : int
        First block, inclusive
    to_block : int
        Last block, inclusive
    window_size : int | None
        Blocks per log query (defaults to the configured window size)
    abi : list[dict] | None
        Contract ABI (defaults to the standard ERC-20 ABI)
    """
    contract_address: str = Field(..., description="Token contract address")
    from_block: int = Field(..., ge=0, description="First block, inclusive")
    to_block: int = Field(..., ge=0, description="Last block, inclusive")
    window_size: int | None = Field(
        default=None,
        ge=1,
        description="Blocks per log query"
    )
    abi: list[dict[str, Any]] | None = Field(
        default=None,
        description="Contract ABI containing the Transfer event"
    )

    @field_validator('contract_address')
    @classmethod
    def validate_address(cls, v: str) -> str:
        return _validate_hex_address(v)

    @model_validator(mode='after')
    def validate_range(self) -> "GetTransfersRequest":
        if self.to_block < self.from_block:
            raise ValueError('to_block must not be lower than from_block')
        return self

    model_config = ConfigDict(from_attributes=True)


class TransferResponse(BaseModel):
    """
    Response schema for a single transfer.

    Attributes
    ----------
    block_number : int
        Block number
    block_hash : str
        Block hash
    transaction_hash : str
        Transaction hash
    log_index : int
        Log index
    from_address : str
        Sender
    to_address : str
        Recipient
    value : str
        Raw transferred amount
    """
    block_number: int
    block_hash: str
    transaction_hash: str
    log_index: int
    from_address: str
    to_address: str
    value: str

    model_config = ConfigDict(from_attributes=True)


class TransfersResponse(BaseModel):
    """
    Response schema for transfers query.

    Attributes
    ----------
    contract_address : str
        Token contract address
    from_block : int
        First scanned block
    to_block : int
        Last scanned block
    transfers : list[TransferResponse]
        Decoded transfers
    total_transfers : int
        Number of transfers
    """
    contract_address: str
    from_block: int
    to_block: int
    transfers: list[TransferResponse]
    total_transfers: int

    model_config = ConfigDict(from_attributes=True)
