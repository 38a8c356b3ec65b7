from web3 import AsyncWeb3
from eth_typing import ChecksumAddress

from core.exceptions import InvalidAddressException


def parse_address(value: str) -> ChecksumAddress:
    """
    Parse an address string into its checksum form.

    Casing is ignored, so lower-case, upper-case and checksummed inputs
    of the same 20 bytes produce the same result.

    Parameters
    ----------
    value : str
        Hex address with ``0x`` prefix

    Returns
    -------
    ChecksumAddress
        EIP-55 checksummed address

    Raises
    ------
    InvalidAddressException
        If value is not a 20-byte hex address
    """
    if not isinstance(value, str) or not AsyncWeb3.is_address(value.lower()):
        raise InvalidAddressException(f"error.address.invalid: {value!r}")
    return AsyncWeb3.to_checksum_address(value.lower())


def parse_address_pair(
    contract_address: str,
    wallet_address: str
) -> tuple[ChecksumAddress, ChecksumAddress]:
    """
    Parse a (contract, wallet) pair and reject self-referential queries.

    Raises
    ------
    InvalidAddressException
        If either address is malformed or both are the same
    """
    contract = parse_address(contract_address)
    wallet = parse_address(wallet_address)
    if contract == wallet:
        raise InvalidAddressException("error.address.same_contract_and_wallet")
    return contract, wallet
