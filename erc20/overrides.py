from collections.abc import Mapping
from types import MappingProxyType


class TokenOverrides:
    """
    Read-only tables of known-bad on-chain token metadata.

    Parameters
    ----------
    symbols : Mapping[str, str]
        Contract address to symbol; the symbol() call is skipped for these
    decimals : Mapping[str, int]
        Contract address to decimals; used when decimals() fails
    """

    def __init__(
        self,
        symbols: Mapping[str, str] | None = None,
        decimals: Mapping[str, int] | None = None
    ):
        self._symbols = MappingProxyType(
            {address.lower(): symbol for address, symbol in (symbols or {}).items()}
        )
        self._decimals = MappingProxyType(
            {address.lower(): int(value) for address, value in (decimals or {}).items()}
        )

    @property
    def symbols(self) -> Mapping[str, str]:
        return self._symbols

    @property
    def decimals(self) -> Mapping[str, int]:
        return self._decimals

    def symbol_for(self, contract_address: str) -> str | None:
        return self._symbols.get(contract_address.lower())

    def decimals_for(self, contract_address: str) -> int | None:
        return self._decimals.get(contract_address.lower())
