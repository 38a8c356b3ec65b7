import pytest
from pydantic import ValidationError
from web3 import AsyncWeb3

from conftest import EOS, OTHER, TOKEN, WALLET
from core.exceptions import InvalidAddressException
from erc20.addresses import parse_address, parse_address_pair
from erc20.entities import TokenBalance, TransferRecord
from erc20.overrides import TokenOverrides


class TestParseAddress:
    """
    Unit tests for address parsing and normalisation.
    """

    def test_casing_is_ignored(self):
        checksum = AsyncWeb3.to_checksum_address(OTHER)
        assert parse_address(OTHER) == checksum
        assert parse_address(OTHER.upper().replace("0X", "0x")) == checksum
        assert parse_address(checksum) == checksum

    @pytest.mark.parametrize(
        "value",
        ["invalid_address", "0x123", "0x" + "g" * 40, "", TOKEN + "00"],
    )
    def test_malformed_address_rejected(self, value):
        with pytest.raises(InvalidAddressException):
            parse_address(value)

    def test_pair_rejects_same_address_in_any_casing(self):
        with pytest.raises(InvalidAddressException):
            parse_address_pair(
                "0x42D4722B804585CDf6406fa7739e794b0Aa8b1FF",
                "0x42d4722b804585cdf6406fa7739e794b0aa8b1ff",
            )

    def test_pair_returns_checksummed_addresses(self):
        contract, wallet = parse_address_pair(TOKEN, WALLET)
        assert contract == AsyncWeb3.to_checksum_address(TOKEN)
        assert wallet == AsyncWeb3.to_checksum_address(WALLET)


class TestTokenOverrides:
    """
    Unit tests for the read-only override tables.
    """

    def test_symbol_lookup_is_case_insensitive(self):
        overrides = TokenOverrides(symbols={EOS.lower(): "EOS"})
        assert overrides.symbol_for(EOS) == "EOS"
        assert overrides.symbol_for(EOS.upper().replace("0X", "0x")) == "EOS"
        assert overrides.symbol_for(TOKEN) is None

    def test_decimals_lookup(self):
        overrides = TokenOverrides(decimals={TOKEN: 8})
        assert overrides.decimals_for(AsyncWeb3.to_checksum_address(TOKEN)) == 8
        assert overrides.decimals_for(WALLET) is None

    def test_tables_are_read_only(self):
        overrides = TokenOverrides(symbols={EOS: "EOS"})
        with pytest.raises(TypeError):
            overrides.symbols[TOKEN] = "TKN"

    def test_source_mapping_changes_do_not_leak(self):
        symbols = {EOS: "EOS"}
        overrides = TokenOverrides(symbols=symbols)
        symbols[TOKEN] = "TKN"
        assert overrides.symbol_for(TOKEN) is None


class TestEntities:
    """
    Unit tests for the token balance and transfer records.
    """

    def test_token_balance_rejects_same_contract_and_wallet(self):
        with pytest.raises(InvalidAddressException):
            TokenBalance(contract=OTHER, wallet=OTHER.upper().replace("0X", "0x"),
                         symbol="TKN", decimals=18, balance=0)

    def test_token_balance_rejects_malformed_address(self):
        with pytest.raises(InvalidAddressException):
            TokenBalance(contract="0x123", wallet=WALLET, symbol="TKN", decimals=18, balance=0)

    def test_token_balance_is_immutable_and_formats(self):
        balance = TokenBalance(
            contract=TOKEN,
            wallet=WALLET,
            symbol="TKN",
            decimals=18,
            balance=600000 * 10**18,
            eth_balance=1020095885777777767,
        )
        assert balance.contract == AsyncWeb3.to_checksum_address(TOKEN)
        assert balance.balance_string() == "600000.0"
        assert balance.eth_balance_string() == "1.020095885777777767"
        with pytest.raises(ValidationError):
            balance.balance = 1

    def test_transfer_record_line(self):
        record = TransferRecord(
            block_number=7005494,
            block_hash="0xabc",
            transaction_hash="0xdef",
            log_index=3,
            from_address="0xFrom",
            to_address="0xTo",
            value=10**20,
        )
        assert record.as_line() == "7005494,0xabc,0xFrom,0xTo,100000000000000000000"
