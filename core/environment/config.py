import os
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SYMBOL_OVERRIDES = {
    # symbol() returns bytes32 or an empty string on these contracts
    "0x86fa049857e0209aa7d9e616f7eb3b3b78ecfdb0": "EOS",
    "0x9f8f72aa9304c8b593d555f12ef6589cc3a579a2": "MKR",
}


class Settings(BaseSettings):
    """
    Application settings using Pydantic Settings.

    Attributes
    ----------
    rpc_url : str
        JSON-RPC endpoint of the Ethereum-compatible node
    rpc_request_timeout : float
        Timeout in seconds for a single log query
    scan_window_size : int
        Default number of blocks per log query
    scan_max_blocks : int
        Largest block range accepted by the transfers endpoint
    symbol_overrides : dict[str, str]
        Contract address to symbol, used instead of calling symbol()
    decimals_overrides : dict[str, int]
        Contract address to decimals, used when decimals() fails
    log_level : str
        Root logging level
    log_file : str | None
        Optional file the logs are also written to
    """

    rpc_url: str
    rpc_request_timeout: float = 30.0

    scan_window_size: int = Field(default=2000, ge=1)
    scan_max_blocks: int = Field(default=1_000_000, ge=1)

    symbol_overrides: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SYMBOL_OVERRIDES)
    )
    decimals_overrides: dict[str, int] = Field(default_factory=dict)

    log_level: str = "INFO"
    log_file: str | None = None

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False
    )
