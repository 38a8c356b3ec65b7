from abc import ABC


class BaseCustomException(Exception, ABC):
    """
    Base class for all custom exceptions.
    """

    def __init__(self, message: str | None = None):
        self.message = message or self.get_default_message()
        super().__init__(self.message)

    def get_default_message(self) -> str:
        """
        Return default error message.

        Returns
        -------
        str
            Default error message
        """
        return "error.unknown"

    def get_status_code(self) -> int:
        """
        Return HTTP status code for exception.

        Returns
        -------
        int
            HTTP status code
        """
        return 500


class BadRequestException(BaseCustomException):
    """Bad request exception (400)."""

    def get_status_code(self) -> int:
        return 400


class InvalidAddressException(BadRequestException):
    """Invalid or self-referential address exception."""

    def get_default_message(self) -> str:
        return "error.address.invalid"


class InvalidScanRangeException(BadRequestException):
    """Invalid block range or window size exception."""

    def get_default_message(self) -> str:
        return "error.scan.invalid_range"


class InvalidABIException(BadRequestException):
    """ABI does not describe an ERC-20 Transfer event."""

    def get_default_message(self) -> str:
        return "error.abi.invalid"


class RPCException(BaseCustomException):
    """RPC error exception (502)."""

    def get_default_message(self) -> str:
        return "error.rpc.failed"

    def get_status_code(self) -> int:
        return 502


class MetadataUnavailableException(RPCException):
    """A required contract read failed and no override is configured."""

    def get_default_message(self) -> str:
        return "error.metadata.unavailable"


class ResolutionFailedException(RPCException):
    """
    Token balance could not be assembled.

    Parameters
    ----------
    cause : Exception
        Underlying failure
    """

    def __init__(self, cause: Exception, message: str | None = None):
        self.cause = cause
        super().__init__(message or f"error.resolution.failed: {cause}")


class ScanInterruptedException(RPCException):
    """
    Log query for a block window failed.

    Parameters
    ----------
    from_block : int
        First block of the failing window
    to_block : int
        Last block of the failing window
    cause : Exception
        Underlying failure
    """

    def __init__(self, from_block: int, to_block: int, cause: Exception):
        self.from_block = from_block
        self.to_block = to_block
        self.cause = cause
        super().__init__(
            f"error.scan.interrupted: blocks {from_block}-{to_block}: {cause}"
        )


class DecodeFailedException(RPCException):
    """
    Transfer log could not be decoded.

    Parameters
    ----------
    block_number : int | None
        Block of the offending log
    log_index : int | None
        Index of the offending log within the block
    cause : Exception
        Underlying failure
    """

    def __init__(self, block_number: int | None, log_index: int | None, cause: Exception):
        self.block_number = block_number
        self.log_index = log_index
        self.cause = cause
        super().__init__(
            f"error.scan.decode_failed: block {block_number} log {log_index}: {cause}"
        )
