def format_amount(amount: int, decimals: int) -> str:
    """
    Render an on-chain integer amount as a fixed-point decimal string.

    The fractional part always carries exactly ``decimals`` digits, except
    when all of them are zero, in which case it collapses to a single ``0``.

    Parameters
    ----------
    amount : int
        Amount in the token's smallest unit
    decimals : int
        Number of decimal places of the token

    Returns
    -------
    str
        Formatted amount, e.g. ``format_amount(123, 18) == "0.000000000000000123"``

    Raises
    ------
    ValueError
        If amount or decimals is negative
    """
    if amount < 0 or decimals < 0:
        raise ValueError("amount and decimals must be non-negative")

    digits = str(amount)
    if decimals == 0:
        return digits

    digits = digits.rjust(decimals + 1, "0")
    integer_part = digits[:-decimals].lstrip("0") or "0"
    fractional_part = digits[-decimals:]
    if not fractional_part.strip("0"):
        fractional_part = "0"

    return f"{integer_part}.{fractional_part}"
