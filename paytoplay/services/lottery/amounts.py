def one_unit(decimals: int) -> int:
    """Smallest-unit value of one whole coin."""
    return 10 ** int(decimals)


def parse_amount(value) -> int:
    """Accept a non-negative int or a string of digits.

    Large amounts travel as strings since they do not fit a JSON double.
    """
    if isinstance(value, bool):
        raise ValueError('amount must be an integer')
    if isinstance(value, int):
        amount = value
    elif isinstance(value, str) and value.strip().isdigit():
        amount = int(value.strip())
    else:
        raise ValueError('amount must be an integer')
    if amount < 0:
        raise ValueError('amount must not be negative')
    return amount


def format_amount(amount: int, decimals: int, symbol: str) -> str:
    """Render an amount in whole coins, e.g. ``1.5 NEAR``."""
    decimals = int(decimals)
    whole, frac = divmod(int(amount), one_unit(decimals))
    text = str(whole)
    if decimals and frac:
        text += '.' + str(frac).rjust(decimals, '0').rstrip('0')
    return f"{text} {symbol}"
