from typing import List

_MONEY_SUFFIXES = ["", "k", "m", "b", "t", "q"]


def format_money(amount: float) -> str:
    """Format like the game's ``$0.00a`` pattern, e.g. ``$1.23m``."""
    sign = "-" if amount < 0 else ""
    value = abs(float(amount))
    index = 0
    while value >= 1000 and index < len(_MONEY_SUFFIXES) - 1:
        value /= 1000.0
        index += 1
    # Rounding can carry into the next suffix (999.999k -> 1000.00k)
    if round(value, 2) >= 1000 and index < len(_MONEY_SUFFIXES) - 1:
        value /= 1000.0
        index += 1
    return f"{sign}${value:.2f}{_MONEY_SUFFIXES[index]}"


def format_time(millis: float) -> str:
    """Format a duration like ``1 minute 5 seconds``."""
    total_seconds = int(max(millis, 0) // 1000)
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    parts: List[str] = []
    for amount, unit in ((days, "day"), (hours, "hour"), (minutes, "minute"), (seconds, "second")):
        if amount:
            parts.append(f"{amount} {unit}{'' if amount == 1 else 's'}")
    return " ".join(parts) if parts else "0 seconds"
