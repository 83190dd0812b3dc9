from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

def format_rupiah(amount: Decimal | int | float) -> str:
    """
    Format an amount as Indonesian Rupiah, id-ID style.

    5000000   -> Rp 5.000.000,00
    -50000.5  -> -Rp 50.000,50
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""

    # en-US grouping first, then swap separators
    text = f"{abs(value):,.2f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}Rp {text}"

def format_date(value: datetime) -> str:
    """Local calendar date as d/m/yyyy"""
    local = value.astimezone()
    return f"{local.day}/{local.month}/{local.year}"
