# src/kubesize/utils/k8s_utils.py
"""
Helpers for Kubernetes resource quantities.

Quantities are parsed into exact ``Decimal`` values (cores for CPU, bytes for
memory, a plain count for pods) so they can be summed without rounding.
"""

import re
from decimal import (
    ROUND_CEILING,
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Optional, Union

from ..core.exceptions import QuantityError

_BINARY_SUFFIXES = {
    "Ki": Decimal(1024),
    "Mi": Decimal(1024) ** 2,
    "Gi": Decimal(1024) ** 3,
    "Ti": Decimal(1024) ** 4,
    "Pi": Decimal(1024) ** 5,
    "Ei": Decimal(1024) ** 6,
}

_DECIMAL_SUFFIXES = {
    "n": Decimal("0.000000001"),
    "u": Decimal("0.000001"),
    "m": Decimal("0.001"),
    "": Decimal(1),
    "k": Decimal(1000),
    "M": Decimal(1000) ** 2,
    "G": Decimal(1000) ** 3,
    "T": Decimal(1000) ** 4,
    "P": Decimal(1000) ** 5,
    "E": Decimal(1000) ** 6,
}

_QUANTITY_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))"
    r"(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE]|[eE][+-]?\d+)?$"
)

QuantityInput = Union[str, int, Decimal, None]

# Sums of nano-precision quantities up to exa scale need far fewer digits;
# anything beyond this raises instead of rounding.
QUANTITY_CONTEXT = Context(prec=100, traps=[InvalidOperation, DivisionByZero, Overflow, Inexact])


def exact_arithmetic():
    """Context manager for Decimal arithmetic on quantities that never rounds."""
    return localcontext(QUANTITY_CONTEXT)


def parse_quantity(quantity: QuantityInput) -> Decimal:
    """
    Parse a Kubernetes quantity into a Decimal.

    ``None`` and the empty string mean "not set" and yield zero. Anything that
    is not a valid quantity raises QuantityError.
    """
    if quantity is None:
        return Decimal(0)
    if isinstance(quantity, bool):
        raise QuantityError(f"invalid quantity: {quantity!r}")
    if isinstance(quantity, (int, Decimal)):
        return Decimal(quantity)

    text = str(quantity).strip()
    if not text:
        return Decimal(0)

    match = _QUANTITY_RE.match(text)
    if not match:
        raise QuantityError(f"invalid quantity: {quantity!r}")

    number = Decimal(match.group("number"))
    suffix = match.group("suffix") or ""

    try:
        with exact_arithmetic():
            if suffix in _BINARY_SUFFIXES:
                return number * _BINARY_SUFFIXES[suffix]
            if suffix in _DECIMAL_SUFFIXES:
                return number * _DECIMAL_SUFFIXES[suffix]
            # Decimal exponent, e.g. "1e3" or "12E-3".
            return number.scaleb(int(suffix[1:]))
    except DecimalException as e:
        raise QuantityError(f"quantity out of range: {quantity!r}") from e


def resource_quantity(resources: Optional[dict], name: str) -> Decimal:
    """Return the parsed quantity for ``name`` from a resource map, zero when absent."""
    if not resources:
        return Decimal(0)
    return parse_quantity(resources.get(name))


def ceil_int(value: Decimal) -> int:
    """Round towards positive infinity, the way Kubernetes reports Value()."""
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def to_millicores(cores: Decimal) -> int:
    """Converts cores to millicores, rounding up."""
    return ceil_int(cores * 1000)


def format_cpu_readable(cores: Decimal) -> str:
    """Cores with at most three decimals, e.g. ``2.5``."""
    value = Decimal(to_millicores(cores)) / 1000
    return _strip_zeros(value)


def format_memory_readable(num_bytes: Decimal) -> str:
    """Memory as GiB with one decimal, e.g. ``7.0GiB``."""
    gib = Decimal(num_bytes) / _BINARY_SUFFIXES["Gi"]
    return f"{gib.quantize(Decimal('0.1'))}GiB"


def format_quantity(value: Decimal, binary: bool = False) -> str:
    """
    Render a Decimal as a canonical Kubernetes quantity string.

    Binary quantities (memory) use the largest ``Ki``..``Ei`` suffix that
    divides the value exactly. Decimal quantities (cpu, pods) fall back to
    ``m``/``u``/``n`` for fractional values. Sub-nano precision is rounded up.
    """
    value = Decimal(value)
    if value == 0:
        return "0"
    if value < 0:
        return "-" + format_quantity(-value, binary=binary)

    if value == value.to_integral_value():
        integer = int(value)
        if binary:
            for suffix, factor in reversed(list(_BINARY_SUFFIXES.items())):
                if integer % int(factor) == 0:
                    return f"{integer // int(factor)}{suffix}"
        else:
            for suffix in ("E", "P", "T", "G", "M", "k"):
                factor = int(_DECIMAL_SUFFIXES[suffix])
                if integer % factor == 0:
                    return f"{integer // factor}{suffix}"
        return str(integer)

    for suffix in ("m", "u"):
        scaled = value / _DECIMAL_SUFFIXES[suffix]
        if scaled == scaled.to_integral_value():
            return f"{int(scaled)}{suffix}"
    return f"{ceil_int(value / _DECIMAL_SUFFIXES['n'])}n"


def _strip_zeros(value: Decimal) -> str:
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
