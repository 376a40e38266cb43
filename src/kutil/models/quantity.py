"""Resource quantities as seen by the aggregator.

The aggregator only ever asks a quantity for its value in milli-units
(CPU) or in whole units (memory bytes, pod counts). ``Quantity`` is that
capability; ``ParsedQuantity`` implements it on top of the Kubernetes
quantity notation ("250m", "2Gi", "110", "1.5").
"""

import math
from decimal import Decimal
from typing import Any, Mapping, Optional, Protocol

import structlog
from kubernetes.utils import parse_quantity

logger = structlog.get_logger(__name__)


class Quantity(Protocol):
    """Narrow view of a resource quantity."""

    def milli_value(self) -> int:
        ...

    def value(self) -> int:
        ...


class ParsedQuantity:
    """Kubernetes quantity string parsed once.

    Missing or malformed input parses to zero: partial data (best-effort
    pods, nodes that have not reported yet) is common and must not abort
    a report.
    """

    __slots__ = ("raw", "_amount")

    def __init__(self, raw: Optional[Any]):
        self.raw = raw
        self._amount = self._parse(raw)

    @staticmethod
    def _parse(raw: Optional[Any]) -> Decimal:
        if raw is None or raw == "":
            return Decimal(0)
        try:
            return parse_quantity(raw)
        except (ValueError, TypeError, ArithmeticError) as e:
            logger.debug("Treating malformed quantity as zero", quantity=str(raw), error=str(e))
            return Decimal(0)

    def milli_value(self) -> int:
        # Rounded up, matching how Kubernetes reports fractional milli-units
        return math.ceil(self._amount * 1000)

    def value(self) -> int:
        return math.ceil(self._amount)

    def __repr__(self) -> str:
        return f"ParsedQuantity({self.raw!r})"


ZERO = ParsedQuantity(None)


def quantity_of(resources: Optional[Mapping[str, Any]], name: str) -> Quantity:
    """Look up ``name`` in a resource list, zero when absent."""
    if not resources:
        return ZERO
    raw = resources.get(name)
    if raw is None:
        return ZERO
    return ParsedQuantity(raw)
