from dataclasses import dataclass
from typing import Mapping, Optional

from .dispatch import dispatch_scope
from .sources import require


@dataclass(frozen=True)
class StaticCircuitBreakerConfig:
    """
    Circuit breaker that replays a fixed sequence of open/closed states.
    `values_returned` is kept verbatim (e.g. "false,true"); the breaker
    implementation decides how to read it.
    """
    values_returned: str


CircuitBreakerConfig = Optional[StaticCircuitBreakerConfig]


def build_static(flat: Mapping[str, str]) -> StaticCircuitBreakerConfig:
    return StaticCircuitBreakerConfig(values_returned=require(flat, "valuesReturned", "static"))


def _no_circuit_breaker(flat: Mapping[str, str]) -> None:
    return None


CIRCUIT_BREAKER_BUILDERS = {
    "static": build_static,
}


def build_circuit_breaker(flat: Mapping[str, str]) -> CircuitBreakerConfig:
    return dispatch_scope(
        flat, "circuitBreaker", CIRCUIT_BREAKER_BUILDERS, default=_no_circuit_breaker
    )
