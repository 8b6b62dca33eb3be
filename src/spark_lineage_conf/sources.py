"""
Property sources and the helpers that read typed values out of them.

A property source is anything that can look up a single key and enumerate
the keys under a prefix. Mappings and pyspark's SparkConf are adapted
automatically; other hosts can implement `PropertySource` directly.
"""
import re
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Protocol, Tuple, runtime_checkable
from urllib.parse import urlparse

from .errors import MalformedValueError, MissingRequiredFieldError
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_PREFIX = "spark.openlineage."

_TRUE_VALUES = frozenset({"true"})
_FALSE_VALUES = frozenset({"false"})

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


@runtime_checkable
class PropertySource(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def items_with_prefix(self, prefix: str) -> Iterable[Tuple[str, str]]:
        ...


class DictPropertySource:
    """
    Read-only view over any string mapping (a dict, os.environ, a test fixture).
    """
    def __init__(self, properties: Mapping[str, str]):
        self._properties = properties

    def get(self, key: str) -> Optional[str]:
        return self._properties.get(key)

    def items_with_prefix(self, prefix: str) -> Iterator[Tuple[str, str]]:
        for key, value in self._properties.items():
            if key.startswith(prefix):
                yield key, value


class SparkConfPropertySource:
    """
    Adapts a pyspark SparkConf (or anything exposing `get` and `getAll`).
    Works with and without a running JVM.
    """
    def __init__(self, conf):
        self._conf = conf

    def get(self, key: str) -> Optional[str]:
        return self._conf.get(key)

    def items_with_prefix(self, prefix: str) -> Iterator[Tuple[str, str]]:
        for key, value in self._conf.getAll():
            if key.startswith(prefix):
                yield key, value


def as_property_source(source) -> PropertySource:
    """
    Wraps `source` in the matching adapter. Raises TypeError for unsupported objects.
    """
    if isinstance(source, PropertySource):
        return source
    if isinstance(source, Mapping):
        return DictPropertySource(source)
    if hasattr(source, "getAll"):
        return SparkConfPropertySource(source)
    raise TypeError(f"Unsupported property source: {type(source).__name__}")


def extract_namespace(source, prefix: str = DEFAULT_PREFIX) -> Dict[str, str]:
    """
    Returns every property under `prefix` with the prefix stripped.
    Keys outside the namespace are ignored; an empty result is a valid, fully
    defaulted configuration.
    """
    flat: Dict[str, str] = {}
    for key, value in as_property_source(source).items_with_prefix(prefix):
        suffix = key[len(prefix):]
        if suffix:
            flat[suffix] = value
    return flat


def extract_group(flat: Mapping[str, str], group: str) -> Dict[str, str]:
    """
    Returns the `group.<sub-key>` entries of `flat` keyed by sub-key.
    Sub-keys may contain further dots and are not interpreted.
    """
    prefix = group + "."
    return {
        key[len(prefix):]: value
        for key, value in flat.items()
        if key.startswith(prefix) and len(key) > len(prefix)
    }


def frozen_map(mapping: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    """
    Returns a read-only copy of `mapping` for use inside resolved configs.
    """
    return MappingProxyType(dict(mapping or {}))


def optional(flat: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Returns the value for `key`, or `default` when it is absent or empty.
    """
    value = flat.get(key)
    if value is None or value == "":
        return default
    return value


def require(flat: Mapping[str, str], key: str, variant: Optional[str] = None) -> str:
    value = optional(flat, key)
    if value is None:
        raise MissingRequiredFieldError(key, variant)
    return value


def first_present(flat: Mapping[str, str], keys: Tuple[str, ...]) -> Optional[str]:
    """
    Resolves an alias chain: returns the value of the first key in `keys`
    that is set. Keys after the first are legacy spellings.
    """
    preferred = keys[0]
    for key in keys:
        value = optional(flat, key)
        if value is None:
            continue
        if key != preferred:
            logger.warning("legacy_key_used", legacy_key=key, preferred_key=preferred)
        return value
    return None


def parse_int(key: str, value: str, minimum: Optional[int] = None) -> int:
    """
    Parses a plain ASCII decimal integer that fits a 32-bit signed int.
    Python-only spellings such as "5_000" are rejected.
    """
    stripped = value.strip()
    if not _INT_PATTERN.fullmatch(stripped):
        raise MalformedValueError(key, value, "an integer")
    parsed = int(stripped)
    if not INT_MIN <= parsed <= INT_MAX:
        raise MalformedValueError(key, value, f"an integer between {INT_MIN} and {INT_MAX}")
    if minimum is not None and parsed < minimum:
        raise MalformedValueError(key, value, f"an integer >= {minimum}")
    return parsed


def parse_bool(key: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise MalformedValueError(key, value, "'true' or 'false'")


def parse_url(key: str, value: str) -> str:
    """
    Checks that `value` is an absolute URL with a scheme and a host.
    The value is returned unchanged; reachability is not checked.
    """
    try:
        parsed = urlparse(value)
        # Accessing port validates it.
        parsed.port
    except ValueError as e:
        raise MalformedValueError(key, value, "an absolute URL") from e
    if not parsed.scheme or not parsed.netloc:
        raise MalformedValueError(key, value, "an absolute URL")
    return value


def parse_list(key: str, value: str) -> List[str]:
    """
    Parses a bracketed, semicolon separated list such as `[a;b;c]`.
    Entries are stripped and empty entries dropped; order is preserved.
    """
    stripped = value.strip()
    if len(stripped) < 2 or not stripped.startswith("[") or not stripped.endswith("]"):
        raise MalformedValueError(key, value, "a bracketed list like [a;b]")
    return [item.strip() for item in stripped[1:-1].split(";") if item.strip()]


def parse_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]
