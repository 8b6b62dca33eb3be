from typing import Any, Callable, Dict, Mapping, Optional

from .errors import ConfigurationError, MissingRequiredFieldError, UnknownDiscriminatorError
from .logging import get_logger
from .sources import extract_group

logger = get_logger(__name__)

Builder = Callable[[Mapping[str, str]], Any]

TYPE_KEY = "type"


def dispatch(
    flat: Mapping[str, str],
    builders: Dict[str, Builder],
    default: Optional[Builder] = None,
):
    """
    Selects a builder by the `type` key of `flat` and returns what it builds.

    `flat` is already scoped to one family (e.g. the `transport.` keys with
    that prefix stripped). An absent `type` runs `default`; when there is no
    default the family has no implicit variant and `type` is required.
    Matching is exact and case-sensitive.
    """
    type_name = flat.get(TYPE_KEY) or None
    if type_name is None:
        if default is None:
            raise MissingRequiredFieldError(TYPE_KEY)
        return default(flat)

    try:
        builder = builders[type_name]
    except KeyError:
        logger.debug("unknown_discriminator", value=type_name, recognized=sorted(builders))
        raise UnknownDiscriminatorError(TYPE_KEY, type_name, builders.keys()) from None
    return builder(flat)


def dispatch_scope(
    flat: Mapping[str, str],
    scope: str,
    builders: Dict[str, Builder],
    default: Optional[Builder] = None,
):
    """
    Runs `dispatch` over the `scope.` keys of `flat`. Errors raised inside
    the scope have their key qualified with `scope.`.
    """
    try:
        return dispatch(extract_group(flat, scope), builders, default)
    except ConfigurationError as e:
        raise e.with_prefix(scope + ".") from e
