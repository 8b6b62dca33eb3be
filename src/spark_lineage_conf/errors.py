from typing import Iterable, Optional


class ConfigurationError(ValueError):
    """
    Base class for every failure raised while resolving OpenLineage properties.
    Carries the offending key so callers can point users at the exact property.
    """
    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message
        super().__init__(f"{key}: {message}")

    def with_prefix(self, prefix: str) -> 'ConfigurationError':
        """
        Returns a copy of this error whose key is qualified with `prefix`.
        Scoped builders report bare keys; each enclosing scope adds its prefix.
        """
        error = self.__class__.__new__(self.__class__)
        error.__dict__.update(self.__dict__)
        error.key = prefix + self.key
        error.args = (f"{error.key}: {self.message}",)
        return error


class UnknownDiscriminatorError(ConfigurationError):
    """
    Raised when a `type` key holds a value outside its family's recognized set.
    """
    def __init__(self, key: str, value: str, recognized: Iterable[str]):
        self.value = value
        self.recognized = tuple(sorted(recognized))
        super().__init__(
            key,
            f"unknown type '{value}', expected one of {list(self.recognized)}",
        )


class MissingRequiredFieldError(ConfigurationError):
    """
    Raised when the selected variant requires a key that is absent or empty.
    """
    def __init__(self, key: str, variant: Optional[str] = None):
        self.variant = variant
        detail = f"required by '{variant}'" if variant else "required"
        super().__init__(key, f"missing value, {detail}")


class MalformedValueError(ConfigurationError):
    """
    Raised when a present value cannot be coerced to its declared type
    (URL, integer, boolean, bracketed list).
    """
    def __init__(self, key: str, value: str, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(key, f"invalid value '{value}', expected {expected}")
