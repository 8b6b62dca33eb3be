"""
Transport configurations and the builders that read them from
`spark.openlineage.transport.*` properties.

Each builder takes the transport scope with the `transport.` prefix already
stripped, so it reads `url` rather than `transport.url`.
"""
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from .dispatch import dispatch_scope
from .sources import extract_group, first_present, frozen_map, optional, parse_int, parse_url, require

DEFAULT_HTTP_ENDPOINT = "/api/v1/lineage"
DEFAULT_HTTP_TIMEOUT_MS = 5000

# Preferred key first, then legacy spellings.
KAFKA_MESSAGE_KEY_ALIASES = ("messageKey", "localServerId")


@dataclass(frozen=True)
class ApiKeyTokenProvider:
    api_key: str = field(repr=False)

    @property
    def token(self) -> str:
        return "Bearer " + self.api_key


@dataclass(frozen=True)
class ConsoleConfig:
    pass


@dataclass(frozen=True)
class HttpConfig:
    url: str
    endpoint: str = DEFAULT_HTTP_ENDPOINT
    timeout: int = DEFAULT_HTTP_TIMEOUT_MS
    auth: Optional[ApiKeyTokenProvider] = None
    headers: Mapping[str, str] = field(default_factory=frozen_map)
    url_params: Mapping[str, str] = field(default_factory=frozen_map)

    def __post_init__(self):
        object.__setattr__(self, "headers", frozen_map(self.headers))
        object.__setattr__(self, "url_params", frozen_map(self.url_params))


@dataclass(frozen=True)
class KafkaConfig:
    topic_name: str
    message_key: Optional[str] = None
    properties: Mapping[str, str] = field(default_factory=frozen_map)

    def __post_init__(self):
        object.__setattr__(self, "properties", frozen_map(self.properties))


@dataclass(frozen=True)
class KinesisConfig:
    stream_name: str
    region: Optional[str] = None
    role_arn: Optional[str] = None
    properties: Mapping[str, str] = field(default_factory=frozen_map)

    def __post_init__(self):
        object.__setattr__(self, "properties", frozen_map(self.properties))


TransportConfig = Union[ConsoleConfig, HttpConfig, KafkaConfig, KinesisConfig]


def build_api_key_auth(flat: Mapping[str, str]) -> ApiKeyTokenProvider:
    return ApiKeyTokenProvider(api_key=require(flat, "apiKey", "api_key"))


def _no_auth(flat: Mapping[str, str]) -> None:
    return None


AUTH_BUILDERS = {
    "api_key": build_api_key_auth,
}


def build_console(flat: Mapping[str, str]) -> ConsoleConfig:
    return ConsoleConfig()


def build_http(flat: Mapping[str, str]) -> HttpConfig:
    url = parse_url("url", require(flat, "url", "http"))

    timeout = DEFAULT_HTTP_TIMEOUT_MS
    raw_timeout = optional(flat, "timeout")
    if raw_timeout is not None:
        timeout = parse_int("timeout", raw_timeout, minimum=0)

    return HttpConfig(
        url=url,
        endpoint=optional(flat, "endpoint", DEFAULT_HTTP_ENDPOINT),
        timeout=timeout,
        auth=dispatch_scope(flat, "auth", AUTH_BUILDERS, default=_no_auth),
        headers=extract_group(flat, "headers"),
        url_params=extract_group(flat, "urlParams"),
    )


def build_kafka(flat: Mapping[str, str]) -> KafkaConfig:
    """
    `localServerId` is the pre-1.0 name of `messageKey` and only applies when
    `messageKey` is not set.
    """
    return KafkaConfig(
        topic_name=require(flat, "topicName", "kafka"),
        message_key=first_present(flat, KAFKA_MESSAGE_KEY_ALIASES),
        properties=extract_group(flat, "properties"),
    )


def build_kinesis(flat: Mapping[str, str]) -> KinesisConfig:
    return KinesisConfig(
        stream_name=require(flat, "streamName", "kinesis"),
        region=optional(flat, "region"),
        role_arn=optional(flat, "roleArn"),
        properties=extract_group(flat, "properties"),
    )


TRANSPORT_BUILDERS = {
    "console": build_console,
    "http": build_http,
    "kafka": build_kafka,
    "kinesis": build_kinesis,
}


def build_transport(flat: Mapping[str, str]) -> TransportConfig:
    """
    Builds the transport from the `transport.*` keys of a namespace-stripped
    property map. Console is used when `transport.type` is not set.
    """
    return dispatch_scope(flat, "transport", TRANSPORT_BUILDERS, default=build_console)
