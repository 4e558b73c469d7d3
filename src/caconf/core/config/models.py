"""Configuration shapes shared by the CA services.

Service configs are assembled from a few shared shapes. Database settings,
service transport settings and SMTP credentials are held as named fields and
their keys sit flat in the service's section of the document:

```yaml
ocspUpdater:
  debugAddr: localhost:8006
  dbConnectFile: /etc/boulder/secrets/ocsp_updater_dburl
  maxDBConns: 10
  newCertificateWindow: 1s
  ocspMinTimeToExpiry: 72h
```
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import ClassVar

from pydantic import AliasChoices, BaseModel, Field

from caconf.models import ConfigBaseModel, EmbeddingModel

from .challenges import is_valid_challenge, validate_challenges
from .duration import ConfigDuration
from .indirect import IndirectConfigModel, TrimPolicy, resolve_indirect

logger = logging.getLogger(__name__)

__all__ = [
    "PasswordConfig",
    "DBConfig",
    "SMTPConfig",
    "TLSConfig",
    "RPCServerConfig",
    "ReconnectTimeouts",
    "AMQPConfig",
    "GRPCClientConfig",
    "GRPCServerConfig",
    "ServiceConfig",
    "HostnamePolicyConfig",
    "PAConfig",
    "OCSPUpdaterConfig",
    "CAADistributedResolverConfig",
    "SyslogConfig",
    "StatsdConfig",
    "CONFIG_KINDS",
    "iter_indirect_values",
    "resolve_indirect_values",
]


class PasswordConfig(IndirectConfigModel):
    """A password given inline or read from a file.

    Only trailing newlines are stripped from the file, so passwords may start or
    end with spaces. No password at all resolves to an empty string.
    """

    password: str = ""
    password_file: str = ""

    def get_password(self) -> str:
        return resolve_indirect(
            self.password, self.password_file, trim=TrimPolicy.TRAILING_NEWLINES
        )

    def resolve(self) -> str:
        return self.get_password()

    def uses_file(self) -> bool:
        return bool(self.password_file)


class DBConfig(IndirectConfigModel):
    """How to connect to a database.

    The connect string may hold a password, so it can live in a separate file.
    Leading and trailing whitespace is stripped from the file.
    """

    db_connect: str = ""
    db_connect_file: str = ""
    max_db_conns: int = Field(default=0, alias="maxDBConns")

    def url(self) -> str:
        return resolve_indirect(
            self.db_connect, self.db_connect_file, trim=TrimPolicy.SURROUNDING_WHITESPACE
        )

    def resolve(self) -> str:
        return self.url()

    def uses_file(self) -> bool:
        return bool(self.db_connect_file)


class SMTPConfig(EmbeddingModel):
    embedded_fields: ClassVar[tuple[str, ...]] = ("credentials",)

    credentials: PasswordConfig = Field(default_factory=PasswordConfig)
    server: str = ""
    port: str = ""
    username: str = ""

    def get_password(self) -> str:
        return self.credentials.get_password()


class TLSConfig(ConfigBaseModel):
    """Certificates and a key for authenticated TLS.

    Unset paths stay None so an omitted key is distinguishable from an empty one.
    """

    cert_file: str | None = None
    key_file: str | None = None
    ca_cert_file: str | None = None


class RPCServerConfig(ConfigBaseModel):
    # Queue name where the server receives requests
    server: str = ""
    rpc_timeout: ConfigDuration = ConfigDuration()


class ReconnectTimeouts(ConfigBaseModel):
    base: ConfigDuration = ConfigDuration()
    max: ConfigDuration = ConfigDuration()


class AMQPConfig(IndirectConfigModel):
    """How to connect to AMQP and how to reach each RPC service over it.

    The server URL includes credentials, so it can be read from
    ``serverURLFile`` instead. Unlike passwords, a server URL is required.
    """

    server_url_file: str = Field(default="", alias="serverURLFile")
    server: str = ""
    insecure: bool = False
    ra: RPCServerConfig | None = Field(default=None, alias="RA")
    va: RPCServerConfig | None = Field(default=None, alias="VA")
    sa: RPCServerConfig | None = Field(default=None, alias="SA")
    ca: RPCServerConfig | None = Field(default=None, alias="CA")
    publisher: RPCServerConfig | None = None
    tls: TLSConfig | None = None
    # Queue to listen on when acting as an RPC server
    service_queue: str = ""
    reconnect_timeouts: ReconnectTimeouts = Field(default_factory=ReconnectTimeouts)

    def server_url(self) -> str:
        return resolve_indirect(
            self.server,
            self.server_url_file,
            trim=TrimPolicy.TRAILING_NEWLINES,
            required_field="server",
        )

    def resolve(self) -> str:
        return self.server_url()

    def uses_file(self) -> bool:
        return bool(self.server_url_file)


class GRPCClientConfig(ConfigBaseModel):
    server_addresses: list[str] = Field(default_factory=list)
    server_issuer_path: str = ""
    client_certificate_path: str = ""
    client_key_path: str = ""
    timeout: ConfigDuration = ConfigDuration()


class GRPCServerConfig(ConfigBaseModel):
    """Listener settings for a gRPC service.

    YAML documents have historically spelled the path keys in kebab-case
    (`server-certificate-path`); both spellings are read and camelCase is written.
    """

    address: str = ""
    server_certificate_path: str = Field(
        "", validation_alias=AliasChoices("serverCertificatePath", "server-certificate-path")
    )
    server_key_path: str = Field(
        "", validation_alias=AliasChoices("serverKeyPath", "server-key-path")
    )
    client_issuer_path: str = Field(
        "", validation_alias=AliasChoices("clientIssuerPath", "client-issuer-path")
    )


class ServiceConfig(ConfigBaseModel):
    """Settings common to every service."""

    # Address to serve the /debug handlers on
    debug_addr: str = ""
    amqp: AMQPConfig | None = None
    grpc: GRPCServerConfig | None = None


class HostnamePolicyConfig(ConfigBaseModel):
    hostname_policy_file: str = ""


class PAConfig(EmbeddingModel):
    """Policy authority settings: its database, policies and offered challenges."""

    embedded_fields: ClassVar[tuple[str, ...]] = ("db",)

    db: DBConfig = Field(default_factory=DBConfig)
    enforce_policy_whitelist: bool = False
    challenges: dict[str, bool] = Field(default_factory=dict)

    def db_url(self) -> str:
        return self.db.url()

    def check_challenges(self, is_valid=is_valid_challenge) -> None:
        """Check that the challenge map is non-empty and names only known challenges."""
        validate_challenges(self.challenges, is_valid)


class OCSPUpdaterConfig(EmbeddingModel):
    """Tick windows and batch sizes for the OCSP (and SCT) updater."""

    embedded_fields: ClassVar[tuple[str, ...]] = ("service", "db")

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    db: DBConfig = Field(default_factory=DBConfig)

    new_certificate_window: ConfigDuration = ConfigDuration()
    old_ocsp_window: ConfigDuration = Field(default=ConfigDuration(), alias="oldOCSPWindow")
    missing_sct_window: ConfigDuration = Field(default=ConfigDuration(), alias="missingSCTWindow")
    revoked_certificate_window: ConfigDuration = ConfigDuration()

    new_certificate_batch_size: int = 0
    old_ocsp_batch_size: int = Field(default=0, alias="oldOCSPBatchSize")
    missing_sct_batch_size: int = Field(default=0, alias="missingSCTBatchSize")
    revoked_certificate_batch_size: int = 0

    ocsp_min_time_to_expiry: ConfigDuration = Field(
        default=ConfigDuration(), alias="ocspMinTimeToExpiry"
    )
    oldest_issued_sct: ConfigDuration = Field(default=ConfigDuration(), alias="oldestIssuedSCT")

    akamai_base_url: str = Field(default="", alias="akamaiBaseURL")
    akamai_client_token: str = ""
    akamai_client_secret: str = ""
    akamai_access_token: str = ""
    akamai_purge_retries: int = 0
    akamai_purge_retry_backoff: ConfigDuration = ConfigDuration()

    sign_failure_backoff_factor: float = 0.0
    sign_failure_backoff_max: ConfigDuration = ConfigDuration()

    publisher: GRPCClientConfig | None = None

    def db_url(self) -> str:
        return self.db.url()


class CAADistributedResolverConfig(ConfigBaseModel):
    """HTTP client setup for resolving CAA records over several paths."""

    timeout: ConfigDuration = ConfigDuration()
    max_failures: int = 0
    proxies: list[str] = Field(default_factory=list)


class SyslogConfig(ConfigBaseModel):
    stdout_level: int = 0
    syslog_level: int = 0


class StatsdConfig(ConfigBaseModel):
    server: str = ""
    prefix: str = ""


CONFIG_KINDS: dict[str, type[ConfigBaseModel]] = {
    "password": PasswordConfig,
    "db": DBConfig,
    "amqp": AMQPConfig,
    "smtp": SMTPConfig,
    "service": ServiceConfig,
    "pa": PAConfig,
    "ocsp-updater": OCSPUpdaterConfig,
    "grpc-client": GRPCClientConfig,
    "grpc-server": GRPCServerConfig,
    "hostname-policy": HostnamePolicyConfig,
    "caa-resolver": CAADistributedResolverConfig,
    "syslog": SyslogConfig,
    "statsd": StatsdConfig,
}


def iter_indirect_values(
    config: BaseModel, prefix: str = "config"
) -> Iterator[tuple[str, IndirectConfigModel]]:
    """Yield every indirected value in a config tree with its dotted field path.

    Args:
        config: The config model to walk
        prefix: Path label of ``config`` itself

    Yields:
        Tuples of (path, model) in field order, parents before children
    """
    if isinstance(config, IndirectConfigModel):
        yield prefix, config
    for name in type(config).model_fields:
        value = getattr(config, name)
        if isinstance(value, BaseModel):
            yield from iter_indirect_values(value, f"{prefix}.{name}")


def resolve_indirect_values(config: BaseModel, prefix: str = "config") -> dict[str, str]:
    """Resolve every indirected value in a config tree.

    Files are read on each call. The first failure is raised as is.

    Returns:
        Mapping of dotted field path to resolved value
    """
    resolved: dict[str, str] = {}
    for path, value in iter_indirect_values(config, prefix):
        resolved[path] = value.resolve()
    logger.debug(f"Resolved {len(resolved)} indirect value(s) under '{prefix}'")
    return resolved
