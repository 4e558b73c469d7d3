"""Config value resolution and decoding.

- Indirected values: secrets given inline or read from a file at resolution time
- Durations: unit strings such as ``500ms`` or ``1h30m`` in JSON and YAML documents
- Challenge policy validation
- Shared service config shapes and the document loader
"""

from .challenges import ChallengeType, is_valid_challenge, validate_challenges
from .duration import ConfigDuration, decode, encode, format_duration, parse_duration
from .errors import (
    ChallengePolicyError,
    ConfigError,
    DurationError,
    DurationParseError,
    DurationTypeError,
    EmptyPolicyError,
    FileReadError,
    MissingValueError,
    UnknownChallengeError,
)
from .indirect import IndirectConfigModel, TrimPolicy, read_indirect_file, resolve_indirect
from .loader import detect_format, dump_config, load_config, load_document
from .models import (
    CONFIG_KINDS,
    AMQPConfig,
    CAADistributedResolverConfig,
    DBConfig,
    GRPCClientConfig,
    GRPCServerConfig,
    HostnamePolicyConfig,
    OCSPUpdaterConfig,
    PAConfig,
    PasswordConfig,
    ReconnectTimeouts,
    RPCServerConfig,
    ServiceConfig,
    SMTPConfig,
    StatsdConfig,
    SyslogConfig,
    TLSConfig,
    iter_indirect_values,
    resolve_indirect_values,
)

__all__ = [
    # Errors
    "ConfigError",
    "FileReadError",
    "MissingValueError",
    "DurationError",
    "DurationTypeError",
    "DurationParseError",
    "ChallengePolicyError",
    "EmptyPolicyError",
    "UnknownChallengeError",
    # Indirected values
    "TrimPolicy",
    "IndirectConfigModel",
    "read_indirect_file",
    "resolve_indirect",
    # Durations
    "ConfigDuration",
    "parse_duration",
    "format_duration",
    "decode",
    "encode",
    # Challenges
    "ChallengeType",
    "is_valid_challenge",
    "validate_challenges",
    # Models
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
    # Loading
    "detect_format",
    "load_document",
    "load_config",
    "dump_config",
]
