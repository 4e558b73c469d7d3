"""Base Pydantic models for caconf.

This module provides the base model classes that all configuration shapes inherit from.
It establishes consistent configuration across all models including:

- Strict field validation (no extra fields allowed)
- Immutable instances so configs can be shared between threads
- camelCase document keys generated from snake_case field names

Example:
    >>> from caconf.models import ConfigBaseModel
    >>>
    >>> class StatsdConfig(ConfigBaseModel):
    ...     server: str = ""
    ...     prefix: str = ""
    >>>
    >>> StatsdConfig.model_validate({"server": "localhost:8125"}).server
    'localhost:8125'
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, SerializerFunctionWrapHandler, model_serializer, model_validator
from pydantic.alias_generators import to_camel


class ConfigBaseModel(BaseModel):
    """Base model for all caconf configuration models.

    - extra="forbid": Rejects any keys not defined in the model
    - frozen=True: Makes instances immutable
    - alias_generator=to_camel: Document keys are camelCase (``dbConnectFile``)
    - populate_by_name=True: Field names are accepted too, for programmatic use
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _document_keys(model_cls: type[BaseModel]) -> set[str]:
    keys: set[str] = set()
    for name, field in model_cls.model_fields.items():
        keys.add(name)
        if field.alias:
            keys.add(field.alias)
    return keys


class EmbeddingModel(ConfigBaseModel):
    """Model that holds shared config shapes as named fields.

    Fields listed in ``embedded_fields`` hold another model whose keys live flat
    in this model's own mapping, the way every service config repeats
    ``dbConnectFile`` next to its own settings. On the way in the flat keys are
    gathered into the named field; on the way out they are flattened again.

    Example:
        >>> class PAConfig(EmbeddingModel):
        ...     embedded_fields = ("db",)
        ...     db: DBConfig = Field(default_factory=DBConfig)
        ...     challenges: dict[str, bool] = Field(default_factory=dict)
        >>>
        >>> PAConfig.model_validate({"dbConnect": "mysql://...", "challenges": {}}).db.db_connect
        'mysql://...'
    """

    embedded_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _gather_embedded(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or not cls.embedded_fields:
            return data

        remaining = dict(data)
        for name in cls.embedded_fields:
            field = cls.model_fields[name]
            embedded_cls = field.annotation
            if not (isinstance(embedded_cls, type) and issubclass(embedded_cls, BaseModel)):
                raise TypeError(f"Embedded field {cls.__name__}.{name} must hold a model")

            keys = _document_keys(embedded_cls)
            nested = {key: remaining.pop(key) for key in list(remaining) if key in keys}
            if not nested:
                continue

            explicit = [key for key in (name, field.alias) if key and key in remaining]
            if explicit:
                raise ValueError(
                    f"'{explicit[0]}' cannot be combined with its flattened keys: "
                    f"{', '.join(sorted(nested))}"
                )
            remaining[name] = nested

        return remaining

    @model_serializer(mode="wrap")
    def _flatten_embedded(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        fields = type(self).model_fields
        for name in self.embedded_fields:
            for key in (name, fields[name].alias):
                if key and isinstance(data.get(key), dict):
                    data.update(data.pop(key))
        return data
