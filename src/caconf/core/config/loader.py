"""Loading config documents into models.

Documents are JSON or YAML, told apart by file extension. A document usually
holds one section per service, so a dotted section path picks the part a model
describes:

```python
pa = load_config(Path("config/pa.json"), PAConfig, section="pa")
```

Indirected values are left as they are; they are resolved by their accessors.
"""

import json
import logging
from pathlib import Path
from typing import Any, Literal, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

__all__ = [
    "DocumentFormat",
    "detect_format",
    "load_document",
    "load_config",
    "dump_config",
]

DocumentFormat = Literal["json", "yaml"]

ModelT = TypeVar("ModelT", bound=BaseModel)

_EXTENSIONS: dict[str, DocumentFormat] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def detect_format(path: Path) -> DocumentFormat:
    """Work out the document format from a file extension.

    Raises:
        ValueError: If the extension is neither JSON nor YAML
    """
    fmt = _EXTENSIONS.get(path.suffix.lower())
    if fmt is None:
        raise ValueError(
            f"Cannot tell the format of '{path}': expected one of {', '.join(sorted(_EXTENSIONS))}"
        )
    return fmt


def load_document(path: Path, fmt: DocumentFormat | None = None) -> dict[str, Any]:
    """Read and parse a config document.

    Args:
        path: Path to the document
        fmt: Document format, detected from the extension if not given

    Returns:
        The parsed document

    Raises:
        FileNotFoundError: If the document does not exist
        ValueError: If the document cannot be parsed or is not a mapping
    """
    if fmt is None:
        fmt = detect_format(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found at {path}")

    logger.debug(f"Loading {fmt} config from: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            if fmt == "json":
                document = json.load(f)
            else:
                document = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to parse {fmt.upper()} config file {path}: {e}") from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"Config file {path} must hold a mapping, got {type(document).__name__}")
    return document


def _select_section(document: dict[str, Any], section: str, path: Path) -> Any:
    current: Any = document
    walked: list[str] = []
    for key in section.split("."):
        walked.append(key)
        if not isinstance(current, dict) or key not in current:
            raise ValueError(f"Section '{'.'.join(walked)}' not found in {path}")
        current = current[key]
    if current is None:
        return {}
    return current


def load_config(
    path: Path,
    model_cls: type[ModelT],
    section: str | None = None,
    fmt: DocumentFormat | None = None,
) -> ModelT:
    """Load a config document, or one section of it, into a model.

    Args:
        path: Path to the document
        model_cls: Model class describing the config
        section: Optional dotted path of the section to load, e.g. 'ocspUpdater'
        fmt: Document format, detected from the extension if not given

    Returns:
        The validated config model

    Raises:
        FileNotFoundError: If the document does not exist
        ValueError: If the document cannot be parsed or does not match the model
        ConfigError: If a value has its own decoding error, e.g. a duration given
                     as a number
    """
    document = load_document(path, fmt)
    data = _select_section(document, section, path) if section else document

    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        where = f"section '{section}' of {path}" if section else str(path)
        raise ValueError(f"Invalid {model_cls.__name__} config in {where}: {e}") from e


def dump_config(model: BaseModel, fmt: DocumentFormat) -> str:
    """Serialize a config model as a JSON or YAML document.

    Unset optional fields are left out. Both formats go through the JSON-mode
    dump, so durations are written as the same canonical strings.
    """
    if fmt == "json":
        return model.model_dump_json(by_alias=True, exclude_none=True, indent=2) + "\n"
    data = model.model_dump(mode="json", by_alias=True, exclude_none=True)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
