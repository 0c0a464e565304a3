import dataclasses
import json
from enum import Enum
from logging import Logger, getLogger
from typing import Any, Optional, get_type_hints

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo
from pydantic_core import to_jsonable_python

from ._utils._form import encode_form
from ._utils._tags import TagOptions, get_tag_name
from ._utils.constants import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    LOGGER_NAME,
    OPTION_OMIT_EMPTY,
    TAG_JSON,
)
from .models.errors import DecodeError, EncodeError

_logger = getLogger(LOGGER_NAME)


class DataKind(str, Enum):
    """How a request body is encoded on the wire."""

    JSON = "json"
    FORM = "form"


_CONTENT_TYPES = {
    DataKind.JSON: CONTENT_TYPE_JSON,
    DataKind.FORM: CONTENT_TYPE_FORM,
}


def parse_data_kind(kind: Any) -> Optional[DataKind]:
    """Return the DataKind for ``kind`` or None if it is not recognized."""
    try:
        return DataKind(kind)
    except ValueError:
        return None


def content_type_for(kind: Any) -> Optional[str]:
    data_kind = parse_data_kind(kind)
    if data_kind is None:
        return None
    return _CONTENT_TYPES[data_kind]


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict, set)):
        return len(value) == 0
    return False


def _json_name(f: dataclasses.Field) -> tuple[str, TagOptions]:
    return get_tag_name(f.name, None, f.metadata.get(TAG_JSON))


def _to_document(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        doc = {}
        for f in dataclasses.fields(value):
            name, opts = _json_name(f)
            if not name:
                continue
            field_value = getattr(value, f.name)
            if opts.contains(OPTION_OMIT_EMPTY) and _is_empty(field_value):
                continue
            doc[name] = _to_document(field_value)
        return doc
    if isinstance(value, dict):
        return {k: _to_document(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_document(v) for v in value]
    return value


def encode_json(payload: Any) -> bytes:
    try:
        document = _to_document(payload)
        return json.dumps(
            document,
            separators=(",", ":"),
            allow_nan=False,
            default=to_jsonable_python,
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Failed to encode request body: {e}", e) from e


def encode_body(
    payload: Any, kind: Any = DataKind.JSON, logger: Optional[Logger] = None
) -> Optional[bytes]:
    """Encode ``payload`` according to ``kind``.

    Returns None when there is no payload.

    Raises:
        EncodeError: If the kind is unknown or the payload cannot be encoded.
    """
    logger = logger or _logger
    if payload is None:
        logger.warning("Nothing to encode")
        return None

    data_kind = parse_data_kind(kind)
    if data_kind is None:
        raise EncodeError(f"Unknown data kind: {kind!r}")

    logger.debug(f"Encoding body ({payload!r}) as {data_kind.value}")
    if data_kind is DataKind.FORM:
        return encode_form(payload, logger)
    return encode_json(payload)


def _load_json(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise DecodeError(f"Failed to decode response: {e}", e) from e


def _expect(document: Any, kind: type) -> None:
    if not isinstance(document, kind):
        expected = "an object" if kind is dict else "an array"
        raise DecodeError(
            f"Failed to decode response: expected {expected}, got {type(document).__name__}"
        )


def _model_keys(name: str, info: FieldInfo) -> list[str]:
    keys = [
        alias
        for alias in (info.validation_alias, info.alias, info.serialization_alias)
        if isinstance(alias, str)
    ]
    return keys + [name]


def _decode_model(document: dict, destination: BaseModel) -> None:
    model = type(destination)
    current: dict[str, Any] = {}
    present: list[str] = []
    for name, info in model.model_fields.items():
        keys = _model_keys(name, info)
        # keys[0] is the key the model validates by
        current[keys[0]] = getattr(destination, name)
        key = next((k for k in keys if k in document), None)
        if key is not None:
            current[keys[0]] = document[key]
            present.append(name)

    try:
        parsed = model.model_validate(current)
        for name in present:
            setattr(destination, name, getattr(parsed, name))
    except ValidationError as e:
        raise DecodeError(f"Failed to decode response: {e}", e) from e


def _field_types(destination: Any) -> dict[str, Any]:
    try:
        return get_type_hints(type(destination))
    except (NameError, TypeError):
        return {f.name: f.type for f in dataclasses.fields(destination)}


def _decode_dataclass(document: dict, destination: Any) -> None:
    types = _field_types(destination)
    values: dict[str, Any] = {}
    try:
        for f in dataclasses.fields(destination):
            name, _ = _json_name(f)
            if name and name in document:
                adapter = TypeAdapter(types.get(f.name, Any))
                values[f.name] = adapter.validate_python(document[name])
    except ValidationError as e:
        raise DecodeError(f"Failed to decode response: {e}", e) from e

    for field_name, value in values.items():
        setattr(destination, field_name, value)


def decode_body(raw: bytes, destination: Any, logger: Optional[Logger] = None) -> None:
    """Populate ``destination`` in place from a JSON response body.

    Only the keys present in the document are assigned. A zero-length body or
    a JSON ``null`` leaves the destination untouched.

    Raises:
        DecodeError: If the body is malformed or does not fit the destination.
    """
    logger = logger or _logger
    if len(raw) == 0:
        logger.debug("Zero-length response body")
        return

    if destination is None:
        logger.debug("No response destination, discarding response body")
        return

    if not isinstance(destination, (BaseModel, dict, list)) and not (
        dataclasses.is_dataclass(destination) and not isinstance(destination, type)
    ):
        raise DecodeError(
            f"Unsupported response destination: {type(destination).__name__}"
        )

    document = _load_json(raw)
    if document is None:
        logger.debug("Null response body")
        return

    if isinstance(destination, list):
        _expect(document, list)
        destination[:] = document
        return

    _expect(document, dict)
    if isinstance(destination, BaseModel):
        _decode_model(document, destination)
    elif isinstance(destination, dict):
        destination.update(document)
    else:
        _decode_dataclass(document, destination)
