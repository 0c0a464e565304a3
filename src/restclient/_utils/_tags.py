"""Field tag resolution for payload records.

A tag is a short string attached to a field that names it on the wire and
optionally carries comma-separated options, e.g. ``"user_name,omitempty"``.
The form tag wins over the general (JSON) tag; ``"-"`` drops the field.

Tags are declared with the record type:

    class Search(BaseModel):
        query: str = Field(json_schema_extra={"form": "q"})
        page: int = Field(default=0, alias="p")

    @dataclass
    class Search:
        query: str = field(metadata={"form": "q,omitempty"})
"""

import dataclasses
from collections.abc import Mapping
from typing import Any, Iterator, NamedTuple, Optional

from pydantic import BaseModel

from ..models.errors import EncodeError
from .constants import TAG_FORM, TAG_IGNORE, TAG_JSON


class TagOptions(frozenset):
    """The option tokens that follow the name in a tag."""

    @classmethod
    def parse(cls, text: str) -> "TagOptions":
        return cls(token for token in text.split(",") if token)

    def contains(self, option: str) -> bool:
        return option in self

    def __repr__(self) -> str:
        return f"TagOptions({sorted(self)!r})"


class FieldTag(NamedTuple):
    name: str
    value: Any
    form_tag: Optional[str]
    json_tag: Optional[str]


def _split_tag(tag: str) -> tuple[str, TagOptions]:
    if tag == TAG_IGNORE:
        return "", TagOptions()
    name, sep, options = tag.partition(",")
    if not sep:
        return tag, TagOptions()
    return name, TagOptions.parse(options)


def get_tag_name(
    field_name: str,
    form_tag: Optional[str] = None,
    json_tag: Optional[str] = None,
) -> tuple[str, TagOptions]:
    """Resolve the wire name and options of a field.

    Returns an empty name when the field is explicitly ignored.
    """
    if form_tag:
        return _split_tag(form_tag)
    if json_tag:
        return _split_tag(json_tag)
    return field_name, TagOptions()


def _model_tags(model: BaseModel) -> Iterator[FieldTag]:
    for name, info in type(model).model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        form_tag = extra.get(TAG_FORM)
        json_tag = info.serialization_alias or info.alias
        yield FieldTag(name, getattr(model, name), form_tag, json_tag)


def _dataclass_tags(instance: Any) -> Iterator[FieldTag]:
    for f in dataclasses.fields(instance):
        yield FieldTag(
            f.name,
            getattr(instance, f.name),
            f.metadata.get(TAG_FORM),
            f.metadata.get(TAG_JSON),
        )


def iter_fields(record: Any) -> Iterator[FieldTag]:
    """Yield the fields of a record in declaration order along with their tags."""
    if isinstance(record, BaseModel):
        return _model_tags(record)
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return _dataclass_tags(record)
    if isinstance(record, Mapping):
        return (FieldTag(str(k), v, None, None) for k, v in record.items())
    raise EncodeError(f"Unsupported payload type: {type(record).__name__}")
