from ._form import encode_form, struct_to_values
from ._logs import setup_logging
from ._tags import TagOptions, get_tag_name

__all__ = [
    "TagOptions",
    "encode_form",
    "get_tag_name",
    "setup_logging",
    "struct_to_values",
]
