"""Generic field mapping between parameter objects."""

from collections.abc import Callable, Mapping
from typing import Any, Literal

from pydantic import BaseModel

FieldTransform = Callable[[Any], Any]
FieldMap = Mapping[str, FieldTransform | Literal[True]]


def _source_fields(source: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    """Fields present on the source; for models, the explicitly set ones."""
    if isinstance(source, BaseModel):
        return {name: getattr(source, name) for name in source.model_fields_set}
    return dict(source)


def _get_field(source: Mapping[str, Any] | BaseModel, name: str) -> Any:
    if isinstance(source, BaseModel):
        return getattr(source, name, None)
    return source.get(name)


def map_object(
    source: Mapping[str, Any] | BaseModel,
    field_map: FieldMap,
    drop_empty: bool = False,
    drop_unmapped: bool = False,
) -> dict[str, Any]:
    """Project ``source`` into a new dict using ``field_map``.

    Args:
        source: Mapping or pydantic model to read fields from
        field_map: Target field name to either True (copy the same-named
            source field) or a callable receiving the whole source
        drop_empty: Omit mapped fields whose value is None
        drop_unmapped: Only emit fields named in ``field_map``; otherwise
            source fields not in the map are copied unchanged

    Returns:
        Dict of target fields

    Example:
        >>> map_object({"labels": ["a", "b"], "x": 1},
        ...            {"labels": lambda p: ",".join(p["labels"])}, True, True)
        {"labels": "a,b"}
    """
    result: dict[str, Any] = {}

    for target, transform in field_map.items():
        if transform is True:
            value = _get_field(source, target)
        else:
            value = transform(source)
        if drop_empty and value is None:
            continue
        result[target] = value

    if not drop_unmapped:
        for name, value in _source_fields(source).items():
            if name not in field_map:
                result[name] = value

    return result
