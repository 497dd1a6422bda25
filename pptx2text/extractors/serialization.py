import typing
from dataclasses import fields, is_dataclass

# Type marker key used for serialization/deserialization
_TYPE_KEY = "_type"

# Fields holding diagnostics that are only serialized on request
_RAW_FIELDS = frozenset({"raw_parts"})

# Registry mapping type names to classes (populated lazily)
_TYPE_REGISTRY: dict[str, type] = {}


def _serialize_for_json(value: typing.Any, include_raw: bool) -> typing.Any:
    if is_dataclass(value) and not isinstance(value, type):
        result = {
            _TYPE_KEY: type(value).__name__,
        }
        for item in fields(value):
            if item.name in _RAW_FIELDS and not include_raw:
                continue
            result[item.name] = _serialize_for_json(
                getattr(value, item.name), include_raw
            )
        return result
    if isinstance(value, dict):
        return {
            str(key): _serialize_for_json(val, include_raw)
            for key, val in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        return [_serialize_for_json(item, include_raw) for item in value]
    return value


def serialize_extraction(value: typing.Any, include_raw: bool = False) -> dict:
    """
    Serialize an extraction result to a JSON-compatible dictionary.

    Every dataclass carries a ``_type`` marker so that
    :func:`deserialize_extraction` can rebuild it. The raw slide markup is
    omitted unless ``include_raw`` is set.
    """
    serialized = _serialize_for_json(value, include_raw)
    if isinstance(serialized, dict):
        return serialized
    return {"value": serialized}


def _get_type_registry() -> dict[str, type]:
    """Lazily populate and return the type registry."""
    if _TYPE_REGISTRY:
        return _TYPE_REGISTRY

    from pptx2text.extractors import data_types

    for name in dir(data_types):
        obj = getattr(data_types, name)
        if isinstance(obj, type) and is_dataclass(obj):
            _TYPE_REGISTRY[name] = obj

    return _TYPE_REGISTRY


def _unwrap_optional(tp: typing.Any) -> typing.Any:
    """Unwrap Optional[X] to X, leave any other type untouched."""
    args = typing.get_args(tp)
    if type(None) in args:
        non_none_args = [a for a in args if a is not type(None)]
        if len(non_none_args) == 1:
            return non_none_args[0]
    return tp


def _deserialize_value(value: typing.Any, expected_type: typing.Any) -> typing.Any:
    """Deserialize a value according to its expected type."""
    if value is None:
        return None

    expected_type = _unwrap_optional(expected_type)

    if isinstance(value, dict) and _TYPE_KEY in value:
        return _deserialize_dataclass(value)

    origin = typing.get_origin(expected_type)

    if origin is list:
        item_type = typing.get_args(expected_type)
        item_type = item_type[0] if item_type else typing.Any
        if isinstance(value, list):
            return [_deserialize_value(item, item_type) for item in value]
        return value

    if origin is dict:
        args = typing.get_args(expected_type)
        value_type = args[1] if len(args) > 1 else typing.Any
        if isinstance(value, dict):
            return {k: _deserialize_value(v, value_type) for k, v in value.items()}
        return value

    if is_dataclass(expected_type) and isinstance(value, dict):
        return _deserialize_dataclass(value, expected_type)

    return value


def _deserialize_dataclass(
    data: dict, expected_class: typing.Optional[type] = None
) -> typing.Any:
    """Deserialize a dictionary to a dataclass instance."""
    registry = _get_type_registry()

    type_name = data.get(_TYPE_KEY)
    if type_name and type_name in registry:
        cls = registry[type_name]
    elif expected_class is not None:
        cls = expected_class
    else:
        # Can't determine the class, return dict as-is
        return data

    field_types = typing.get_type_hints(cls)
    kwargs = {}
    for item in fields(cls):
        if item.name in data:
            field_type = field_types.get(item.name, typing.Any)
            kwargs[item.name] = _deserialize_value(data[item.name], field_type)

    return cls(**kwargs)


def deserialize_extraction(data: dict) -> typing.Any:
    """
    Deserialize a JSON dictionary back to an extraction result.

    This is the inverse of serialize_extraction().

    Raises:
        ValueError: If the data doesn't contain valid type information

    Example:
        >>> content = parse_pptx(data)
        >>> restored = deserialize_extraction(content.to_json())
        >>> assert restored.get_full_text() == content.get_full_text()
    """
    if not isinstance(data, dict):
        raise ValueError("Input must be a dictionary")

    if _TYPE_KEY not in data:
        raise ValueError(
            f"Input dictionary must contain '{_TYPE_KEY}' key for deserialization"
        )

    return _deserialize_dataclass(data)
