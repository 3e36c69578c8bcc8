"""
JSON encoding of requests and schema-checked decoding of responses.

No I/O occurs here; all functions are pure transformations between models
and bytes to support easy unit testing.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import DecodingError, EncodingError
from .schemas import MCQResponseItem, QAResponseItem

ModelT = TypeVar("ModelT", bound=BaseModel)

# Response shapes, keyed by what each endpoint returns
QA_ITEM = TypeAdapter(QAResponseItem)
QA_ITEM_LIST = TypeAdapter(list[QAResponseItem])
MCQ_ITEM_LIST = TypeAdapter(list[MCQResponseItem])


def build_request(model_cls: type[ModelT], **fields: Any) -> ModelT:
    """
    Construct a request model, reporting invalid field values as
    :class:`EncodingError`.

    Args:
        model_cls: Request model class from :mod:`schemas`.
        **fields: Attribute values by Python name.

    Returns:
        Validated request instance.

    Raises:
        EncodingError: A field value cannot be represented on the wire.
    """
    try:
        return model_cls(**fields)
    except ValidationError as exc:
        raise EncodingError(exc) from exc


def encode(request: BaseModel) -> bytes:
    """
    Serialize a request model to UTF-8 JSON bytes using wire field names.

    Keys appear in model declaration order.  Non-ASCII text is written
    literally and forward slashes are never escaped.

    Raises:
        EncodingError: The model contains a value JSON cannot represent.
    """
    try:
        payload = request.model_dump(mode="json", by_alias=True)
        text = json.dumps(payload, ensure_ascii=False)
    except (TypeError, ValueError, PydanticSerializationError) as exc:
        raise EncodingError(exc) from exc
    return text.encode("utf-8")


def decode(data: bytes, shape: TypeAdapter) -> Any:
    """
    Parse and validate a response body against ``shape``.

    Args:
        data: Raw response bytes.
        shape: One of ``QA_ITEM``, ``QA_ITEM_LIST``, ``MCQ_ITEM_LIST``.

    Returns:
        The validated model or list of models.

    Raises:
        DecodingError: Body is not JSON, or a required key is missing or has
            the wrong type.
    """
    try:
        return shape.validate_json(data)
    except ValidationError as exc:
        raise DecodingError(exc) from exc
