"""Item extraction and validation.

Pages are transformed one at a time into candidate GeneratedItems by a
TransformationDefinition; candidates that are not plain records are
dropped with a warning instead of failing the batch.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.templates import get_path
from ..core.types import (
    GeneratedItem,
    RequestDefinition,
    Response,
    TransformationDefinition,
    ValueGeneratedItem,
)
from .telemetry import log_invalid_adjust_result, log_invalid_item_dropped

ValueTransformer = Callable[[GeneratedItem], list[GeneratedItem]]
ItemExtractor = Callable[[Iterable[Response]], Iterator[GeneratedItem]]


def _select_candidates(value: Any, transformation: TransformationDefinition) -> list[Any]:
    if transformation.root:
        value = get_path(value, transformation.root)
    if value is None:
        return []
    if isinstance(value, list):
        return value[:1] if transformation.single else list(value)
    return [value]


def _reshape(value: Any, transformation: TransformationDefinition) -> Any:
    if isinstance(value, dict):
        if transformation.pick is not None:
            value = {key: val for key, val in value.items() if key in transformation.pick}
        if transformation.omit:
            value = {key: val for key, val in value.items() if key not in transformation.omit}
    if transformation.nest_under_field:
        value = {transformation.nest_under_field: value}
    return value


def create_value_transformer(transformation: TransformationDefinition) -> ValueTransformer:
    """Build the function turning one page item into candidate items."""

    def transform(item: GeneratedItem) -> list[GeneratedItem]:
        results: list[GeneratedItem] = []
        for candidate in _select_candidates(item.value, transformation):
            generated = GeneratedItem(
                value=_reshape(candidate, transformation),
                type_name=item.type_name,
                context=item.context,
            )
            if transformation.adjust is not None:
                adjusted = transformation.adjust(generated)
                if adjusted is None:
                    continue
                if isinstance(adjusted, Mapping):
                    adjusted = generated.model_copy(update=dict(adjusted))
                if not isinstance(adjusted, GeneratedItem):
                    log_invalid_adjust_result(
                        type_name=item.type_name, result_type=type(adjusted).__name__
                    )
                    continue
                generated = adjusted
            results.append(generated)
        return results

    return transform


def create_extractor(request_def: RequestDefinition, type_name: str) -> ItemExtractor:
    """Build a lazy extractor for the pages of one request.

    Items are tagged with ``type_name`` and the request's static context.
    """
    transform = create_value_transformer(request_def.transformation)

    def extract(pages: Iterable[Response]) -> Iterator[GeneratedItem]:
        for page in pages:
            yield from transform(
                GeneratedItem(value=page.data, type_name=type_name, context=request_def.context)
            )

    return extract


def validate_items(
    items: Iterable[GeneratedItem],
    *,
    client: str,
    path: str,
    method: str,
    type_name: str,
) -> Iterator[ValueGeneratedItem]:
    """Yield only items whose value is a plain record, logging the rest."""
    for item in items:
        try:
            yield ValueGeneratedItem(value=item.value, type_name=item.type_name, context=item.context)
        except PydanticValidationError:
            log_invalid_item_dropped(client=client, path=path, method=method, type_name=type_name)
