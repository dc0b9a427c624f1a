from __future__ import annotations

from typing import Any

from pydantic_core import CoreSchema, core_schema
from pydantic.json_schema import JsonSchemaValue
from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler


__all__ = ('Snowflake',)


class Snowflake(int):
    # ? discord sends ids as strings, accept both and always send strings back
    @classmethod
    def _validate(cls, value: Any) -> Snowflake:  # noqa: ANN401
        if isinstance(value, bool) or not isinstance(value, int | str):
            raise ValueError(f'invalid snowflake `{value!r}`')

        return cls(int(value))

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        _source_type: type[Snowflake] | None,
        _handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda x: str(x),
                return_schema=core_schema.str_schema(),
            )
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls,
        _core_schema: CoreSchema,
        _handler: GetJsonSchemaHandler,
    ) -> JsonSchemaValue:
        return {'type': 'string', 'format': 'snowflake'}
