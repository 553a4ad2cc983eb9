"""Shared schema base"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase field names, as the web client does"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
