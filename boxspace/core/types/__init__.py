from .fields.field import Field
from .fields import (
    StringField,
    Num16Field,
    Num32Field,
    Num64Field,
)
from .type_enum import FieldType

__all__ = [
    'Field',
    'StringField',
    'Num16Field',
    'Num32Field',
    'Num64Field',
    'FieldType',
]
