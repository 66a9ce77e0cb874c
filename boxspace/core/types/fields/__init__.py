from .string_field import StringField
from .num_field import Num16Field, Num32Field, Num64Field

__all__ = ["StringField", "Num16Field", "Num32Field", "Num64Field"]
