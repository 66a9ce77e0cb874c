from enum import Enum


class FieldType(Enum):
    """
    Enum for key field types.

    The names match the type strings used in space configuration
    ("STR", "NUM", "NUM64", ...).
    """
    STR = "STR"
    NUM16 = "NUM16"
    NUM = "NUM"
    NUM64 = "NUM64"

    @classmethod
    def from_name(cls, name: str) -> 'FieldType':
        """
        Resolve a configuration type name.

        Accepts the enum names case-insensitively and "NUM32" as an alias
        for NUM.
        """
        if isinstance(name, FieldType):
            return name

        normalized = str(name).strip().upper()
        if normalized == "NUM32":
            return cls.NUM

        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown field type: {name}")

    def make_field(self, value) -> 'Field':
        """Build the typed key field for a raw tuple value."""
        from .fields import StringField, Num16Field, Num32Field, Num64Field

        field_classes = {
            FieldType.STR: StringField,
            FieldType.NUM16: Num16Field,
            FieldType.NUM: Num32Field,
            FieldType.NUM64: Num64Field,
        }
        return field_classes[self](value)
