from .tuple import Tuple
from .record_id import RecordId
from .key_builder import KeyBuilder
from .update import FieldUpdate, UpdateOperator, apply_updates


__all__ = ["Tuple", "RecordId", "KeyBuilder", "FieldUpdate", "UpdateOperator", "apply_updates"]
