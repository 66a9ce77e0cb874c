from ..core.types import FieldType
from ..index import IndexType
from ..space import IndexedSpace
from .config import BoxConfig, SpaceConfig


class ConfigValidator:
    """🔍 Validates space configuration before any space is built.

    🗂️ Checks index counts and the primary index
    🔑 Checks key fields against tuple arity
    🏷️ Checks type names
    """

    def __init__(self):
        """
        🎬 Initialize validator with empty error list.
        """
        self.validation_errors: list[str] = []

    def validate(self, config: BoxConfig) -> bool:
        """
        🔍 Validate a whole configuration.

        Returns:
            True if valid, False otherwise
        """
        self.validation_errors.clear()

        seen: set[int] = set()
        for space in config.spaces:
            if space.n in seen:
                self.validation_errors.append(f"Space {space.n} is declared twice")
            seen.add(space.n)
            self._validate_space(space)

        return len(self.validation_errors) == 0

    def _validate_space(self, space: SpaceConfig) -> None:
        prefix = f"object_space[{space.n}]"

        if space.n < 0:
            self.validation_errors.append(f"{prefix}: space number must be non-negative")

        if space.cardinality is not None and space.cardinality <= 0:
            self.validation_errors.append(f"{prefix}: cardinality must be positive")

        if not space.indexes:
            self.validation_errors.append(f"{prefix}: no indexes declared")
            return

        if len(space.indexes) > IndexedSpace.MAX_INDEXES:
            self.validation_errors.append(
                f"{prefix}: {len(space.indexes)} indexes, at most "
                f"{IndexedSpace.MAX_INDEXES} allowed")

        if not space.indexes[0].unique:
            self.validation_errors.append(f"{prefix}.index[0]: primary index must be unique")

        for index_no, index in enumerate(space.indexes):
            self._validate_index(f"{prefix}.index[{index_no}]", index, space.cardinality)

    def _validate_index(self, prefix: str, index, cardinality) -> None:
        try:
            index_type = IndexType.from_name(index.type)
        except ValueError:
            self.validation_errors.append(f"{prefix}: unknown index type '{index.type}'")
            index_type = None

        if index_type == IndexType.HASH and not index.unique:
            self.validation_errors.append(f"{prefix}: HASH index must be unique")

        if not index.key_fields:
            self.validation_errors.append(f"{prefix}: no key fields declared")

        fieldnos: set[int] = set()
        for key_no, key_field in enumerate(index.key_fields):
            where = f"{prefix}.key_field[{key_no}]"
            if key_field.fieldno < 0:
                self.validation_errors.append(f"{where}: fieldno must be non-negative")
            elif cardinality is not None and key_field.fieldno >= cardinality:
                self.validation_errors.append(
                    f"{where}: fieldno {key_field.fieldno} outside cardinality {cardinality}")
            if key_field.fieldno in fieldnos:
                self.validation_errors.append(
                    f"{where}: field {key_field.fieldno} used twice in one index")
            fieldnos.add(key_field.fieldno)

            try:
                FieldType.from_name(key_field.type)
            except ValueError:
                self.validation_errors.append(f"{where}: unknown type '{key_field.type}'")

    def get_validation_errors(self) -> list[str]:
        """Get a list of validation errors from last validation."""
        return self.validation_errors.copy()
