class RecordId:
    """
    Identifier of a tuple within a space.

    A RecordId is the insertion sequence number the space assigned when the
    tuple was stored. Non-unique indexes order tuples sharing a key by it,
    which keeps key groups in insertion order.
    """

    def __init__(self, sequence: int):
        if sequence < 0:
            raise ValueError(
                f"Sequence number must be non-negative, got {sequence}")

        self.sequence = sequence

    def get_sequence(self) -> int:
        """Return the insertion sequence number."""
        return self.sequence

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordId):
            return False
        return self.sequence == other.sequence

    def __lt__(self, other: 'RecordId') -> bool:
        return self.sequence < other.sequence

    def __hash__(self) -> int:
        return hash(self.sequence)

    def __str__(self) -> str:
        return f"RecordId({self.sequence})"

    def __repr__(self) -> str:
        return self.__str__()
