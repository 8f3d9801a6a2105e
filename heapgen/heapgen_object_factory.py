import threading
import uuid
from dataclasses import dataclass

import numpy as np

from heapgen.heapgen_memory_size import memory_size_str


@dataclass(frozen=True, eq=False)
class LargeObject:
    # read-only uint8 array of exactly `size` bytes
    data: np.ndarray
    field_one: str
    field_two: str


class AllocationFailure(Exception):
    """The host could not provide the requested number of bytes."""

    def __init__(self, size: int) -> None:
        super().__init__(f"allocation of {memory_size_str(size)} failed")
        self.size = size


class ObjectFactory:
    """
    Builds LargeObjects from a random generator owned by the caller.
    The generator is only touched while holding the factory lock, so
    a factory may be shared between threads.
    """

    def __init__(self, rng: np.random.Generator) -> None:
        self.__rng = rng
        self.__lock = threading.Lock()

    def __random_uuid(self) -> str:
        return str(uuid.UUID(bytes=self.__rng.bytes(16), version=4))

    def create(self, size: int) -> LargeObject:
        """Allocate a LargeObject whose data is exactly `size` random bytes."""
        if size < 0:
            raise ValueError(f"size must be non-negative, not {size}")
        with self.__lock:
            try:
                # Filled in place, so peak memory is `size` bytes.
                data = self.__rng.integers(0, 256, size=size, dtype=np.uint8)
            except MemoryError as exc:
                raise AllocationFailure(size) from exc
            data.flags.writeable = False
            field_one = self.__random_uuid()
            field_two = self.__random_uuid()
            while field_two == field_one:
                field_two = self.__random_uuid()
        return LargeObject(data, field_one, field_two)
