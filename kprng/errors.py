class PRNGError(Exception):
    """Base class for kprng errors."""


class InvalidArgumentError(PRNGError):
    pass


class InvalidStateError(PRNGError):
    pass


class CapacityExceededError(PRNGError):
    def __init__(self, capacity: int, buffer_length: int, requested: int):
        super().__init__(
            f"Input buffer capacity exceeded: {buffer_length} + {requested} > {capacity}"
        )
        self.capacity = capacity
        self.buffer_length = buffer_length
        self.requested = requested
