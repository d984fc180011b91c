class ResourceKeyError(ValueError):
    """Raised when a state file resource key cannot be turned into a Resource."""

    def __init__(self, key: str, message: str):
        super().__init__(f"{message}: {key!r}")
        self.key = key


class MalformedKeyError(ResourceKeyError):
    def __init__(self, key: str):
        super().__init__(key, "couldn't parse resource key")


class InvalidCounterError(ResourceKeyError):
    def __init__(self, key: str, counter: str):
        super().__init__(key, f"invalid counter {counter!r} in resource key")
        self.counter = counter


class StateFileError(Exception):
    """The state file could not be read or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
