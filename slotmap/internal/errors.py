class StaleKeyError(KeyError):
    """Raised when indexing a slot map with a key that does not designate a live value."""

    def __init__(self, key):
        super().__init__(key)
        self.key = key


class SlotMapCorruptedError(RuntimeError):
    pass
