class ProvisionAborted(Exception):
    """Raised when a run must stop immediately (exit code 1)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
