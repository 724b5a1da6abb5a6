class ExtractionError(Exception):
    """Fatal extraction failure that aborts the run.

    When ``path`` is set the error mimics a schema validation failure and is
    reported as a structured ``{"type": "error", ...}`` object.
    """

    def __init__(self, message, path=None):
        super().__init__(message)
        self.message = message
        self.path = path

    def to_dict(self):
        return {"type": "error", "message": self.message, "path": self.path}
