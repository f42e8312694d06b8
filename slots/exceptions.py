class SlotError(Exception):
    """Base error for slot infrastructure failures (never for booking rule violations)."""


class ExportError(SlotError):
    pass


class UploadError(SlotError):
    pass
