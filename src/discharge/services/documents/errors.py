from __future__ import annotations


class DischargeSummaryError(Exception):
    """Base class for failures surfaced to the caller of a build.

    ``code`` is a stable machine-readable name for the failure kind.
    """

    code = "discharge_summary_error"


class MissingPatientError(DischargeSummaryError):
    code = "missing_patient"

    def __init__(self) -> None:
        super().__init__("Please select a patient")


class UnknownPractitionerError(DischargeSummaryError):
    code = "unknown_practitioner"

    def __init__(self, practitioner_id: str) -> None:
        super().__init__(f"Practitioner '{practitioner_id}' is not in the roster")
        self.practitioner_id = practitioner_id


class UnsupportedMediaTypeError(DischargeSummaryError):
    code = "unsupported_media_type"

    def __init__(self, content_type: str | None) -> None:
        super().__init__("Only PDF / JPG / JPEG allowed")
        self.content_type = content_type


class AttachmentTooLargeError(DischargeSummaryError):
    code = "attachment_too_large"

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Attached document is {size} bytes; the limit is {limit} bytes")
        self.size = size
        self.limit = limit


class AttachmentReadError(DischargeSummaryError):
    """The attached file could not be read or decoded.

    Never answered with the placeholder document; the caller must be told.
    """

    code = "attachment_read_error"

    def __init__(self, reason: str = "File read error") -> None:
        super().__init__(reason)
