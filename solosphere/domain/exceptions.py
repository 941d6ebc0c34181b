"""
Domain exceptions.
Services raise these; the HTTP layer maps them to status codes.
"""


class SoloSphereError(Exception):
    """Base class for every error raised by the core."""


class NotFound(SoloSphereError):
    """No record matches the given id."""

    def __init__(self, collection: str, doc_id: str) -> None:
        super().__init__(f"{collection} record {doc_id!r} not found")
        self.collection = collection
        self.doc_id = doc_id


class Forbidden(SoloSphereError):
    """The verified identity does not own the requested records."""


class DuplicateBid(SoloSphereError):
    """The bidder already placed a bid on this job."""

    def __init__(self, email: str, job_id: str) -> None:
        super().__init__("You have already placed a bid on this job")
        self.email = email
        self.job_id = job_id


class StoreUnavailable(SoloSphereError):
    """The underlying record store failed. Not retried."""


class DuplicateKeyError(SoloSphereError):
    """Store-level unique key conflict on insert."""

    def __init__(self, collection: str, key: dict) -> None:
        super().__init__(f"duplicate key in {collection}: {key}")
        self.collection = collection
        self.key = key


class ImmutableField(SoloSphereError):
    """A patch tried to rewrite fields that identify the record."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"These fields cannot be changed: {', '.join(fields)}")
        self.fields = fields
