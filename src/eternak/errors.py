"""
Domain errors raised by the data layer.

Routes translate these into HTTP status codes; the CLI prints them.
"""


class EternakError(Exception):
    """Base class for application errors."""


class StoreConfigurationError(EternakError):
    """The configured document store cannot be created."""


class AnimalNotFoundError(EternakError, LookupError):
    """No livestock document exists with the given id."""

    def __init__(self, animal_id: str):
        self.animal_id = animal_id
        super().__init__(f"Ternak {animal_id} tidak ditemukan")


class EntryNotFoundError(EternakError, LookupError):
    """A nested log entry or growth record does not exist."""

    def __init__(self, animal_id: str, field: str, entry_id: str):
        self.animal_id = animal_id
        self.field = field
        self.entry_id = entry_id
        super().__init__(f"Catatan {entry_id} tidak ditemukan di {field} untuk {animal_id}")


class InvalidRecordError(EternakError, ValueError):
    """A record was rejected by a business rule."""


class InsufficientHealthDataError(EternakError):
    """Health prediction was requested for an animal with no health history."""


class StoreWriteError(EternakError):
    """A remote write failed; the local change was rolled back."""

    def __init__(self, doc_id: str):
        self.doc_id = doc_id
        super().__init__(f"Gagal menyimpan data {doc_id}")
