"""Error taxonomy for the diet tracker."""


class DietTrackerError(Exception):
    """Base class for application errors."""


class InvalidInput(DietTrackerError):
    """A required field is missing or a value is out of range."""


class InvalidServings(InvalidInput):
    """A servings count below one was supplied."""

    def __init__(self, servings: object) -> None:
        super().__init__(f"Servings must be at least 1, got {servings!r}")
        self.servings = servings


class UnitNotFound(DietTrackerError):
    """A unit abbreviation is not available on the food."""

    def __init__(self, unit: str, food_name: str) -> None:
        super().__init__(f"Unit {unit!r} not found for {food_name}")
        self.unit = unit
        self.food_name = food_name


class NotAuthenticated(DietTrackerError):
    """An operation was attempted without a signed-in user."""


class AccessDenied(DietTrackerError):
    """The user does not own the record it tried to change."""


class RecordNotFound(DietTrackerError):
    """A referenced record does not exist or is not visible."""

    def __init__(self, collection: str, record_id: str) -> None:
        super().__init__(f"{collection} record {record_id!r} not found")
        self.collection = collection
        self.record_id = record_id


class PersistenceFailure(DietTrackerError):
    """The underlying database call failed."""


class RecordDecodeError(DietTrackerError):
    """A stored document could not be decoded into a domain record."""

    def __init__(self, collection: str, record_id: object, detail: str) -> None:
        super().__init__(f"Cannot decode {collection} record {record_id!r}: {detail}")
        self.collection = collection
        self.record_id = record_id
        self.detail = detail
