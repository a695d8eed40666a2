class PhotoDBError(Exception):
    """Base error of the photo store."""
    pass


class DatabaseError(PhotoDBError):
    """The database driver rejected an operation."""
    pass


class ConstraintViolationError(DatabaseError):
    """A row violates a NOT NULL, unique or primary key constraint."""
    pass


class PhotoNotFoundError(PhotoDBError):
    """No photo row matches the given id."""

    def __init__(self, photo_id: int):
        super().__init__(f"Photo not found: id={photo_id}")
        self.photo_id = photo_id


class InvalidSortColumnError(PhotoDBError, ValueError):
    """A listing was requested on a column the photo table does not have."""

    def __init__(self, column: str):
        super().__init__(f"Unknown sort column: {column!r}")
        self.column = column
