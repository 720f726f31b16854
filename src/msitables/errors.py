"""Exceptions raised while compiling entity schemas."""

from typing import Optional


class SchemaCompileError(Exception):
    """Base class for fatal compilation errors."""

    code = "SCHEMA_COMPILE_ERROR"

    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.location = location


class AmbiguousPrimaryIdentifierError(SchemaCompileError):
    """More than one field qualifies as the primary identifier."""

    code = "AMBIGUOUS_PRIMARY_IDENTIFIER"


class InconsistentIdentifierError(SchemaCompileError):
    """A generator was requested for a field without identifier options."""

    code = "INCONSISTENT_IDENTIFIER"


class InvalidCategoryError(SchemaCompileError):
    """A field category does not name a known column category."""

    code = "INVALID_CATEGORY"


class MissingLengthError(SchemaCompileError):
    """A string category column did not declare its length."""

    code = "MISSING_LENGTH"


class UnknownReferencedEntityError(SchemaCompileError):
    """A foreign key names an entity that is not part of the compiled group."""

    code = "UNKNOWN_REFERENCED_ENTITY"


ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        AmbiguousPrimaryIdentifierError,
        InconsistentIdentifierError,
        InvalidCategoryError,
        MissingLengthError,
        UnknownReferencedEntityError,
    )
}
