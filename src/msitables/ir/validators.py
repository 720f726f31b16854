"""Validators for entity IR."""

from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional
from msitables.config.logging import get_logger
from msitables.errors import ERRORS_BY_CODE, SchemaCompileError
from .category import Category
from .entity import EntityDescriptor, EntityGroup

logger = get_logger(__name__)


@dataclass
class SchemaIssue:
    """Issue found while validating an entity."""

    code: str  # e.g., "MISSING_LENGTH", "INVALID_CATEGORY"
    location: str  # e.g., "Entity" or "Entity.field"
    message: str
    severity: Literal["error", "warning"] = "error"
    details: dict = field(default_factory=dict)


def validate_entity(
    entity: EntityDescriptor,
    known_entities: Optional[Iterable[str]] = None,
    strict_foreign_keys: bool = False,
) -> List[SchemaIssue]:
    """
    Validate one entity before compilation.

    Args:
        entity: EntityDescriptor to validate
        known_entities: Entity names that foreign keys may resolve to. When
            None, foreign key targets are not checked.
        strict_foreign_keys: Report unresolved foreign keys as errors instead
            of warnings

    Returns:
        List of SchemaIssue objects (empty if validation passes)
    """
    name = entity.display_name
    known = set(known_entities) if known_entities is not None else None
    issues: List[SchemaIssue] = []

    candidates = [f.name for f in entity.fields if f.is_primary_identifier]
    if len(candidates) > 1:
        issues.append(
            SchemaIssue(
                code="AMBIGUOUS_PRIMARY_IDENTIFIER",
                location=name,
                message=f"{name}: more than one field marked as primary identifier "
                f"({', '.join(candidates)}). This is not supported.",
                details={"entity": name, "fields": candidates},
            )
        )

    for f in entity.fields:
        location = f"{name}.{f.name}"
        try:
            category = Category.from_name(f.category)
        except ValueError:
            issues.append(
                SchemaIssue(
                    code="INVALID_CATEGORY",
                    location=location,
                    message=f"{location}: category is invalid: {f.category}",
                    details={"entity": name, "field": f.name, "category": f.category},
                )
            )
        else:
            if not category.is_integer and f.length is None:
                issues.append(
                    SchemaIssue(
                        code="MISSING_LENGTH",
                        location=location,
                        message=f"{location}: field with category {category.value} "
                        f"must define a length",
                        details={"entity": name, "field": f.name, "category": category.value},
                    )
                )

        target = f.foreign_key
        if target is not None and known is not None:
            if target not in known:
                issues.append(
                    SchemaIssue(
                        code="UNKNOWN_REFERENCED_ENTITY",
                        location=location,
                        message=f"{location}: foreign key references unknown entity '{target}'",
                        severity="error" if strict_foreign_keys else "warning",
                        details={"entity": name, "field": f.name, "foreign_key": target},
                    )
                )

    if not any(f.primary_key for f in entity.fields):
        issues.append(
            SchemaIssue(
                code="EMPTY_PRIMARY_KEY",
                location=name,
                message=f"{name}: no primary key fields; any two rows will be "
                f"reported as conflicting",
                severity="warning",
                details={"entity": name},
            )
        )

    errors = [i for i in issues if i.severity == "error"]
    if errors:
        logger.warning(f"Validation of {name} found {len(errors)} errors")
    else:
        logger.debug(f"Validation of {name} passed with {len(issues)} warnings")

    return issues


def validate_group(group: EntityGroup, strict_foreign_keys: bool = False) -> List[SchemaIssue]:
    """
    Validate every entity of a group.

    Foreign keys are only checked against the group's own entities for
    variant groups; a single entity has nothing to resolve against.

    Args:
        group: EntityGroup to validate
        strict_foreign_keys: Report unresolved foreign keys as errors

    Returns:
        Issues of all entities, in entity order
    """
    known = group.entity_names if group.kind == "variants" else None
    issues: List[SchemaIssue] = []
    for entity in group.entities:
        issues.extend(validate_entity(entity, known, strict_foreign_keys))
    return issues


def raise_for_issues(issues: Iterable[SchemaIssue]) -> None:
    """
    Raise the exception matching the first error-level issue.

    Warnings are logged and otherwise ignored.

    Raises:
        SchemaCompileError: Subclass chosen by the issue code
    """
    for issue in issues:
        if issue.severity == "warning":
            logger.warning(issue.message)
            continue
        error_cls = ERRORS_BY_CODE.get(issue.code, SchemaCompileError)
        raise error_cls(issue.message, location=issue.location)
