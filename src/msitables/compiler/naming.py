"""Names of the artifacts derived from an entity."""

IDENTIFIER_SUFFIX = "Identifier"
GENERATOR_SUFFIX = "IdentifierGenerator"
DAO_SUFFIX = "Dao"
TABLE_SUFFIX = "Table"
KIND_SUFFIX = "Kind"


def capitalize(s: str) -> str:
    """Upper-case the first character of s."""
    return s[:1].upper() + s[1:]


def snake_case_to_pascal_case(s: str) -> str:
    """
    Convert a snake case field name to a Pascal case column name.

    Underscores between words are removed; trailing underscores are kept, so
    ``default_dir`` becomes ``DefaultDir`` and ``feature_`` becomes
    ``Feature_``.
    """
    stripped = s.rstrip("_")
    trailing = s[len(stripped):]
    return "".join(capitalize(part) for part in stripped.split("_") if part) + trailing


def identifier_from_name(name: str) -> str:
    return f"{name}{IDENTIFIER_SUFFIX}"


def identifier_generator_from_name(name: str) -> str:
    return f"{name}{GENERATOR_SUFFIX}"


def dao_from_name(name: str) -> str:
    return f"{name}{DAO_SUFFIX}"


def table_from_name(name: str) -> str:
    return f"{name}{TABLE_SUFFIX}"


def kind_from_name(name: str) -> str:
    return f"{name}{KIND_SUFFIX}"
