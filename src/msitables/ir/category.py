"""Column categories understood by the table schema compiler."""

from enum import Enum


class Category(str, Enum):
    """Storage classification of an installer database column."""

    TEXT = "Text"
    UPPER_CASE = "UpperCase"
    LOWER_CASE = "LowerCase"
    INTEGER = "Integer"
    DOUBLE_INTEGER = "DoubleInteger"
    TIME_DATE = "TimeDate"
    IDENTIFIER = "Identifier"
    PROPERTY = "Property"
    FILENAME = "Filename"
    WILD_CARD_FILENAME = "WildCardFilename"
    PATH = "Path"
    PATHS = "Paths"
    ANY_PATH = "AnyPath"
    DEFAULT_DIR = "DefaultDir"
    REG_PATH = "RegPath"
    FORMATTED = "Formatted"
    FORMATTED_SDDL_TEXT = "FormattedSDDLText"
    TEMPLATE = "Template"
    CONDITION = "Condition"
    GUID = "Guid"
    VERSION = "Version"
    LANGUAGE = "Language"
    BINARY = "Binary"
    CUSTOM_SOURCE = "CustomSource"
    CABINET = "Cabinet"
    SHORTCUT = "Shortcut"

    @property
    def is_integer(self) -> bool:
        """Whether the category is stored in a fixed-width integer column."""
        return self in (Category.INTEGER, Category.DOUBLE_INTEGER)

    @classmethod
    def from_name(cls, raw: str) -> "Category":
        """
        Resolve a category name as written by a schema author.

        Qualified spellings are accepted and only the last path segment is
        used, so ``"msi::Category::Identifier"``, ``"Category.Identifier"`` and
        ``"Identifier"`` all resolve to ``Category.IDENTIFIER``.

        Args:
            raw: Category name, optionally qualified

        Returns:
            The matching Category

        Raises:
            ValueError: If the name does not match a known category
        """
        segment = raw.strip().replace("::", ".").split(".")[-1]
        for member in cls:
            if member.value == segment:
                return member
        raise ValueError(f"Category is invalid: {raw}")
