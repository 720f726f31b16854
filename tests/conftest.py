"""Shared entity fixtures."""

import pytest
from msitables.config.settings import Settings
from msitables.ir.entity import (
    EntityDescriptor,
    EntityGroup,
    FieldDescriptor,
    IdentifierOptions,
    TypeShape,
)


def make_field(name, type_name="str", optional=False, category="Text", length=255, **kwargs):
    return FieldDescriptor(
        name=name,
        type_shape=TypeShape(type_name=type_name, optional=optional),
        category=category,
        length=length,
        **kwargs,
    )


@pytest.fixture
def settings():
    return Settings(strict_foreign_keys=False)


@pytest.fixture
def directory_entity():
    return EntityDescriptor(
        name="Directory",
        fields=[
            make_field(
                "directory",
                type_name="DirectoryIdentifier",
                category="msi::Category::Identifier",
                length=72,
                primary_key=True,
                identifier_options=IdentifierOptions(generated=True),
            ),
            make_field(
                "parent_directory",
                type_name="DirectoryIdentifier",
                optional=True,
                category="msi::Category::Identifier",
                length=72,
                column_name="Directory_Parent",
                identifier_options=IdentifierOptions(foreign_key="Directory"),
            ),
            make_field(
                "default_dir",
                type_name="DefaultDir",
                category="msi::Category::DefaultDir",
                length=255,
                localizable=True,
            ),
        ],
    )


@pytest.fixture
def feature_component_entity():
    return EntityDescriptor(
        name="FeatureComponent",
        fields=[
            make_field(
                "feature_",
                type_name="FeatureIdentifier",
                category="Identifier",
                length=72,
                primary_key=True,
                identifier_options=IdentifierOptions(foreign_key="Feature"),
            ),
            make_field(
                "component_",
                type_name="ComponentIdentifier",
                category="Identifier",
                length=72,
                primary_key=True,
                identifier_options=IdentifierOptions(foreign_key="Component"),
            ),
        ],
    )


@pytest.fixture
def property_entity():
    """Entity without any primary key field."""
    return EntityDescriptor(
        name="Property",
        fields=[
            make_field("property", category="Property", length=72),
            make_field("value", category="Text", length=0x7FFF),
            make_field("order", type_name="int", optional=True, category="Integer", length=None),
        ],
    )


@pytest.fixture
def msi_tables_group(directory_entity, feature_component_entity):
    return EntityGroup.variants("MsiTables", [directory_entity, feature_component_entity])
