"""Tests for materialized identifier, Dao, table and union classes."""

import threading

import pytest
from msitables.compiler.orchestrator import compile_schema
from msitables.ir.entity import EntityDescriptor, EntityGroup, IdentifierOptions
from msitables.runtime.builder import materialize
from msitables.runtime.identifier import (
    Identifier,
    IdentifierExhaustedError,
    IdentifierParseError,
    UsedIdentifiers,
)
from msitables.runtime.value import Value, ValueKind, to_value
from conftest import make_field


@pytest.fixture
def schema(msi_tables_group, settings):
    return materialize(compile_schema(msi_tables_group, settings))


@pytest.fixture
def property_schema(property_entity, settings):
    return materialize(compile_schema(EntityGroup.single(property_entity), settings))


def test_identifier_parse():
    assert str(Identifier.parse("_Dir.1")) == "_Dir.1"
    for bad in ["", "1abc", "has space", "a" * 73]:
        with pytest.raises(IdentifierParseError):
            Identifier.parse(bad)


def test_table_identifier(schema):
    """Wrappers convert into Identifier and reject invalid text."""
    DirectoryIdentifier = schema.DirectoryIdentifier
    ident = DirectoryIdentifier.parse("TARGETDIR")
    assert ident.to_identifier() == Identifier("TARGETDIR")
    assert str(ident) == "TARGETDIR"
    assert ident == DirectoryIdentifier.parse("TARGETDIR")
    assert ident != Identifier("TARGETDIR")
    assert "DirectoryTable" in DirectoryIdentifier.__doc__
    with pytest.raises(IdentifierParseError):
        DirectoryIdentifier.parse("not valid")


def test_dao_constructor_widens_arguments(schema):
    DirectoryDao = schema.DirectoryDao
    row = DirectoryDao("TARGETDIR", None, "SourceDir")
    assert row.directory == schema.DirectoryIdentifier.parse("TARGETDIR")
    assert row.parent_directory is None
    assert row.default_dir == "SourceDir"

    child = DirectoryDao(directory="ProgramFilesFolder", parent_directory="TARGETDIR", default_dir=".")
    assert child.parent_directory == schema.DirectoryIdentifier.parse("TARGETDIR")


def test_dao_constructor_rejects_bad_arguments(schema):
    DirectoryDao = schema.DirectoryDao
    with pytest.raises(ValueError):
        DirectoryDao("not valid", None, "x")
    with pytest.raises(TypeError, match="missing"):
        DirectoryDao("TARGETDIR")
    with pytest.raises(TypeError, match="unexpected"):
        DirectoryDao("TARGETDIR", None, "x", bogus=1)


def test_dao_fields_are_read_only(schema):
    row = schema.DirectoryDao("TARGETDIR", None, "SourceDir")
    with pytest.raises(AttributeError):
        row.directory = schema.DirectoryIdentifier.parse("OTHER")


def test_primary_identifier(schema):
    row = schema.DirectoryDao("TARGETDIR", None, "SourceDir")
    assert row.primary_identifier() == Identifier("TARGETDIR")

    link = schema.FeatureComponentDao("Complete", "MainComponent")
    assert link.primary_identifier() is None


def test_conflicts_with_single_key(schema):
    DirectoryDao = schema.DirectoryDao
    a = DirectoryDao("TARGETDIR", None, "SourceDir")
    b = DirectoryDao("TARGETDIR", "OtherDir", "Elsewhere")
    c = DirectoryDao("OtherDir", None, "SourceDir")
    assert a.conflicts_with(b)
    assert not a.conflicts_with(c)


def test_conflicts_with_composite_key(schema):
    """All primary key fields must match for a conflict."""
    FeatureComponentDao = schema.FeatureComponentDao
    a = FeatureComponentDao("Complete", "MainComponent")
    assert a.conflicts_with(FeatureComponentDao("Complete", "MainComponent"))
    assert not a.conflicts_with(FeatureComponentDao("Complete", "Other"))
    assert not a.conflicts_with(FeatureComponentDao("Other", "MainComponent"))


def test_conflicts_without_primary_key(property_schema):
    """Rows of an entity without primary key fields always conflict."""
    PropertyDao = property_schema.PropertyDao
    a = PropertyDao("ProductName", "Example", None)
    b = PropertyDao("Manufacturer", "Someone", 3)
    assert a.conflicts_with(b)
    assert b.conflicts_with(a)
    assert a.primary_identifier() is None


def test_conflicts_with_other_type(schema):
    row = schema.DirectoryDao("TARGETDIR", None, "SourceDir")
    with pytest.raises(TypeError):
        row.conflicts_with(schema.FeatureComponentDao("Complete", "MainComponent"))


def test_to_row(schema, property_schema):
    row = schema.DirectoryDao("TARGETDIR", None, "SourceDir")
    assert row.to_row() == [Value.of_str("TARGETDIR"), Value.null(), Value.of_str("SourceDir")]
    assert row.primary_keys() == [Value.of_str("TARGETDIR")]

    prop = property_schema.PropertyDao("ProductName", "Example", 7)
    assert [v.kind for v in prop.to_row()] == [ValueKind.STR, ValueKind.STR, ValueKind.INT]


def test_to_value_requires_conversion():
    with pytest.raises(TypeError):
        to_value(object())


def test_to_value_uses_custom_method():
    class Version:
        def to_value(self):
            return Value.of_str("1.0.0")

    assert to_value(Version()) == Value.of_str("1.0.0")


def test_caller_supplied_types(directory_entity, settings):
    class DefaultDir:
        def __init__(self, text):
            self.text = text

        def to_value(self):
            return Value.of_str(self.text)

    schema = materialize(
        compile_schema(EntityGroup.single(directory_entity), settings),
        types={"DefaultDir": DefaultDir},
    )
    row = schema.DirectoryDao("TARGETDIR", None, DefaultDir("SourceDir"))
    assert isinstance(row.default_dir, DefaultDir)
    assert row.to_row()[2] == Value.of_str("SourceDir")


def test_table_accessors(schema):
    table = schema.DirectoryTable()
    assert table.name() == "Directory"
    assert table.primary_key_indices() == [0]
    assert [c.name for c in table.columns()] == ["Directory", "Directory_Parent", "DefaultDir"]
    assert table.entries() == ()

    row = schema.DirectoryDao("TARGETDIR", None, "SourceDir")
    table.entries_mut().append(row)
    assert table.entries() == (row,)
    assert len(table) == 1


def test_generator(schema):
    """Generated identifiers carry the prefix and are recorded as used."""
    table = schema.DirectoryTable()
    generator = table.generator()
    assert isinstance(generator, schema.DirectoryIdentifierGenerator)
    assert generator.id_prefix() == "DIRECTORY"
    assert generator.count() == 0

    first = table.generate_identifier()
    second = table.generate_identifier()
    assert isinstance(first, schema.DirectoryIdentifier)
    assert str(first) == "DIRECTORY_1"
    assert str(second) == "DIRECTORY_2"
    assert generator.count() == 2
    assert generator.used().snapshot() == [first.to_identifier(), second.to_identifier()]


def test_generator_skips_used_identifiers(schema):
    used = UsedIdentifiers([Identifier("DIRECTORY_2")])
    generator = schema.DirectoryIdentifierGenerator(used)
    assert generator.count() == 1
    assert str(generator.generate()) == "DIRECTORY_3"


def test_generator_starts_after_existing_entries(schema):
    rows = [
        schema.DirectoryDao("TARGETDIR", None, "SourceDir"),
        schema.DirectoryDao("ProgramFilesFolder", "TARGETDIR", "."),
    ]
    table = schema.DirectoryTable(rows)
    assert table.generator().count() == 2
    assert Identifier("TARGETDIR") in table.generator().used()


def test_generator_skips_rows_added_later(schema):
    """Rows added after construction are never handed out again."""
    table = schema.DirectoryTable()
    table.entries_mut().append(schema.DirectoryDao("DIRECTORY_1", None, "x"))
    generated = table.generate_identifier()
    assert str(generated) == "DIRECTORY_2"
    assert Identifier("DIRECTORY_1") in table.generator().used()


def test_insert_records_primary_identifier(schema):
    table = schema.DirectoryTable()
    table.insert(schema.DirectoryDao("DIRECTORY_1", None, "x"))
    assert len(table) == 1
    assert Identifier("DIRECTORY_1") in table.generator().used()
    assert str(table.generator().generate()) == "DIRECTORY_2"

    with pytest.raises(TypeError):
        table.insert(schema.FeatureComponentDao("Complete", "MainComponent"))


def test_optional_primary_identifier(settings):
    entity = EntityDescriptor(
        name="Opt",
        fields=[
            make_field(
                "opt",
                type_name="OptIdentifier",
                optional=True,
                category="Identifier",
                length=72,
                primary_key=True,
                identifier_options=IdentifierOptions(),
            )
        ],
    )
    opt = materialize(compile_schema(EntityGroup.single(entity), settings))
    assert opt.OptDao(None).primary_identifier() is None
    assert opt.OptDao("A").primary_identifier() == Identifier("A")


def test_generator_shares_registry(schema):
    used = UsedIdentifiers()
    a = schema.DirectoryIdentifierGenerator(used)
    b = schema.DirectoryIdentifierGenerator(used)
    first = a.generate()
    assert first.to_identifier() in b.used()
    assert b.generate() != first


def test_generator_exhausted(schema):
    generator = schema.DirectoryIdentifierGenerator()
    generator.set_count(10 ** 70)
    with pytest.raises(IdentifierExhaustedError):
        generator.generate()


def test_generation_is_thread_safe(schema):
    used = UsedIdentifiers()
    generators = [schema.DirectoryIdentifierGenerator(used) for _ in range(4)]
    results = []
    lock = threading.Lock()

    def worker(generator):
        for _ in range(50):
            ident = generator.generate()
            with lock:
                results.append(ident)

    threads = [threading.Thread(target=worker, args=(g,)) for g in generators]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 200
    assert len(set(results)) == 200
    assert len(used) == 200


def test_table_without_generator(schema):
    table = schema.FeatureComponentTable()
    assert table.generator() is None
    with pytest.raises(TypeError):
        table.generate_identifier()


def test_table_union(schema):
    """The union has one case per variant and dispatches on kind."""
    MsiTables = schema.MsiTables
    Kind = schema.MsiTablesKind
    assert [k.value for k in Kind] == ["Directory", "FeatureComponent"]

    directory = MsiTables.of(schema.DirectoryTable())
    assert directory.kind is Kind.Directory
    assert str(directory) == "Directory"
    assert isinstance(directory.try_into(schema.DirectoryTable), schema.DirectoryTable)
    with pytest.raises(TypeError):
        directory.try_into(schema.FeatureComponentTable)

    link = MsiTables("FeatureComponent", schema.FeatureComponentTable())
    assert link.kind is Kind.FeatureComponent
    with pytest.raises(TypeError):
        MsiTables(Kind.Directory, schema.FeatureComponentTable())
    with pytest.raises(TypeError):
        MsiTables.of(schema.DirectoryDao("TARGETDIR", None, "SourceDir"))


def test_dao_union(schema):
    row = schema.FeatureComponentDao("Complete", "MainComponent")
    wrapped = schema.MsiTablesDao.of(row)
    assert wrapped.kind is schema.MsiTablesKind.FeatureComponent
    assert wrapped.value is row


def test_single_schema_has_no_union(property_schema):
    assert "PropertyTable" in property_schema
    assert "PropertyIdentifier" not in property_schema
    assert property_schema.PropertyTable.GENERATOR_TYPE is None
