from __future__ import annotations

from entitylink.domain.model import (
    PLACEHOLDER_PARENT_METADATA_VALUE,
    TITLE,
    Container,
    Record,
)
from entitylink.domain.resolution import FillerRegistry, MetadataMappingFiller
from tests.helpers.resolution import FakeUnitOfWork, RecordingFiller, make_archived_record

AUTHOR = "dc.contributor.author"
AFFILIATION = "oairecerif.author.affiliation"


def test_default_fill_writes_title() -> None:
    source = make_archived_record()
    value = source.add_metadata(AUTHOR, "Smith, John")
    target = Record()

    FillerRegistry().fill(FakeUnitOfWork([source]), value, target, already_present=False)

    assert target.first_value(TITLE) == "Smith, John"


def test_default_field_is_configurable() -> None:
    source = make_archived_record()
    value = source.add_metadata(AUTHOR, "Smith, John")
    target = Record()

    FillerRegistry(default_field="crisrp.name").fill(
        FakeUnitOfWork([source]), value, target, already_present=False
    )

    assert target.first_value("crisrp.name") == "Smith, John"
    assert target.first_value(TITLE) is None


def test_registered_filler_handles_new_record() -> None:
    source = make_archived_record()
    value = source.add_metadata(AUTHOR, "Smith, John")
    target = Record()
    filler = RecordingFiller()
    registry = FillerRegistry({AUTHOR: filler})

    registry.fill(FakeUnitOfWork([source]), value, target, already_present=False)

    assert filler.filled == [(value, target)]
    assert target.first_value(TITLE) is None


def test_existing_record_falls_back_to_default_when_filler_refuses_update() -> None:
    source = make_archived_record()
    value = source.add_metadata(AUTHOR, "Smith, John")
    target = Record()
    filler = RecordingFiller(allow_update=False)
    registry = FillerRegistry()
    registry.register(AUTHOR, filler)

    registry.fill(FakeUnitOfWork([source]), value, target, already_present=True)

    assert filler.filled == []
    assert target.first_value(TITLE) == "Smith, John"


def test_existing_record_uses_filler_that_allows_update() -> None:
    source = make_archived_record()
    value = source.add_metadata(AUTHOR, "Smith, John")
    target = Record()
    filler = RecordingFiller(allow_update=True)

    FillerRegistry({AUTHOR: filler}).fill(
        FakeUnitOfWork([source]), value, target, already_present=True
    )

    assert filler.filled == [(value, target)]


def test_mapping_filler_copies_value_and_sibling_at_same_place() -> None:
    source = make_archived_record(Container(name="Publications"))
    source.add_metadata(AUTHOR, "Doe, Jane")
    source.add_metadata(AFFILIATION, PLACEHOLDER_PARENT_METADATA_VALUE)
    value = source.add_metadata(AUTHOR, "Smith, John")
    source.add_metadata(AFFILIATION, "University of Somewhere")
    target = Record()
    filler = MetadataMappingFiller({"crisrp.name": AUTHOR, "person.affiliation.name": AFFILIATION})

    filler.fill(FakeUnitOfWork([source]), value, target)

    assert target.first_value("crisrp.name") == "Smith, John"
    assert target.first_value("person.affiliation.name") == "University of Somewhere"


def test_mapping_filler_skips_placeholder_siblings() -> None:
    source = make_archived_record()
    value = source.add_metadata(AUTHOR, "Smith, John")
    source.add_metadata(AFFILIATION, PLACEHOLDER_PARENT_METADATA_VALUE)
    target = Record()

    MetadataMappingFiller({"person.affiliation.name": AFFILIATION}).fill(
        FakeUnitOfWork([source]), value, target
    )

    assert target.metadata_for("person.affiliation.name") == ()


def test_mapping_filler_does_not_duplicate_existing_values() -> None:
    source = make_archived_record()
    value = source.add_metadata(AUTHOR, "Smith, John")
    target = Record()
    target.add_metadata("crisrp.name", "Smith, John")
    filler = MetadataMappingFiller({"crisrp.name": AUTHOR})

    filler.fill(FakeUnitOfWork([source]), value, target)

    assert [item.value for item in target.metadata_for("crisrp.name")] == ["Smith, John"]
    assert filler.allows_update(FakeUnitOfWork(), value, target) is False


def test_mapping_filler_with_updates_replaces_values() -> None:
    source = make_archived_record()
    value = source.add_metadata(AUTHOR, "Smith, John")
    target = Record()
    target.add_metadata("crisrp.name", "Smith, J.")
    filler = MetadataMappingFiller({"crisrp.name": AUTHOR}, update_enabled=True)

    filler.fill(FakeUnitOfWork([source]), value, target)

    assert [item.value for item in target.metadata_for("crisrp.name")] == ["Smith, John"]
    assert filler.allows_update(FakeUnitOfWork(), value, target) is True
