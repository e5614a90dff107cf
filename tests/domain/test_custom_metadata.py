from __future__ import annotations

import logging

import pytest

from entitylink.config import ConfigurationError
from entitylink.domain.custom_metadata import (
    TemplatedMetadataConsumer,
    placeholder_names,
    render_template,
)
from entitylink.domain.model import ENTITY_TYPE, Record
from tests.helpers.resolution import FakeUnitOfWork, make_archived_record, make_properties

PERSON_CONFIG = {
    "event.consumer.personcustom.metadata": "dc.title, crisrp.fullName",
    "event.consumer.personcustom.format": (
        "{person.familyName}\\, {person.givenName}, {person.givenName} {person.familyName}"
    ),
}


def _person(given: str | None = "Jane", family: str | None = "Doe") -> Record:
    record = make_archived_record()
    record.add_metadata(ENTITY_TYPE, "Person")
    if given is not None:
        record.add_metadata("person.givenName", given)
    if family is not None:
        record.add_metadata("person.familyName", family)
    return record


def test_placeholder_names() -> None:
    assert placeholder_names("{a.b}, {c.d.e}") == ["a.b", "c.d.e"]
    assert placeholder_names("no placeholders") == []


def test_render_template_blanks_missing_values() -> None:
    record = _person(given=None)

    assert render_template(record, "{person.givenName} {person.familyName}") == "Doe"


def test_consumer_writes_rendered_values() -> None:
    record = _person()
    record.add_metadata("dc.title", "old title")
    consumer = TemplatedMetadataConsumer("personcustom", make_properties(PERSON_CONFIG))

    consumer.consume(FakeUnitOfWork([record]), record)

    assert [value.value for value in record.metadata_for("dc.title")] == ["Doe, Jane"]
    assert record.first_value("crisrp.fullName") == "Jane Doe"


def test_consumer_keeps_existing_value_when_rendering_is_blank() -> None:
    record = _person(given=None, family=None)
    record.add_metadata("dc.title", "kept")
    properties = make_properties(
        {
            "event.consumer.personcustom.metadata": "dc.title",
            "event.consumer.personcustom.format": "{person.givenName}",
        }
    )

    TemplatedMetadataConsumer("personcustom", properties).consume(FakeUnitOfWork([record]), record)

    assert record.first_value("dc.title") == "kept"


def test_consumer_only_handles_matching_entity_type() -> None:
    record = make_archived_record()
    record.add_metadata(ENTITY_TYPE, "Publication")
    record.add_metadata("person.familyName", "Doe")
    consumer = TemplatedMetadataConsumer("personcustom", make_properties(PERSON_CONFIG))

    consumer.consume(FakeUnitOfWork([record]), record)

    assert record.first_value("crisrp.fullName") is None
    assert record.first_value("dc.title") is None


def test_entity_type_is_configurable_and_case_insensitive() -> None:
    record = make_archived_record()
    record.add_metadata(ENTITY_TYPE, "publication")
    record.add_metadata("dc.date.issued", "2024")
    properties = make_properties(
        {
            "event.consumer.pubcustom.metadata": "local.year",
            "event.consumer.pubcustom.format": "{dc.date.issued}",
            "event.consumer.pubcustom.entity-type": "Publication",
        }
    )

    TemplatedMetadataConsumer("pubcustom", properties).consume(FakeUnitOfWork([record]), record)

    assert record.first_value("local.year") == "2024"


def test_record_is_processed_once_per_batch() -> None:
    record = _person()
    uow = FakeUnitOfWork([record])
    consumer = TemplatedMetadataConsumer("personcustom", make_properties(PERSON_CONFIG))

    consumer.consume(uow, record)
    record.clear_metadata("crisrp.fullName")
    consumer.consume(uow, record)
    assert record.first_value("crisrp.fullName") is None

    consumer.end(uow)
    consumer.consume(uow, record)
    assert record.first_value("crisrp.fullName") == "Jane Doe"


def test_mismatched_arrays_disable_consumer(caplog: pytest.LogCaptureFixture) -> None:
    properties = make_properties(
        {
            "event.consumer.personcustom.metadata": "dc.title, crisrp.fullName",
            "event.consumer.personcustom.format": "{person.familyName}",
        }
    )

    with caplog.at_level(logging.ERROR):
        consumer = TemplatedMetadataConsumer("personcustom", properties)

    record = _person()
    consumer.consume(FakeUnitOfWork([record]), record)

    assert not consumer.enabled
    assert record.first_value("dc.title") is None
    assert "disabled" in caplog.text


def test_missing_configuration_disables_consumer() -> None:
    assert not TemplatedMetadataConsumer("unknown", make_properties()).enabled


def test_invalid_target_field_is_a_configuration_error() -> None:
    properties = make_properties(
        {
            "event.consumer.personcustom.metadata": "title",
            "event.consumer.personcustom.format": "{person.familyName}",
        }
    )

    with pytest.raises(ConfigurationError, match="personcustom"):
        TemplatedMetadataConsumer("personcustom", properties)


def test_invalid_placeholder_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    record = _person()
    properties = make_properties(
        {
            "event.consumer.personcustom.metadata": "dc.title",
            "event.consumer.personcustom.format": "{broken}",
        }
    )
    uow = FakeUnitOfWork([record])

    with caplog.at_level(logging.ERROR):
        TemplatedMetadataConsumer("personcustom", properties).consume(uow, record)

    assert "Could not derive metadata" in caplog.text
    assert uow.authorization.ignore is False
