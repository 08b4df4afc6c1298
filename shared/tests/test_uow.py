from unittest import mock

import pytest

from shared.application.uow import AbstractUnitOfWork, DjangoUnitOfWork
from shared.domain.base import DomainEvent


def test_abstract_unit_of_work_cannot_be_instantiated():
    with pytest.raises(TypeError):
        AbstractUnitOfWork()


@pytest.mark.django_db
def test_events_are_published_after_commit(django_capture_on_commit_callbacks):
    event = DomainEvent(aggregate_id=1)
    with mock.patch("shared.application.message_bus.message_bus.publish_events") as publish:
        with django_capture_on_commit_callbacks(execute=True):
            with DjangoUnitOfWork() as uow:
                uow.record(event)
                publish.assert_not_called()

    publish.assert_called_once_with([event])


@pytest.mark.django_db
def test_events_are_discarded_on_error(django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks() as callbacks:
        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork() as uow:
                uow.record(DomainEvent(aggregate_id=1))
                raise RuntimeError("boom")

    assert callbacks == []
