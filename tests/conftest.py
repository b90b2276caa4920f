import logging

import pytest

from courseadmin.services.records_client import RecordClient
from fakes import APP_IDS, BASE_URL, FakeStoreSession


@pytest.fixture
def store():
    return FakeStoreSession()


@pytest.fixture
def client(store):
    return RecordClient(BASE_URL, APP_IDS, session=store)


@pytest.fixture
def app_logs(caplog):
    """Capture the courseadmin logger tree even after setup_logging() stopped propagation."""
    logger = logging.getLogger("courseadmin")
    caplog.set_level(logging.DEBUG, logger="courseadmin")
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)
