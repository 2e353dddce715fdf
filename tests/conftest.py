import pytest

from app import create_app
from dayview import DayView


@pytest.fixture
def app():
    return create_app({'TESTING': True, 'INITIAL_DAY': 10})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def store(app, app_ctx):
    return app.extensions['daystore']


@pytest.fixture
def view(store):
    """A freshly mounted view over the test app's store, opened on day 10."""
    return DayView(store, today=10).mount()
