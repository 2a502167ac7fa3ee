import pytest

from response_values.http import Request, Response
from response_values.properties import clear_properties


@pytest.fixture(autouse=True)
def setup_and_cleanup():
    """Clear runtime properties before and after each test."""
    clear_properties()
    yield
    clear_properties()


@pytest.fixture
def last_request():
    return Request(url="https://example.com/api/greeting")


@pytest.fixture
def greeting_response():
    return Response(payload='{"greeting": {"hail": "Hello", "name": "Big Ears"}}')
