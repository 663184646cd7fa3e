import pytest

from src.utils.trace import reset_tracer


@pytest.fixture(autouse=True)
def fresh_tracer():
    reset_tracer()
    yield
    reset_tracer()
