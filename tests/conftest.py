import pytest
import redis

from dyscorrect.core.state import STATE_KEY, clear_namespace, set_namespace


TEST_DB = 15  # db=15 for tests
TEST_NAMESPACE = "dyscorrect-test"


@pytest.fixture
def redis_client():
    r = redis.Redis(host="localhost", port=6379, db=TEST_DB)
    try:
        r.ping()
    except redis.exceptions.ConnectionError:
        pytest.skip("Redis not available")
    set_namespace(r, TEST_NAMESPACE)
    yield r
    clear_namespace(r, TEST_NAMESPACE)
    r.delete(STATE_KEY)
