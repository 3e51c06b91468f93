# tests/conftest.py
import pytest

from combparse.Parsec import Cursor, Failure, Result, Success


def assert_result_eq(res1: Result, res2: Result):
    """
    Deep comparison of two parse results.
    """
    if isinstance(res1, Success):
        assert isinstance(res2, Success), "Result mismatch: Success vs Failure"
        assert res1.value == res2.value
        assert res1.remaining.offset == res2.remaining.offset
        assert res1.remaining.text == res2.remaining.text
    else:
        assert isinstance(res2, Failure), "Result mismatch: Failure vs Success"
        assert res1.offset == res2.offset
        assert res1.error == res2.error


@pytest.fixture
def initial_cursor():
    def _make(input_data):
        return Cursor(input_data, 0)

    return _make
