"""Tests for estimate_spine.core.result."""

import pytest

from estimate_spine.core.errors import InvalidSizeError
from estimate_spine.core.result import Err, Ok


class TestOk:
    def test_inspection(self):
        ok = Ok(42)
        assert ok.is_ok()
        assert not ok.is_err()
        assert ok.unwrap() == 42

    def test_equality_and_repr(self):
        assert Ok(7.5) == Ok(7.5)
        assert repr(Ok(7.5)) == "Ok(7.5)"

    def test_pattern_matching(self):
        match Ok(3):
            case Ok(value):
                assert value == 3
            case Err():
                pytest.fail("expected Ok")


class TestErr:
    def test_inspection(self):
        err = Err(ValueError("oops"))
        assert err.is_err()
        assert not err.is_ok()

    def test_unwrap_raises_the_error(self):
        error = InvalidSizeError("Tiny", "TINY")
        with pytest.raises(InvalidSizeError):
            Err(error).unwrap()

    def test_pattern_matching(self):
        error = InvalidSizeError("Tiny", "TINY")
        match Err(error):
            case Ok():
                pytest.fail("expected Err")
            case Err(caught):
                assert caught is error
