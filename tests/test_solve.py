"""Tests for cache_solve: hits, misses, invalidation and failures."""

import logging

import numpy as np
import pytest

from cachematrix import solvers
from cachematrix.config import SolverConfig
from cachematrix.exceptions import (
    InversionFailure,
    NonFiniteMatrixError,
    NonSquareMatrixError,
    SingularMatrixError,
    UnknownSolverError,
)
from cachematrix.matrix import CacheableMatrix
from cachematrix.solve import cache_solve

NOTICE = "getting cached inverse"


@pytest.fixture
def counting_solver(monkeypatch):
    """Register a solver double that records every call."""
    calls = []

    def solver(A, **options):
        calls.append(options)
        return np.linalg.inv(A)

    monkeypatch.setitem(solvers._SOLVERS, "counting", solver)
    return calls


@pytest.fixture
def notices(caplog):
    caplog.set_level(logging.INFO, logger="cachematrix.solve")

    def count():
        return sum(1 for r in caplog.records if r.getMessage() == NOTICE)

    return count


class TestCacheHits:

    def test_second_call_returns_identical_object(self, counting_solver):
        m = CacheableMatrix(np.array([[4.0, 7.0], [2.0, 6.0]]))

        first = cache_solve(m, "counting")
        second = cache_solve(m, "counting")

        assert second is first
        assert len(counting_solver) == 1

    def test_notice_logged_only_on_hit(self, notices):
        m = CacheableMatrix(np.eye(3) * 3)

        cache_solve(m)
        assert notices() == 0

        cache_solve(m)
        assert notices() == 1

    def test_quiet_suppresses_notice(self, notices):
        m = CacheableMatrix(np.eye(2))
        cache_solve(m)
        cache_solve(m, quiet=True)
        assert notices() == 0

    def test_quiet_from_config(self, notices):
        m = CacheableMatrix(np.eye(2))
        config = SolverConfig(quiet=True)
        cache_solve(m, config=config)
        cache_solve(m, config=config)
        assert notices() == 0

    def test_options_ignored_on_hit(self, counting_solver):
        m = CacheableMatrix(np.eye(2) * 2)

        cache_solve(m, "counting", flag=1)
        cache_solve(m, "counting", flag=2)
        cache_solve(m, "gauss_jordan")

        assert counting_solver == [{"flag": 1}]

    def test_returns_stale_inverse_set_by_hand(self):
        m = CacheableMatrix(np.eye(2))
        bogus = np.full((2, 2), 7.0)
        m.set_inverse(bogus)
        assert cache_solve(m) is bogus


class TestInvalidation:

    def test_set_forces_recompute(self, counting_solver):
        m = CacheableMatrix(np.eye(2) * 2)
        cache_solve(m, "counting")

        m.set(np.eye(2) * 4)
        assert m.get_inverse() is None

        result = cache_solve(m, "counting")
        np.testing.assert_allclose(result, np.eye(2) * 0.25)
        assert len(counting_solver) == 2

    def test_example_scenario(self, notices):
        m = CacheableMatrix(np.array([[2.0, 0.0], [0.0, 2.0]]))

        first = cache_solve(m)
        np.testing.assert_array_equal(first, [[0.5, 0.0], [0.0, 0.5]])
        assert notices() == 0

        second = cache_solve(m)
        assert second is first
        assert notices() == 1

        m.set(np.array([[1.0, 0.0], [0.0, 1.0]]))
        third = cache_solve(m)
        np.testing.assert_array_equal(third, [[1.0, 0.0], [0.0, 1.0]])
        assert notices() == 1


class TestRoundTrip:

    @pytest.mark.parametrize("method", ["numpy", "lu", "gauss_jordan"])
    def test_product_is_identity(self, method):
        rng = np.random.default_rng(0)
        A = rng.random((6, 6)) + 6 * np.eye(6)
        m = CacheableMatrix(A)

        A_inv = cache_solve(m, method)

        np.testing.assert_allclose(A @ A_inv, np.eye(6), atol=1e-9)

    def test_default_method_from_config(self, counting_solver):
        m = CacheableMatrix(np.eye(2))
        config = SolverConfig(default_method="counting")
        cache_solve(m, config=config)
        assert len(counting_solver) == 1

    def test_config_tolerance_reaches_lu(self):
        m = CacheableMatrix(np.array([[1.0, 0.0], [0.0, 1e-12]]))
        with pytest.raises(SingularMatrixError):
            cache_solve(m, "lu", config=SolverConfig(lu_tol=1e-9))

    def test_explicit_option_overrides_config(self):
        m = CacheableMatrix(np.array([[1.0, 0.0], [0.0, 1e-12]]))
        result = cache_solve(m, "lu", config=SolverConfig(lu_tol=1e-9), tol=0.0)
        np.testing.assert_allclose(result, [[1.0, 0.0], [0.0, 1e12]])


class TestFailures:

    def test_singular_matrix_raises_and_stays_absent(self):
        m = CacheableMatrix(np.zeros((2, 2)))

        with pytest.raises(InversionFailure):
            cache_solve(m)

        assert m.get_inverse() is None

    @pytest.mark.parametrize("method", ["numpy", "lu", "gauss_jordan"])
    def test_singular_for_every_solver(self, method):
        m = CacheableMatrix(np.array([[1.0, 2.0], [2.0, 4.0]]))
        with pytest.raises(SingularMatrixError):
            cache_solve(m, method)
        assert not m.has_inverse()

    def test_non_square_raises(self):
        m = CacheableMatrix(np.ones((2, 3)))
        with pytest.raises(NonSquareMatrixError):
            cache_solve(m)
        assert m.get_inverse() is None

    def test_placeholder_raises(self):
        m = CacheableMatrix()
        with pytest.raises(NonFiniteMatrixError):
            cache_solve(m)

    def test_retry_after_fixing_value(self):
        m = CacheableMatrix(np.zeros((2, 2)))
        with pytest.raises(InversionFailure):
            cache_solve(m)

        m.set(np.eye(2) * 2)
        np.testing.assert_allclose(cache_solve(m), np.eye(2) * 0.5)

    def test_unknown_solver(self):
        m = CacheableMatrix(np.eye(2))
        with pytest.raises(UnknownSolverError):
            cache_solve(m, "nope")
        assert m.get_inverse() is None


class TestCacheStaysConsistent:

    def test_mutating_source_array_does_not_stale_cache(self):
        A = np.array([[2.0, 0.0], [0.0, 2.0]])
        m = CacheableMatrix()
        m.set(A)
        cache_solve(m)

        A[0, 0] = 4.0
        inv = cache_solve(m)

        np.testing.assert_allclose(m.get() @ inv, np.eye(2))

    def test_returned_inverse_cannot_be_corrupted(self):
        m = CacheableMatrix(np.array([[2.0, 0.0], [0.0, 2.0]]))
        inv = cache_solve(m)

        with pytest.raises(ValueError):
            inv *= 10

        np.testing.assert_allclose(cache_solve(m), [[0.5, 0.0], [0.0, 0.5]])

    def test_invalid_env_method_does_not_affect_hit(self, monkeypatch):
        m = CacheableMatrix(np.eye(2) * 2)
        first = cache_solve(m)

        monkeypatch.setenv("CACHEMATRIX_METHOD", "bogus")

        assert cache_solve(m) is first

    def test_quiet_env_honoured_on_hit(self, monkeypatch, notices):
        m = CacheableMatrix(np.eye(2))
        cache_solve(m)
        monkeypatch.setenv("CACHEMATRIX_QUIET", "1")
        cache_solve(m)
        assert notices() == 0


class TestComplex:

    @pytest.mark.parametrize("method", ["numpy", "lu", "gauss_jordan"])
    def test_complex_matrix_inverted(self, method):
        A = np.array([[1j, 0.0], [0.0, 1.0]])
        m = CacheableMatrix(A)

        inv = cache_solve(m, method)

        assert np.iscomplexobj(inv)
        np.testing.assert_allclose(inv, [[-1j, 0.0], [0.0, 1.0]], atol=1e-12)

    @pytest.mark.parametrize("method", ["numpy", "lu", "gauss_jordan"])
    def test_complex_round_trip(self, method):
        rng = np.random.default_rng(1)
        A = rng.random((4, 4)) + 1j * rng.random((4, 4)) + 4 * np.eye(4)
        inv = cache_solve(CacheableMatrix(A), method)
        np.testing.assert_allclose(A @ inv, np.eye(4), atol=1e-9)
