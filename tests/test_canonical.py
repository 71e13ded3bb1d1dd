import pytest
import sympy as sp

from crn_conservation import (
    CanonicalBasisError,
    ReactionNetwork,
    canonical_basis,
    left_null_space,
    order_columns,
)


def test_left_null_space_annihilates_stoichiometric_matrix():
    N = ReactionNetwork.from_string("A + B -> C").stoichiometric_matrix()
    W = left_null_space(N)
    assert W.shape == (3, 2)
    assert W.T * N == sp.zeros(2, N.cols)


def test_left_null_space_of_open_network_is_empty():
    N = ReactionNetwork.from_string("A -> 0").stoichiometric_matrix()
    assert left_null_space(N).shape == (1, 0)


def test_seed_columns_are_kept():
    W = sp.Matrix([[1, 0], [1, 0], [0, 1], [0, 1]])
    assert canonical_basis(W) == W


def test_subset_sum_completes_basis():
    # Left null space of B -> A + C: laws A + B and B + C. The reduced
    # column [1, 0, -1] needs the subset sum to become a law.
    W = sp.Matrix([[1, 0], [1, 1], [0, 1]])
    W_new = canonical_basis(W)
    assert W_new == sp.Matrix([[0, 1], [1, 1], [1, 0]])


def test_arbitrary_basis_is_reduced_before_the_search():
    # Basis of A + B -> C with a negative entry; its reduced form is 0/1.
    W = sp.Matrix([[-1, 1], [1, 0], [0, 1]])
    assert canonical_basis(W) == sp.Matrix([[1, 0], [0, 1], [1, 1]])


@pytest.mark.parametrize(
    "W",
    [
        # Valid but not reduced: the law A + B + C would contain A + B.
        sp.Matrix([[1, 0], [1, 0], [1, -1]]),
        # Nested seeds: A + B + C contains C.
        sp.Matrix([[1, 0], [1, 0], [1, 1]]),
    ],
)
def test_laws_have_irredundant_supports_for_any_basis(W):
    # Left null space of A -> B; C + A -> C + B over [A, B, C].
    N = ReactionNetwork.from_string("A -> B; C + A -> C + B").stoichiometric_matrix()
    assert W.T * N == sp.zeros(2, N.cols)

    W_new = canonical_basis(W)
    assert W_new == sp.Matrix([[1, 0], [1, 0], [0, 1]])
    supports = [{i for i in range(W_new.rows) if W_new[i, j] == 1} for j in range(W_new.cols)]
    assert not supports[0] <= supports[1]
    assert not supports[1] <= supports[0]


def test_superset_of_accepted_law_is_rejected():
    # Reduced, the first and last columns sum to [1, 1, 0, 0, 1], which
    # contains the seed support {0, 1} and must not be accepted.
    W = sp.Matrix([[1, 0, 0], [1, 0, 0], [0, 1, -1], [0, -1, 1], [0, 1, 0]])
    W_new = canonical_basis(W, allow_partial=True)
    assert W_new == sp.Matrix([[1, 0], [1, 0], [0, 0], [0, 0], [0, 1]])


def test_search_failure_raises_with_partial_basis():
    W = sp.Matrix([[1], [2]])
    with pytest.raises(CanonicalBasisError) as exc:
        canonical_basis(W)
    assert exc.value.expected == 1
    assert exc.value.partial.shape == (2, 0)


def test_allow_partial_returns_what_was_found():
    W = sp.Matrix([[1, 1], [0, 2], [1, 0]])
    W_new = canonical_basis(W, allow_partial=True)
    assert W_new == sp.Matrix([[1], [0], [1]])


def test_max_subset_size_limits_the_search():
    W = sp.Matrix([[1, 0], [1, 1], [0, 1]])
    with pytest.raises(CanonicalBasisError):
        canonical_basis(W, max_subset_size=1)


def test_order_columns_sorts_by_first_nonzero_row():
    W = sp.Matrix([[0, 1, 0], [1, 0, 0], [1, 1, 1]])
    assert order_columns(W) == sp.Matrix([[1, 0, 0], [0, 1, 0], [1, 1, 1]])


def test_order_columns_rejects_zero_column():
    with pytest.raises(ValueError):
        order_columns(sp.Matrix([[1, 0], [0, 0]]))
