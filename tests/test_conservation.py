import logging

import numpy as np
import pytest
import sympy as sp

from crn_conservation import (
    CanonicalBasisError,
    ConservationAnalyzer,
    ConservationOptions,
    ReactionNetwork,
    conservation_laws,
    dimerization_network,
    enzyme_inhibition_network,
    gpl_replication_network,
    linear_chain_network,
    michaelis_menten_network,
    two_isomerizations_network,
)


def _support_sets(result):
    return {frozenset(s) for s in result.supports()}


@pytest.mark.parametrize(
    "make_network",
    [linear_chain_network, two_isomerizations_network, michaelis_menten_network, enzyme_inhibition_network],
)
def test_canonical_laws_are_valid(make_network):
    res = conservation_laws(make_network())
    W_new, N = res.W_new, res.N
    assert W_new.cols == res.W.cols > 0

    # Left null vectors of N with entries in {0, 1}.
    assert W_new.T * N == sp.zeros(W_new.cols, N.cols)
    assert all(x in (0, 1) for x in W_new)
    assert W_new.rank() == W_new.cols

    supports = [set(s) for s in res.supports()]
    assert all(supports)
    for i, a in enumerate(supports):
        for j, b in enumerate(supports):
            if i != j:
                assert not a > b

    firsts = [min(i for i in range(W_new.rows) if W_new[i, j] == 1) for j in range(W_new.cols)]
    assert firsts == sorted(firsts)


def test_linear_chain_has_single_law():
    res = conservation_laws(linear_chain_network())
    assert len(res) == 1
    assert res.as_strings() == ["A + B + C = T1"]
    A, B, C, T1 = sp.symbols("A B C T1", real=True)
    assert res.equations == [sp.Eq(A + B + C, T1)]


def test_disjoint_isomerizations_give_one_law_per_component():
    res = conservation_laws(two_isomerizations_network())
    assert res.as_strings() == ["X + Y = T1", "Z + W = T2"]
    assert res.supports() == [("X", "Y"), ("Z", "W")]


def test_michaelis_menten_laws():
    res = conservation_laws(michaelis_menten_network())
    assert res.as_strings() == ["S + C + P = T1", "E + C = T2"]


def test_enzyme_inhibition_laws():
    res = conservation_laws(enzyme_inhibition_network())
    assert res.species == ["X1", "X2", "X3", "X4", "X5", "X6"]
    assert res.as_strings() == ["X1 + X3 + X4 = T1", "X2 + X3 + X6 = T2", "X5 + X6 = T3"]


def test_no_conservation_laws_is_a_normal_result(caplog):
    net = ReactionNetwork.from_string("A -> 0; B -> A", network_id="outflow")
    with caplog.at_level(logging.INFO, logger="crn_conservation"):
        res = conservation_laws(net)
    assert len(res) == 0
    assert not res.has_laws
    assert res.notice == "outflow has no conservation laws."
    assert res.N.shape == (2, 2)
    assert res.W_new.shape == (2, 0)
    assert res.lhs == [] and res.T == [] and res.equations == []
    assert res.as_strings() == []
    assert "outflow has no conservation laws." in caplog.text


def test_reversibility_does_not_change_laws():
    irrev = conservation_laws(ReactionNetwork.from_string("A + B -> C; C -> D"))
    rev = conservation_laws(ReactionNetwork.from_string("A + B <-> C; C -> D"))
    assert rev.N.cols == irrev.N.cols + 1
    assert rev.N[:, 1] == -rev.N[:, 0]
    assert _support_sets(rev) == _support_sets(irrev) == {
        frozenset({"A", "C", "D"}),
        frozenset({"B", "C", "D"}),
    }


def test_input_order_does_not_change_laws():
    a = conservation_laws(ReactionNetwork.from_string("A -> B; B -> C; D <-> E"))
    b = conservation_laws(
        ReactionNetwork.from_string("E <-> D; B -> C; A -> B", species_names=["E", "C", "A", "D", "B"])
    )
    assert _support_sets(a) == _support_sets(b) == {frozenset("ABC"), frozenset("DE")}


def test_dimerization_has_no_binary_basis():
    with pytest.raises(CanonicalBasisError):
        conservation_laws(dimerization_network())
    with pytest.raises(CanonicalBasisError):
        conservation_laws(gpl_replication_network())


def test_allow_partial_keeps_the_pipeline_going():
    opts = ConservationOptions(allow_partial=True)
    res = ConservationAnalyzer(dimerization_network(), opts).compute()
    assert res.W.cols == 1
    assert len(res) == 0
    assert not res.is_complete
    assert res.notice == "dimerization: found 0 of 1 nonnegative 0/1 conservation laws."


def test_partial_result_keeps_the_binary_laws():
    net = ReactionNetwork.from_string("2A <-> B; C -> D", network_id="mixed")
    res = ConservationAnalyzer(net, ConservationOptions(allow_partial=True)).compute()
    assert res.as_strings() == ["C + D = T1"]
    assert res.W.cols == 2
    assert res.notice == "mixed: found 1 of 2 nonnegative 0/1 conservation laws."


def test_options_rename_symbols():
    opts = ConservationOptions(total_prefix="Tot", lowercase_concentrations=True)
    res = ConservationAnalyzer(michaelis_menten_network(), opts).compute()
    assert res.as_strings() == ["s + c + p = Tot1", "e + c = Tot2"]


def test_lowercase_collision_keeps_original_case():
    net = ReactionNetwork.from_string("A -> a")
    res = ConservationAnalyzer(net, ConservationOptions(lowercase_concentrations=True)).compute()
    assert res.as_strings() == ["A + a = T1"]


def test_analyzer_stages_match_compute():
    an = ConservationAnalyzer(michaelis_menten_network())
    N = an.stoichiometric_matrix()
    W = an.raw_basis(N)
    assert an.canonical_basis(W) == an.compute().W_new


def test_numpy_export():
    arrays = conservation_laws(linear_chain_network()).to_numpy()
    np.testing.assert_array_equal(arrays["N"], np.array([[-1, 0], [1, -1], [0, 1]]))
    np.testing.assert_array_equal(arrays["W_new"], np.array([[1], [1], [1]]))
    assert arrays["W_new"].dtype == np.int64
    assert arrays["W"].shape == (3, 1)


def test_latex_export():
    tex = conservation_laws(michaelis_menten_network()).to_latex()
    assert tex.startswith("\\begin{align}")
    assert tex.count("&=") == 2
