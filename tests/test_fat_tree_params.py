import pytest

from topology_gen.errors import InvalidParameter
from topology_gen.fat_tree_params import derive_params, validate_k


def test_derive_params_k4():
    params = derive_params(4)
    assert params.n_pod == 4
    assert params.n_edge_per_pod == 2
    assert params.n_agg_per_pod == 2
    assert params.n_host_per_edge == 2
    assert params.n_port == 4
    assert params.n_host_total == 16
    assert params.n_edge_total == 8
    assert params.n_agg_total == 8
    assert params.n_core_total == 4


@pytest.mark.parametrize("k", [4, 6, 8, 10, 24])
def test_totals(k):
    params = derive_params(k)
    assert params.n_host_total == (k // 2) ** 2 * k
    assert params.n_edge_total == k * (k // 2)
    assert params.n_agg_total == k * (k // 2)
    assert params.n_core_total == (k // 2) ** 2


def test_string_k_is_accepted():
    assert derive_params("6").k == 6


@pytest.mark.parametrize("k", [2, 3, 5, 0, -4, "abc", "4.5", None, 4.5, True])
def test_invalid_k(k):
    with pytest.raises(InvalidParameter):
        validate_k(k)


def test_invalid_k_is_a_value_error():
    with pytest.raises(ValueError, match="Wrong k"):
        derive_params(3)
