# Derived fat-tree parameters

from collections import namedtuple

from topology_gen.errors import InvalidParameter

MIN_K = 4


class FatTreeParams(namedtuple("FatTreeParams", [
        "k", "n_pod", "n_edge_per_pod", "n_agg_per_pod", "n_host_per_edge", "n_port"])):
    """Counts that every enumeration pass reads.

    All of them are functions of k alone: k pods, k/2 edge and k/2
    aggregation switches per pod, k/2 hosts under each edge switch and
    k ports on every switch.
    """
    __slots__ = ()

    @property
    def half(self):
        return self.k // 2

    @property
    def n_host_total(self):
        return self.n_pod * self.n_edge_per_pod * self.n_host_per_edge

    @property
    def n_edge_total(self):
        return self.n_pod * self.n_edge_per_pod

    @property
    def n_agg_total(self):
        return self.n_pod * self.n_agg_per_pod

    @property
    def n_core_total(self):
        return self.half * self.half


def validate_k(k):
    """Return k as an int, raising InvalidParameter unless it is even and >= MIN_K."""
    if isinstance(k, bool):
        raise InvalidParameter(k, "not an integer")
    try:
        value = int(k)
    except (TypeError, ValueError):
        raise InvalidParameter(k, "not an integer") from None
    if isinstance(k, float) and k != value:
        raise InvalidParameter(k, "not an integer")
    if value < MIN_K:
        raise InvalidParameter(k, f"must be at least {MIN_K}")
    if value % 2 == 1:
        raise InvalidParameter(k, "must be even")
    return value


def derive_params(k):
    k = validate_k(k)
    return FatTreeParams(
        k=k,
        n_pod=k,
        n_edge_per_pod=k // 2,
        n_agg_per_pod=k // 2,
        n_host_per_edge=k // 2,
        n_port=k,
    )
