# Records produced by the enumeration passes

from collections import namedtuple

HOST = "Node"
EDGE = "Edge"
AGGR = "Aggr"
CORE = "Core"

SWITCH_KINDS = (EDGE, AGGR, CORE)


class NodeName(namedtuple("NodeName", ["kind", "index"])):
    """Canonical identity of a host or switch, e.g. ``Edge(0 1 1)``."""
    __slots__ = ()

    def __str__(self):
        return "{}({})".format(self.kind, " ".join(str(i) for i in self.index))


def host_name(idx):
    return NodeName(HOST, (idx,))


def edge_name(pod, slot):
    return NodeName(EDGE, (pod, slot, 1))


def aggr_name(pod, slot):
    return NodeName(AGGR, (pod, slot, 1))


def core_name(k, group, index):
    return NodeName(CORE, (k, group, index))


# one wire as seen from the local side: local port -> peer node, peer port
PortLink = namedtuple("PortLink", ["port", "peer", "peer_port"])


class HostRecord(namedtuple("HostRecord", ["name", "ports"])):
    __slots__ = ()

    kind = HOST


class SwitchRecord(namedtuple("SwitchRecord", ["kind", "name", "ports"])):
    __slots__ = ()
