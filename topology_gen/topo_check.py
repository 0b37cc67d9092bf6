#!/usr/bin/env python3
# Structural checks on a fat-tree topology, generated or read back from file

import argparse
import re
import sys
from collections import Counter

import numpy as np

from topology_gen.errors import TopologyError, TopologyFormatError
from topology_gen.fat_tree_params import derive_params
from topology_gen.records import (
    AGGR,
    CORE,
    EDGE,
    HOST,
    HostRecord,
    NodeName,
    PortLink,
    SWITCH_KINDS,
    SwitchRecord,
)

K_PATTERN = re.compile(r'^#Value of k = (\d+)$')
NAME = r'"(' + "|".join((HOST,) + SWITCH_KINDS) + r')\((\d+(?: \d+)*)\)"'
RECORD_PATTERN = re.compile(r'^(Hca|Switch)\s+(\d+)\s+' + NAME + '$')
PORT_PATTERN = re.compile(r'^\[(\d+)\]\s+' + NAME + r'\[(\d+)\]$')

# Node(idx), Edge(pod slot 1), Aggr(pod slot 1), Core(k group index)
INDEX_ARITY = {HOST: 1, **{kind: 3 for kind in SWITCH_KINDS}}


def parse_name(kind, index, line_no, line):
    name = NodeName(kind, tuple(int(x) for x in index.split()))
    if len(name.index) != INDEX_ARITY[kind]:
        raise TopologyFormatError(line_no, line, f"{kind} takes {INDEX_ARITY[kind]} numbers, got {len(name.index)}")
    return name


def parse_topology(lines):
    """Parse topology file lines into (k, records).

    k is taken from the header and is None when the header does not state it.
    """
    k = None
    records = []
    head = None
    declared = 0
    ports = []

    def close(line_no, line):
        if head is None:
            return
        if len(ports) != declared:
            raise TopologyFormatError(line_no, line, f"{head[1]} declares {declared} ports, found {len(ports)}")
        if head[0] == "Hca":
            records.append(HostRecord(head[1], tuple(ports)))
        else:
            records.append(SwitchRecord(head[1].kind, head[1], tuple(ports)))

    line_no = 0
    line = ""
    for line_no, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        if line.startswith("#"):
            match = K_PATTERN.match(line)
            if match:
                k = int(match.group(1))
            continue

        match = PORT_PATTERN.match(line)
        if match:
            if head is None:
                raise TopologyFormatError(line_no, line, "port line outside a record")
            port, kind, index, peer_port = match.groups()
            ports.append(PortLink(int(port), parse_name(kind, index, line_no, line), int(peer_port)))
            continue

        match = RECORD_PATTERN.match(line)
        if match is None:
            raise TopologyFormatError(line_no, line, "unrecognized line")
        close(line_no, line)
        rtype, count, kind, index = match.groups()
        if (rtype == "Hca") != (kind == HOST):
            raise TopologyFormatError(line_no, line, f"{rtype} record cannot name a {kind}")
        head = (rtype, parse_name(kind, index, line_no, line))
        declared = int(count)
        ports = []

    close(line_no, line)
    return k, records


def read_topology(filename):
    with open(filename, "r") as f:
        return parse_topology(f)


def check_counts(records, params):
    expected = {
        HOST: params.n_host_total,
        EDGE: params.n_edge_total,
        AGGR: params.n_agg_total,
        CORE: params.n_core_total,
    }
    found = Counter(r.kind for r in records)
    problems = []
    for kind, n in expected.items():
        if found[kind] != n:
            problems.append(f"expected {n} {kind} records, found {found[kind]}")
    return problems


def check_degrees(records, params):
    problems = []
    for r in records:
        want = 1 if r.kind == HOST else params.n_port
        numbers = [link.port for link in r.ports]
        if len(numbers) != want:
            problems.append(f"{r.name} has {len(numbers)} ports, expected {want}")
        elif sorted(numbers) != list(range(1, want + 1)):
            problems.append(f"{r.name} ports are not numbered 1..{want}: {numbers}")
    return problems


def check_links(records):
    """Every reference A[p] -> B[q] must be answered by B[q] -> A[p]."""
    wiring = {}
    problems = []
    for r in records:
        for link in r.ports:
            key = (r.name, link.port)
            if key in wiring:
                problems.append(f"{r.name} port {link.port} listed twice")
                continue
            wiring[key] = (link.peer, link.peer_port)

    for (name, port), (peer, peer_port) in wiring.items():
        back = wiring.get((peer, peer_port))
        if back is None:
            problems.append(f"{name}[{port}] -> {peer}[{peer_port}] has no reverse entry")
        elif back != (name, port):
            problems.append(f"{name}[{port}] -> {peer}[{peer_port}] but {peer}[{peer_port}] -> {back[0]}[{back[1]}]")
    return problems


def core_pod_matrix(records, params):
    """Matrix of links from each core switch (rows, document order) into each pod (columns)."""
    cores = [r for r in records if r.kind == CORE]
    m = np.zeros((len(cores), params.n_pod), dtype=int)
    for row, r in enumerate(cores):
        for link in r.ports:
            pod = link.peer.index[0]
            if link.peer.kind == AGGR and 0 <= pod < params.n_pod:
                m[row, pod] += 1
    return m


def check_bisection(records, params):
    """Each core switch reaches every pod once, so every pod pair shares a core switch."""
    m = core_pod_matrix(records, params)
    problems = []
    bad_rows = np.nonzero((m != 1).any(axis=1))[0]
    for row in bad_rows:
        problems.append(f"core switch #{row} links per pod: {m[row].tolist()}")
    shared = m.T @ m
    pods_a, pods_b = np.nonzero(shared == 0)
    for a, b in zip(pods_a, pods_b):
        if a < b:
            problems.append(f"pods {a} and {b} share no core switch")
    return problems


def check_topology(records, k):
    """Run every structural check and return the list of problems found."""
    params = derive_params(k)
    records = list(records)
    return (check_counts(records, params)
            + check_degrees(records, params)
            + check_links(records)
            + check_bisection(records, params))


def main(argv=None):
    parser = argparse.ArgumentParser(description='check a fat-tree topology description file')
    parser.add_argument('topology', help="the topology file to check")
    parser.add_argument('-k', dest='k', action='store', type=int, default=None,
                        help="fat-tree parameter K (default: read from the file header)")
    args = parser.parse_args(argv)

    try:
        file_k, records = read_topology(args.topology)
        k = args.k if args.k is not None else file_k
        if k is None:
            print(f"Error: {args.topology} does not state k, pass -k")
            return 1
        problems = check_topology(records, k)
    except (OSError, TopologyError) as e:
        print(f"Error: {e}")
        return 1

    for problem in problems:
        print(f"Error: {problem}")
    if problems:
        print(f"{len(problems)} problems found in {args.topology}")
        return 1
    print(f"{args.topology}: {len(records)} records, all checks passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
