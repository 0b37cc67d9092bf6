#!/usr/bin/env python3
# Fat-tree topology generation script
#
# Every pass below is a pure function of the derived parameters. The four
# passes never talk to each other: a port reference A[p] -> B[q] emitted by
# one pass is matched by B[q] -> A[p] in another only because both apply the
# same index formulas.

import argparse
import itertools
import sys

from topology_gen.errors import MissingParameter, InvalidParameter, TopologyError
from topology_gen.fat_tree_params import derive_params
from topology_gen.records import (
    AGGR,
    CORE,
    EDGE,
    HostRecord,
    PortLink,
    SwitchRecord,
    aggr_name,
    core_name,
    edge_name,
    host_name,
)
from topology_gen.topo_writer import write_topology

# Default parameters
DEFAULT_OUTPUT = "resultat.topo"


def host_index(params, pod, slot, t):
    """Global index of local host t under edge switch (pod, slot)."""
    return (pod * params.n_edge_per_pod + slot) * params.n_host_per_edge + t


def enumerate_hosts(params):
    """Yield one HostRecord per host, pod-major, then slot, then local host.

    Hosts sit on the even ports 2, 4, ..., k of their edge switch.
    """
    for i in range(params.n_pod):
        for j in range(params.n_edge_per_pod):
            for t in range(params.n_host_per_edge):
                link = PortLink(1, edge_name(i, j), (t + 1) * 2)
                yield HostRecord(host_name(host_index(params, i, j, t)), (link,))


def enumerate_edges(params):
    """Yield one SwitchRecord per edge switch.

    Odd ports go up to aggregation slots k/2, k/2+1, ..., k-1 in order, landing
    on aggregation port 2*(slot+1). Even ports go down to this switch's hosts.
    """
    half = params.half
    for i in range(params.n_pod):
        for j in range(params.n_edge_per_pod):
            ports = []
            for p in range(1, params.n_port + 1):
                if p % 2 == 1:
                    ports.append(PortLink(p, aggr_name(i, half + (p - 1) // 2), (j + 1) * 2))
                else:
                    ports.append(PortLink(p, host_name(host_index(params, i, j, p // 2 - 1)), 1))
            yield SwitchRecord(EDGE, edge_name(i, j), tuple(ports))


def enumerate_aggregations(params):
    """Yield one SwitchRecord per aggregation switch.

    Aggregation slots occupy [k/2, k) so they never collide with edge slots of
    the same pod. The switch in slot k/2 + g - 1 serves core group g: its odd
    port m reaches Core(k g m//2+1) on the core port numbered by pod (1-based),
    its even port m reaches edge slot m/2 - 1 on edge port 2g - 1.
    """
    k = params.k
    half = params.half
    for i in range(params.n_pod):
        for g in range(1, params.n_agg_per_pod + 1):
            ports = []
            for m in range(1, params.n_port + 1):
                if m % 2 == 1:
                    ports.append(PortLink(m, core_name(k, g, m // 2 + 1), i + 1))
                else:
                    ports.append(PortLink(m, edge_name(i, m // 2 - 1), g * 2 - 1))
            yield SwitchRecord(AGGR, aggr_name(i, g + half - 1), tuple(ports))


def enumerate_cores(params):
    """Yield the (k/2)^2 core switches, k/2 groups of k/2.

    Core(k g j) port m goes to pod m-1, aggregation slot k/2 + g - 1, at
    aggregation port 2j - 1.
    """
    k = params.k
    half = params.half
    for g in range(1, half + 1):
        for j in range(1, half + 1):
            ports = tuple(
                PortLink(m, aggr_name(m - 1, half + g - 1), 2 * j - 1)
                for m in range(1, params.n_port + 1)
            )
            yield SwitchRecord(CORE, core_name(k, g, j), ports)


def generate_topology(k):
    """Return (params, records) with records in document order: hosts, edge, aggregation, core."""
    params = derive_params(k)
    records = itertools.chain(
        enumerate_hosts(params),
        enumerate_edges(params),
        enumerate_aggregations(params),
        enumerate_cores(params),
    )
    return params, records


def print_summary(params, output):
    print("Fat-tree Topology Parameters:")
    print(f"Fat-tree K: {params.k}")
    print(f"Number of pods: {params.n_pod}")
    print(f"Number of edge switches per pod: {params.n_edge_per_pod}, total: {params.n_edge_total}")
    print(f"Number of aggregation switches per pod: {params.n_agg_per_pod}, total: {params.n_agg_total}")
    print(f"Number of core switches: {params.n_core_total}")
    print(f"Number of hosts per edge switch: {params.n_host_per_edge}")
    print(f"Total number of hosts: {params.n_host_total}")
    print(f"\nTopology file generated: {output}")


def build_parser():
    parser = argparse.ArgumentParser(description='generate a k-ary fat-tree topology description file')
    parser.add_argument('k', nargs='?', default=None,
                        help="fat-tree parameter K, an even integer >= 4")
    parser.add_argument('-o', '--output', dest='output', action='store',
                        default=DEFAULT_OUTPUT, help=f"topology file to write (default: {DEFAULT_OUTPUT})")
    parser.add_argument('--csv', dest='csv', action='store',
                        default=None, help="also write the port table as CSV to this path")
    parser.add_argument('--plot', dest='plot', action='store',
                        default=None, help="also draw the topology to this image file")
    parser.add_argument('--check', dest='check', action='store_true',
                        help="verify the generated wiring and exit 1 on any problem")
    parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
                        help="do not print the topology summary")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        if args.k is None:
            raise MissingParameter()
        params, records = generate_topology(args.k)
    except (MissingParameter, InvalidParameter) as e:
        print(e)
        return 1

    if args.csv or args.plot or args.check:
        records = list(records)

    try:
        write_topology(params, records, args.output)
        if not args.quiet:
            print_summary(params, args.output)

        if args.csv:
            from topology_gen.topo_table import link_table, summary_table, write_port_table
            df = write_port_table(records, args.csv)
            if not args.quiet:
                print(f"\nPort table generated: {args.csv} ({len(link_table(df))} links)")
                print(summary_table(df).to_string())

        if args.plot:
            from topology_gen.topo_plot import plot_topology
            plot_topology(params, records, args.plot)
            if not args.quiet:
                print(f"Topology figure generated: {args.plot}")
    except TopologyError as e:
        print(f"Error: {e}")
        return 1

    if args.check:
        from topology_gen.topo_check import check_topology
        problems = check_topology(records, params.k)
        for problem in problems:
            print(f"Error: {problem}")
        if problems:
            return 1
        if not args.quiet:
            print("Topology check passed")

    return 0


if __name__ == "__main__":
    sys.exit(main())
