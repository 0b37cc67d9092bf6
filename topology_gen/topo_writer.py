# Topology description file writer
#
# Format (k=4 shown):
#   Hca	1	"Node(0)"
#   [1]  "Edge(0 0 1)"[2]
#   Switch		4	"Edge(0 0 1)"
#   [1] "Aggr(0 2 1)"[2]
#   [2] "Node(0)"[1]
#   Switch		4	"Aggr(0 2 1)"
#   [1]  "Core(4 1 1)"[1]
#
# Edge switch port lines carry a single space after the port number, every
# other port line carries two. Downstream parsers rely on this byte layout.

from topology_gen.errors import TopologyWriteError
from topology_gen.records import EDGE, HOST

HEADER_RULE = "#" * 52


def render_header(params):
    return [
        "#fat tree topology file.",
        f"#Value of k = {params.k}",
        f"#Total number of hosts = {params.n_host_total}",
        f"#Number of hosts under each switch = {params.n_host_per_edge}",
        HEADER_RULE,
        "",
    ]


def render_record(record):
    """Return the lines of one host or switch record."""
    if record.kind == HOST:
        lines = [f'Hca\t{len(record.ports)}\t"{record.name}"']
    else:
        lines = [f'Switch\t\t{len(record.ports)}\t"{record.name}"']
    sep = " " if record.kind == EDGE else "  "
    for link in record.ports:
        lines.append(f'[{link.port}]{sep}"{link.peer}"[{link.peer_port}]')
    return lines


def render_topology(params, records):
    """Yield every line of the topology file, without line terminators."""
    yield from render_header(params)
    for record in records:
        yield from render_record(record)


def write_topology(params, records, filename):
    try:
        with open(filename, "w") as f:
            for line in render_topology(params, records):
                f.write(line + "\n")
    except OSError as e:
        raise TopologyWriteError(filename, e) from e
