# Layered drawing of a fat-tree topology

import matplotlib.pyplot as plt
import numpy as np

from topology_gen.errors import TopologyWriteError
from topology_gen.records import AGGR, CORE, EDGE, HOST

# bottom to top
LAYERS = [HOST, EDGE, AGGR, CORE]

STYLE = {
    HOST: ('xkcd:green', 20),
    EDGE: ('xkcd:blue', 60),
    AGGR: ('xkcd:orange', 60),
    CORE: ('xkcd:red', 60),
}


def layout(records):
    """Map every node name to (x, y); each layer is spread evenly over [0, 1]."""
    by_layer = {kind: [] for kind in LAYERS}
    for r in records:
        by_layer[r.kind].append(r.name)

    pos = {}
    for y, kind in enumerate(LAYERS):
        names = by_layer[kind]
        if len(names) == 1:
            xs = np.array([0.5])
        else:
            xs = np.linspace(0.0, 1.0, len(names))
        for name, x in zip(names, xs):
            pos[name] = (x, y)
    return pos


def plot_topology(params, records, filename):
    records = list(records)
    pos = layout(records)

    fig, ax = plt.subplots(figsize=(max(8, params.k * 2), 6))

    for r in records:
        x0, y0 = pos[r.name]
        for link in r.ports:
            # each wire is listed from both ends, draw it once
            if str(r.name) < str(link.peer) and link.peer in pos:
                x1, y1 = pos[link.peer]
                ax.plot([x0, x1], [y0, y1], color='gray', linewidth=0.3, zorder=1)

    for kind in LAYERS:
        color, size = STYLE[kind]
        points = np.array([pos[r.name] for r in records if r.kind == kind])
        if len(points):
            ax.scatter(points[:, 0], points[:, 1], c=color, s=size, label=kind, zorder=2)

    ax.set_yticks(range(len(LAYERS)))
    ax.set_yticklabels(['Host', 'Edge', 'Aggregation', 'Core'])
    ax.set_xticks([])
    ax.set_title(f"Fat-tree (k={params.k})")
    ax.legend(loc='upper right')

    try:
        fig.savefig(filename, dpi=300, bbox_inches='tight')
    except (OSError, ValueError) as e:
        # ValueError: image format matplotlib cannot write
        raise TopologyWriteError(filename, e) from e
    finally:
        plt.close(fig)
