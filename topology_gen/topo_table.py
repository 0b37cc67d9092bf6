# Tabular form of a topology: one row per port reference

import pandas as pd

from topology_gen.errors import TopologyWriteError

COLUMNS = ['kind', 'node', 'port', 'peer_kind', 'peer', 'peer_port']


def port_table(records):
    """DataFrame with the same fields as the text format, in document order."""
    rows = []
    for r in records:
        for link in r.ports:
            rows.append({
                'kind': r.kind,
                'node': str(r.name),
                'port': link.port,
                'peer_kind': link.peer.kind,
                'peer': str(link.peer),
                'peer_port': link.peer_port,
            })
    return pd.DataFrame(rows, columns=COLUMNS)


def link_table(df):
    """Collapse the two directed rows of every wire into one undirected row."""
    forward = df[df['node'] < df['peer']]
    return forward.reset_index(drop=True)


def summary_table(df):
    """Per node kind: number of nodes, ports, and ports towards each peer kind."""
    nodes = df.groupby('kind')['node'].nunique().rename('nodes')
    ports = df.groupby('kind').size().rename('ports')
    by_peer = pd.crosstab(df['kind'], df['peer_kind'])
    return pd.concat([nodes, ports, by_peer], axis=1).fillna(0).astype(int)


def write_port_table(records, filename):
    df = port_table(records)
    try:
        df.to_csv(filename, index=False)
    except OSError as e:
        raise TopologyWriteError(filename, e) from e
    return df
