from topology_gen.fat_tree_topology_gen import generate_topology
from topology_gen.records import CORE, HOST
from topology_gen.topo_plot import layout, plot_topology


def test_layout_layers():
    _, records = generate_topology(4)
    records = list(records)
    pos = layout(records)
    assert len(pos) == len(records)
    hosts = [pos[r.name] for r in records if r.kind == HOST]
    cores = [pos[r.name] for r in records if r.kind == CORE]
    assert {y for _, y in hosts} == {0}
    assert {y for _, y in cores} == {3}
    assert hosts[0][0] == 0.0
    assert hosts[-1][0] == 1.0


def test_plot_topology(tmp_path):
    params, records = generate_topology(4)
    path = tmp_path / "fat_k4.png"
    plot_topology(params, records, str(path))
    assert path.stat().st_size > 0
