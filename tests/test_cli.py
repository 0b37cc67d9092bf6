import os

import pytest

from topology_gen.fat_tree_topology_gen import DEFAULT_OUTPUT, main


def test_generates_default_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["4"]) == 0
    out = capsys.readouterr().out
    assert "Total number of hosts: 16" in out
    text = (tmp_path / DEFAULT_OUTPUT).read_text()
    assert text.startswith("#fat tree topology file.\n#Value of k = 4\n")


def test_output_option_and_quiet(tmp_path, capsys):
    path = tmp_path / "fat_k6.topo"
    assert main(["6", "-o", str(path), "-q"]) == 0
    assert capsys.readouterr().out == ""
    assert "#Total number of hosts = 54\n" in path.read_text()


def test_missing_k(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert "Not enough params" in capsys.readouterr().out
    assert os.listdir(tmp_path) == []


@pytest.mark.parametrize("k", ["3", "2", "7", "0", "four"])
def test_invalid_k_leaves_no_file(tmp_path, monkeypatch, capsys, k):
    monkeypatch.chdir(tmp_path)
    assert main([k]) == 1
    assert "Wrong k" in capsys.readouterr().out
    assert os.listdir(tmp_path) == []


def test_unwritable_output(tmp_path, capsys):
    assert main(["4", "-o", str(tmp_path / "no" / "such" / "dir.topo")]) == 1
    assert capsys.readouterr().out.startswith("Error: cannot write")


def test_check_csv_and_plot(tmp_path, capsys):
    topo = tmp_path / "fat.topo"
    csv = tmp_path / "fat.csv"
    png = tmp_path / "fat.png"
    assert main(["4", "-o", str(topo), "--csv", str(csv), "--plot", str(png), "--check"]) == 0
    out = capsys.readouterr().out
    assert "Topology check passed" in out
    assert topo.exists() and csv.exists() and png.exists()


def test_same_k_gives_identical_files(tmp_path):
    a = tmp_path / "a.topo"
    b = tmp_path / "b.topo"
    assert main(["8", "-o", str(a), "-q"]) == 0
    assert main(["8", "-o", str(b), "-q"]) == 0
    assert a.read_bytes() == b.read_bytes()


def test_unsupported_plot_format(tmp_path, capsys):
    topo = tmp_path / "fat.topo"
    assert main(["4", "-o", str(topo), "--plot", str(tmp_path / "fat.xyz"), "-q"]) == 1
    assert capsys.readouterr().out.startswith("Error: cannot write")


def test_csv_prints_link_count_and_summary(tmp_path, capsys):
    assert main(["4", "-o", str(tmp_path / "fat.topo"), "--csv", str(tmp_path / "fat.csv")]) == 0
    out = capsys.readouterr().out
    assert "(48 links)" in out
    assert "Core" in out.split("Port table generated")[1]
