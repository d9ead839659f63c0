from pathlib import Path

import pandas as pd
import pytest

from algorithms import NextHopDerivation
from linkstate_runner import load_config, main, run_network
from routing import NoLink
from topology import LinkRejection


NETWORK_YML = """
routers: 4
links:
  - [0, 1, 1]
  - [1, 2, 1]
  - [0, 2, 5]
  - [2, 3, 1]
  - [0, 0, 5]
  - [0, 1, -3]
queries:
  - [0, 3]
  - [3, 0]
  - [1, 7]
max_workers: 2
"""


def test_load_config(tmp_path: Path):
    cfg_path = tmp_path / "net.yml"
    cfg_path.write_text(NETWORK_YML)

    cfg = load_config(cfg_path)

    assert cfg.routers == 4
    assert len(cfg.links) == 6
    assert cfg.queries == [(0, 3), (3, 0), (1, 7)]
    assert cfg.max_workers == 2
    assert cfg.next_hop_derivation is NextHopDerivation.PREDECESSOR


def test_run_network_reports_paths_and_rejections(tmp_path: Path):
    cfg_path = tmp_path / "net.yml"
    cfg_path.write_text(NETWORK_YML)

    summary = run_network(load_config(cfg_path))

    assert summary["links_accepted"] == 4
    reasons = [r.reason for r in summary["links_rejected"]]
    assert reasons == [LinkRejection.SELF_LOOP, LinkRejection.NEGATIVE_COST]
    paths = [r.path for r in summary["results"]]
    assert paths == [(0, 1, 2, 3), (3, 2, 1, 0), ()]


def test_collapsing_derivation_from_config(tmp_path: Path):
    cfg_path = tmp_path / "net.yml"
    cfg_path.write_text(
        """
routers: 3
links:
  - [0, 1, 2]
next_hop_derivation: collapsing
queries:
  - [0, 2]
"""
    )

    cfg = load_config(cfg_path)
    summary = run_network(cfg)

    assert cfg.next_hop_derivation is NextHopDerivation.COLLAPSING
    assert isinstance(summary["results"][0], NoLink)


def test_main_prints_tables_and_writes_csv(tmp_path: Path, capsys):
    cfg_path = tmp_path / "net.yml"
    cfg_path.write_text(NETWORK_YML)
    csv_path = tmp_path / "out" / "tables.csv"

    assert main(["--config", str(cfg_path), "--csv", str(csv_path)]) == 0

    out = capsys.readouterr().out
    assert "Routing Table for Router 3" in out
    assert "[path] 0 -> 3: Link exists: 0 - 1 - 2 - 3" in out
    assert "[path] 1 -> 7: Invalid source and/or destination" in out
    assert "link not added: 0 - 0 cost=5 (self_loop)" in out

    frame = pd.read_csv(csv_path)
    assert len(frame) == 4 * 3


def test_main_reports_empty_network(tmp_path: Path, capsys):
    cfg_path = tmp_path / "empty.yml"
    cfg_path.write_text("routers: 3\n")

    main(["--config", str(cfg_path)])

    assert "no links - empty network" in capsys.readouterr().out


def test_load_config_rejects_malformed_files(tmp_path: Path):
    missing = tmp_path / "missing.yml"
    missing.write_text("links: []\n")
    bad_link = tmp_path / "bad_link.yml"
    bad_link.write_text("routers: 2\nlinks:\n  - [0, 1]\n")
    scalar_link = tmp_path / "scalar_link.yml"
    scalar_link.write_text("routers: 2\nlinks: [5]\n")
    scalar_query = tmp_path / "scalar_query.yml"
    scalar_query.write_text("routers: 2\nqueries: [1]\n")

    with pytest.raises(ValueError):
        load_config(missing)
    with pytest.raises(ValueError):
        load_config(bad_link)
    with pytest.raises(ValueError):
        load_config(scalar_link)
    with pytest.raises(ValueError):
        load_config(scalar_query)
