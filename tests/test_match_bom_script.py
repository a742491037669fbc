"""
test_match_bom_script.py — Tests for scripts/match_bom.py (batch BOM CLI)

Called by: pytest
Depends on: scripts/match_bom.py, tests/conftest.py (catalog)
"""

import importlib.util
import json
from pathlib import Path

import pytest
from loguru import logger

from supplymatch.services.bom_import import BOM_TEMPLATE_CSV

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "match_bom.py"


@pytest.fixture()
def cli():
    spec = importlib.util.spec_from_file_location("match_bom", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    yield module
    # main() adds a sink bound to the captured stdout
    logger.remove()


@pytest.fixture()
def files(tmp_path, catalog):
    catalog_path = tmp_path / "suppliers.json"
    catalog_path.write_text(json.dumps([s.model_dump(mode="json") for s in catalog]), encoding="utf-8")
    bom_path = tmp_path / "bom.csv"
    bom_path.write_text(BOM_TEMPLATE_CSV, encoding="utf-8")
    return catalog_path, bom_path


def test_prints_matches(cli, files, capsys):
    catalog_path, bom_path = files
    assert cli.main(["--catalog", str(catalog_path), "--bom", str(bom_path), "--top", "2"]) == 0
    out = capsys.readouterr().out
    assert "AUTO-BRK-001" in out
    assert "Präzisionsteile Müller GmbH" in out


def test_writes_json(cli, files, tmp_path):
    catalog_path, bom_path = files
    out_path = tmp_path / "out.json"
    rc = cli.main(["--catalog", str(catalog_path), "--bom", str(bom_path), "--json", str(out_path)])
    assert rc == 0
    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert len(payload) == 3
    assert all(len(item["matches"]) <= 5 for item in payload)


def test_missing_catalog_fails(cli, files, tmp_path):
    _, bom_path = files
    assert cli.main(["--catalog", str(tmp_path / "none.json"), "--bom", str(bom_path)]) == 1


def test_empty_bom_fails(cli, files, tmp_path):
    catalog_path, _ = files
    empty = tmp_path / "empty.csv"
    empty.write_text("part_number\n", encoding="utf-8")
    assert cli.main(["--catalog", str(catalog_path), "--bom", str(empty)]) == 1
