import json

import pytest

from hivemind import cli


def test_main_prints_colony_summary(capsys):
    cli.main(["--ticks", "5", "--seed", "3"])

    out = capsys.readouterr().out
    assert out.startswith("tick 5:")
    assert "E1S1 level=7 stage=pupa" in out
    assert "E3S1 level=7 stage=pupa" in out
    assert "memory signature " in out


def test_main_is_deterministic(capsys):
    cli.main(["--ticks", "10"])
    first = capsys.readouterr().out
    cli.main(["--ticks", "10"])

    assert capsys.readouterr().out == first


def test_memory_out_writes_json(tmp_path, capsys):
    target = tmp_path / "memory.json"

    cli.main(["--ticks", "3", "--memory-out", str(target)])

    memory = json.loads(target.read_text(encoding="utf-8"))
    assert set(memory["rooms"]) >= {"E1S1", "E3S1"}
    assert "suspend_until" in memory["overseer"]


def test_rejects_non_positive_ticks(capsys):
    with pytest.raises(SystemExit):
        cli.main(["--ticks", "0"])

    assert "--ticks must be positive" in capsys.readouterr().err
