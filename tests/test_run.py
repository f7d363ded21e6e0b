"""
Tests for the command-line entry point.
"""

import json

import pytest

from slaph_lookup.run import main


INFILE = """\
start_config = 714
output_path = /tmp/correlators

[quarks]
quark = u:{nb_rnd_vec}:TB:2:EI:6:DF:4:/data/light

[operator_lists]
operator_list = g5.d0.p0,1

[correlator_lists]
correlator_list = C2+:Q0:Op0:Q0:Op0
"""


def _write_infile(tmp_path, nb_rnd_vec=4, extra=""):
    path = tmp_path / "infile.ini"
    path.write_text(INFILE.format(nb_rnd_vec=nb_rnd_vec) + extra)
    return path


class TestMain:
    """Tests for main()."""

    def test_summary(self, tmp_path, capsys):
        main([str(_write_infile(tmp_path))])
        out = capsys.readouterr().out
        assert "C2c: 7" in out
        assert "index_of_unity: 0" in out

    def test_dump(self, tmp_path, capsys):
        dump = tmp_path / "tables.json"
        main([str(_write_infile(tmp_path)), "--dump", str(dump)])
        assert "Tables written to" in capsys.readouterr().out
        with open(dump) as f:
            tables = json.load(f)
        assert len(tables["correlator"]["C2c"]) == 7

    def test_index_arrays(self, tmp_path, capsys):
        main([str(_write_infile(tmp_path)), "--index-arrays",
              str(tmp_path / "idx")])
        assert "Index arrays written to" in capsys.readouterr().out
        assert (tmp_path / "idx.npz").exists()

    def test_verbose(self, tmp_path, capsys):
        main([str(_write_infile(tmp_path)), "--verbose"])
        out = capsys.readouterr().out
        assert "QUARK type" in out
        assert "Lookup tables:" in out


class TestErrors:
    """Tests for exit status and error channels."""

    def test_missing_infile(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "missing.ini")])
        assert exc.value.code == 1
        assert "Infile not found" in capsys.readouterr().out

    def test_unknown_correlator(self, tmp_path, capsys):
        path = _write_infile(tmp_path, extra="correlator_list = C7:Q0:Op0\n")
        with pytest.raises(SystemExit) as exc:
            main([str(path)])
        assert exc.value.code == 1
        assert "Correlator type not known!" in capsys.readouterr().out

    def test_not_enough_random_vectors(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(_write_infile(tmp_path, nb_rnd_vec=1))])
        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert "not enough random vectors" in captured.err
        assert captured.out == ""
