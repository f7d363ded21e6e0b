"""
Unit tests for the infile reader.
"""

import pytest

from slaph_lookup.errors import ConfigurationError
from slaph_lookup.infile.reader import (
    build_global_data,
    parse_infile_lines,
    read_infile,
)


INFILE = """\
# pion and rho
start_config = 714
output_path = /tmp/correlators
overwrite = yes
Lt = 48

[quarks]
quark = u:5:TB:2:EI:6:DF:4:/data/light
quark = s:3:TB:2:EI:6:DF:4:/data/strange

[operator_lists]
operator_list = g5.d0.p0,1    # pion
operator_list = g1.d0.p(0,0,1):g2.d0.p(0,0,1)

[correlator_lists]
correlator_list = C2+:Q0:Op0:Q0:Op0
correlator_list = C20:Q0:Op1:Q1:Op1
"""


class TestParseLines:
    """Tests for line splitting."""

    def test_lists_and_scalars(self):
        lists, scalars = parse_infile_lines(INFILE.splitlines())
        assert len(lists["quark"]) == 2
        assert lists["operator_list"][0] == "g5.d0.p0,1"
        assert len(lists["correlator_list"]) == 2
        assert scalars["start_config"] == "714"
        assert scalars["Lt"] == "48"

    def test_comments_and_sections_skipped(self):
        lists, scalars = parse_infile_lines(["# only a comment", "[quarks]", ""])
        assert lists == {"quark": [], "operator_list": [], "correlator_list": []}
        assert scalars == {}

    def test_line_without_equals(self):
        with pytest.raises(ConfigurationError, match="Line 2"):
            parse_infile_lines(["start_config = 1", "garbage"])


class TestBuildGlobalData:
    """Tests for GlobalData construction."""

    def test_from_infile(self, tmp_path):
        path = tmp_path / "infile.ini"
        path.write_text(INFILE)
        data = read_infile(path)

        assert data.start_config == 714
        assert data.path_output == "/tmp/correlators"
        assert data.overwrite == "yes"
        assert [q.flavor for q in data.quarks] == ["u", "s"]
        assert [q.id for q in data.quarks] == [0, 1]
        assert len(data.operator_list) == 2
        assert len(data.operator_list[1]) == 2
        assert [c.type for c in data.correlator_list] == ["C2+", "C20"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_infile(tmp_path / "missing.ini")

    def test_bad_start_config(self):
        lists, scalars = parse_infile_lines(["start_config = abc"])
        with pytest.raises(ConfigurationError, match="start_config"):
            build_global_data(lists, scalars)

    def test_invalid_quark(self):
        lists, scalars = parse_infile_lines(["quark = x:5:TB:2:EI:6:DF:4:/d"])
        with pytest.raises(ConfigurationError):
            build_global_data(lists, scalars)

    def test_undeclared_quark(self):
        lists, scalars = parse_infile_lines([
            "quark = u:5:TB:2:EI:6:DF:4:/d",
            "operator_list = g5.d0.p0",
            "correlator_list = C2+:Q0:Op0:Q1:Op0",
        ])
        with pytest.raises(ConfigurationError, match="Q1"):
            build_global_data(lists, scalars)

    def test_undeclared_operator(self):
        lists, scalars = parse_infile_lines([
            "quark = u:5:TB:2:EI:6:DF:4:/d",
            "operator_list = g5.d0.p0",
            "correlator_list = C2+:Q0:Op0:Q0:Op3",
        ])
        with pytest.raises(ConfigurationError, match="Op3"):
            build_global_data(lists, scalars)

    def test_too_few_legs(self):
        lists, scalars = parse_infile_lines([
            "quark = u:5:TB:2:EI:6:DF:4:/d",
            "operator_list = g5.d0.p0",
            "correlator_list = C4+D:Q0:Op0:Q0:Op0",
        ])
        with pytest.raises(ConfigurationError, match="needs 4"):
            build_global_data(lists, scalars)

    def test_unknown_tag_passes_reader(self):
        lists, scalars = parse_infile_lines([
            "quark = u:5:TB:2:EI:6:DF:4:/d",
            "operator_list = g5.d0.p0",
            "correlator_list = C9:Q0:Op0",
        ])
        data = build_global_data(lists, scalars)
        assert data.correlator_list[0].type == "C9"

    def test_verbose_reports_skipped_keys(self, capsys):
        lists, scalars = parse_infile_lines(INFILE.splitlines())
        build_global_data(lists, scalars, verbose=True)
        out = capsys.readouterr().out
        assert "Lt" in out
        assert "QUARK type" in out
