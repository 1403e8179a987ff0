"""Tests for entropyx.scanning.complexity (lizard CSV handling)."""

import pytest

from entropyx.scanning.complexity import LizardAnalyzer, parse_csv_output, summarize


def row(ccn, file_path, name="fn"):
    return f'5,{ccn},20,1,6,"{name}@1-6@{file_path}","{file_path}","{name}","{name}()",1,6'


class TestSummarize:
    def test_smell_bands(self):
        result = summarize([3.0, 25.0, 17.0, 12.0, 10.0, 15.0, 20.0])
        assert result.smells_high == 1
        assert result.smells_medium == 2  # 17, 20
        assert result.smells_low == 2  # 12, 15
        assert result.avg_cyclomatic_complexity == pytest.approx(102.0 / 7)

    def test_empty(self):
        result = summarize([])
        assert result.avg_cyclomatic_complexity == 0.0
        assert result.smells_high == result.smells_medium == result.smells_low == 0


class TestParseCsvOutput:
    def test_groups_rows_per_relative_file(self, tmp_path):
        abs_file = (tmp_path / "pkg" / "a.py").as_posix()
        output = "\n".join(
            [
                "NLOC,CCN,token,PARAM,length,location,file,function,long_name,start,end",
                row(3, abs_file, "f"),
                row(25, abs_file, "g"),
                row(4, "src/b.py"),
                "garbage,row",
                "",
            ]
        )
        results = parse_csv_output(output, tmp_path)
        assert set(results) == {"pkg/a.py", "src/b.py"}
        assert results["pkg/a.py"].avg_cyclomatic_complexity == 14.0
        assert results["pkg/a.py"].smells_high == 1
        assert results["src/b.py"].avg_cyclomatic_complexity == 4.0

    def test_non_numeric_ccn_skipped(self, tmp_path):
        assert parse_csv_output('5,abc,20,1,6,"x","a.py","f","f()",1,6', tmp_path) == {}

    def test_empty_output(self, tmp_path):
        assert parse_csv_output("", tmp_path) == {}


class TestLizardAnalyzer:
    def test_missing_tool_yields_no_data(self, tmp_path):
        analyzer = LizardAnalyzer(command="entropyx-no-such-lizard-binary")
        assert analyzer.analyze_directory(tmp_path) == {}
