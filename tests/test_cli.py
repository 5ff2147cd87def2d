from __future__ import annotations

import pytest

from compare_pdf import ComparePdf, Verdict
from compare_pdf.cli import main
from pdf_utils.report import render_html_report


def test_cli_passed(pdf_data, monkeypatch, capsys):
    monkeypatch.chdir(pdf_data)
    assert main(["actualPdfs/same.pdf", "baselinePdfs/baseline.pdf"]) == 0
    assert capsys.readouterr().out.strip() == "passed"


def test_cli_failed_with_report(pdf_data, monkeypatch, capsys):
    monkeypatch.chdir(pdf_data)
    report = pdf_data / "out" / "report.html"
    code = main(["actualPdfs/notSame.pdf", "baselinePdfs/baseline.pdf", "--report", str(report)])
    assert code == 1
    assert "compared by their images" in capsys.readouterr().out
    html = report.read_text(encoding="utf-8")
    assert "FAILED" in html
    assert "data:image/png;base64," in html


def test_cli_page_filter_and_mask(pdf_data, monkeypatch):
    monkeypatch.chdir(pdf_data)
    assert main(["actualPdfs/notSame.pdf", "baselinePdfs/baseline.pdf", "--skip", "0"]) == 0
    assert main(["actualPdfs/maskedSame.pdf", "baselinePdfs/baseline.pdf", "--mask", "1", "120", "120", "230", "230"]) == 0


def test_cli_strategy_and_errors(pdf_data, monkeypatch):
    monkeypatch.chdir(pdf_data)
    assert main(["actualPdfs/reencoded.pdf", "baselinePdfs/baseline.pdf", "--strategy", "byBase64"]) == 1
    assert main(["actualPdfs/corrupt.pdf", "baselinePdfs/baseline.pdf"]) == 2


def test_report_for_passed_verdict():
    html = render_html_report({"meta": {"actual": "a.pdf", "baseline": "b.pdf"}, "verdict": Verdict.passed()})
    assert "PASSED" in html
    assert "a.pdf" in html
    assert "Pages compared" not in html


def test_report_lists_every_page(config):
    verdict = ComparePdf(config).actual_pdf_file("notSame").baseline_pdf_file("baseline").compare()
    html = render_html_report({"meta": {"actual": "notSame.pdf", "baseline": "baseline.pdf"}, "verdict": verdict})
    assert "Page index 0" in html
    assert "Page index 1" in html
    assert "Pages with differences: 1" in html


def test_cli_invalid_environment_setting(pdf_data, monkeypatch, caplog):
    monkeypatch.chdir(pdf_data)
    monkeypatch.setenv("PDF_COMPARE_RESOLUTION", "high")
    assert main(["actualPdfs/same.pdf", "baselinePdfs/baseline.pdf"]) == 2
    assert "PDF_COMPARE_RESOLUTION" in caplog.text


@pytest.mark.parametrize("flag", ["--mask", "--crop"])
def test_cli_rejects_fractional_page(pdf_data, monkeypatch, capsys, flag):
    monkeypatch.chdir(pdf_data)
    with pytest.raises(SystemExit) as exc:
        main(["actualPdfs/same.pdf", "baselinePdfs/baseline.pdf", flag, "1.7", "0", "0", "100", "100"])
    assert exc.value.code == 2
    assert "PAGE must be a whole page index" in capsys.readouterr().err


def test_cli_crop_on_page(pdf_data, monkeypatch):
    monkeypatch.chdir(pdf_data)
    args = ["actualPdfs/notSame.pdf", "baselinePdfs/baseline.pdf", "--crop", "0", "0", "0", "400", "400"]
    assert main(args) == 0
