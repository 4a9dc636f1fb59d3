import json

from ari_checker.infra.logging.log_summary import (
    format_single_summary,
    format_summary_table,
    parse_run_log,
    summarize_logs,
)


def _write(fp, records):
    fp.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")


def _accepted_run(ts="2026-03-01T10:00:00", score=63):
    return [
        {"message": "run_started", "type": "run_started", "target": "acme/widget", "timestamp": ts},
        {"message": "stage", "type": "stage", "stage": "acquiring"},
        {"message": "stage", "type": "stage", "stage": "analyzing"},
        {"message": "lint_degraded", "type": "analyzer_degraded", "reason": "eslint is not installed"},
        {
            "message": "final_result",
            "type": "final_result",
            "result": {
                "is_valid": True,
                "message": "Analysis complete",
                "ari_score": score,
                "status": "Moderate Risk",
                "metrics": {"lint_errors": 20, "lint_warnings": 50},
                "explanation": {"summary": "ok"},
            },
        },
    ]


def test_parse_accepted_run(tmp_path):
    fp = tmp_path / "acme__widget.jsonl"
    _write(fp, _accepted_run())

    s = parse_run_log(fp)

    assert s.target == "acme/widget"
    assert s.done and s.is_valid
    assert s.ari_score == 63
    assert s.status == "Moderate Risk"
    assert s.has_explanation
    assert s.degraded == ["lint: eslint is not installed"]
    assert s.run_date == "2026-03-01 10:00:00"


def test_parse_rejected_run(tmp_path):
    fp = tmp_path / "acme__missing.jsonl"
    _write(fp, [
        {"message": "run_started", "target": "acme/missing", "timestamp": "2026-03-01T10:00:00"},
        {"message": "stage", "stage": "acquiring"},
        {"message": "stage", "stage": "rejected"},
        {"message": "final_result", "result": {"is_valid": False, "message": "not found"}},
    ])

    s = parse_run_log(fp)

    assert s.done
    assert s.is_valid is False
    assert s.ari_score is None
    assert s.message == "not found"


def test_last_run_wins(tmp_path):
    fp = tmp_path / "acme__widget.jsonl"
    _write(fp, _accepted_run("2026-03-01T10:00:00", 40) + _accepted_run("2026-03-02T10:00:00", 90))

    s = parse_run_log(fp)

    assert s.ari_score == 90
    assert s.degraded == ["lint: eslint is not installed"]


def test_incomplete_run_reports_last_stage(tmp_path):
    fp = tmp_path / "acme__widget.jsonl"
    _write(fp, _accepted_run()[:3])

    s = parse_run_log(fp)
    lines = format_single_summary(s)

    assert not s.done
    assert "Outcome: incomplete" in lines
    assert "Last stage: analyzing" in lines


def test_corrupt_lines_are_skipped(tmp_path):
    fp = tmp_path / "acme__widget.jsonl"
    fp.write_text("not json\n" + "\n".join(json.dumps(r) for r in _accepted_run()) + "\n", encoding="utf-8")

    assert parse_run_log(fp).ari_score == 63


def test_summary_table_verbose_includes_degraded(tmp_path):
    _write(tmp_path / "acme__widget.jsonl", _accepted_run())

    summaries = summarize_logs(tmp_path)
    plain = format_summary_table(summaries)
    verbose = format_summary_table(summaries, verbose=True)

    assert "Degraded" not in plain[0]
    assert "Degraded" in verbose[0]
    assert "eslint is not installed" in verbose[1]
    assert "accepted" in plain[1]


def test_summarize_missing_dir(tmp_path):
    assert summarize_logs(tmp_path / "absent") == {}
    assert format_summary_table({}) == ["No logs found."]
