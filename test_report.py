"""AI report requestor and the report formatter.  Gemini is never called."""

import json
import os
import sys
from datetime import date, datetime, timezone

sys.path.insert(0, os.path.dirname(__file__))

from streamsync.config import Settings
from streamsync.services.gemini_report import (
    FALLBACK_MESSAGE,
    NO_REPORT_MESSAGE,
    GeminiSummarizer,
    ReportRequestor,
    build_prompt,
    build_report_payload,
)
from streamsync.services.records import Host, Session
from streamsync.services.report_markdown import format_report, render_html

HOSTS = [Host("h1", "Angela", "", "2024-01-01"), Host("h2", "Miguel", "", "2024-01-01")]
SESSIONS = [
    Session("s1", "h1", "Angela", "acc_big", "anta_globalstore", "2025-11-05", "19:00", 120, 1000.4, 17.5, 10),
    Session("s2", "h2", "Miguel", "acc_small", "keepmovingofficial", "2025-11-06", "14:00", 90, 2000.6, 34.2, 20),
]


class RecordingSummarizer:
    def __init__(self, reply="### 总结\n- 表现良好"):
        self.reply = reply
        self.prompts = []

    def summarize(self, prompt):
        self.prompts.append(prompt)
        return self.reply


class FailingSummarizer:
    def summarize(self, prompt):
        raise ConnectionError("network unreachable")


def test_payload_meta_and_rows():
    payload = build_report_payload(SESSIONS, HOSTS, analysis_date=date(2025, 11, 30))
    assert payload["meta"] == {
        "totalSessions": 2,
        "totalRevenueUSD": 52,
        "hostNames": ["Angela", "Miguel"],
        "analysisDate": "2025-11-30",
    }
    assert payload["historicalData"][0] == {
        "date": "2025-11-05",
        "host": "Angela",
        "account": "anta_globalstore",
        "duration": 120,
        "revenueUSD": 18,
        "revenuePHP": 1000,
    }
    assert payload["historicalData"][1]["revenuePHP"] == 2001


def test_prompt_embeds_payload_json():
    payload = build_report_payload(SESSIONS, HOSTS, analysis_date=date(2025, 11, 30))
    prompt = build_prompt(payload)
    assert json.dumps(payload, ensure_ascii=False) in prompt
    assert "Markdown" in prompt


def test_report_returns_model_text_verbatim():
    summarizer = RecordingSummarizer()
    text = ReportRequestor(summarizer).generate_report(SESSIONS, HOSTS)
    assert text == "### 总结\n- 表现良好"
    assert len(summarizer.prompts) == 1
    assert "keepmovingofficial" in summarizer.prompts[0]


def test_report_failure_returns_fallback():
    assert ReportRequestor(FailingSummarizer()).generate_report(SESSIONS, HOSTS) == FALLBACK_MESSAGE


def test_empty_model_output_returns_no_report_message():
    assert ReportRequestor(RecordingSummarizer(reply="")).generate_report(SESSIONS, HOSTS) == NO_REPORT_MESSAGE


def test_missing_api_key_falls_back_without_network():
    summarizer = GeminiSummarizer(Settings(gemini_api_key=""))
    assert ReportRequestor(summarizer).generate_report(SESSIONS, HOSTS) == FALLBACK_MESSAGE


def test_report_over_empty_history():
    summarizer = RecordingSummarizer()
    ReportRequestor(summarizer).generate_report([], [])
    assert '"totalSessions": 0' in summarizer.prompts[0]


# ── formatter ────────────────────────────────────────────────────────────────
def test_format_report_classifies_lines():
    content = "### 趋势\n**关键洞察**\n- 第一点\n2. 第二点\n\n普通段落"
    blocks = format_report(content)
    assert [(b.kind, b.text) for b in blocks] == [
        ("heading", "趋势"),
        ("bold", "关键洞察"),
        ("bullet", "第一点"),
        ("ordered", "第二点"),
        ("break", ""),
        ("paragraph", "普通段落"),
    ]
    assert blocks[0].level == 3


def test_render_html_escapes_text():
    html = render_html(format_report("## A & B\n<script>"))
    assert html == "<h2>A &amp; B</h2>\n<p>&lt;script&gt;</p>"


def test_payload_analysis_date_defaults_to_utc_today():
    payload = build_report_payload(SESSIONS, HOSTS)
    assert payload["meta"]["analysisDate"] == datetime.now(timezone.utc).date().isoformat()


def test_format_report_keeps_heading_level():
    blocks = format_report("# 总览\n###### 附注\n####### 不是标题")
    assert [(b.kind, b.level) for b in blocks[:2]] == [("heading", 1), ("heading", 6)]
    assert blocks[2].kind == "paragraph"
