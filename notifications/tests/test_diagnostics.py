from notifications.diagnostics import analyze_tokens, render_token_report, render_wipe_report
from notifications.relay import WipeResult

DEBUG_DATA = {
    "summary": {"totalTokens": 4},
    "tokens": [
        {"userId": "visitor_1", "platform": "iOS", "deviceInfo": "iPhone", "storedAt": "2025-01-01", "tokenPreview": "abc..."},
        {"userId": "visitor_2", "platform": "iOS", "deviceInfo": "iPhone", "storedAt": "2025-01-02"},
        {"userId": "visitor_3", "platform": "Android", "deviceInfo": "Pixel", "userAgent": "x" * 150},
        {"userId": "visitor_4"},
    ],
}


def test_groups_by_platform_and_finds_duplicate_devices():
    analysis = analyze_tokens(DEBUG_DATA)

    assert analysis.total == 4
    assert list(analysis.platforms) == ["iOS", "Android", "Unknown"]
    assert len(analysis.platforms["iOS"]) == 2
    assert list(analysis.duplicates) == ["iPhone_iOS"]
    assert [r.user_id for r in analysis.duplicates["iPhone_iOS"]] == ["visitor_1", "visitor_2"]


def test_total_falls_back_to_token_count():
    assert analyze_tokens({"tokens": [{"userId": "a"}]}).total == 1
    assert analyze_tokens(None).total == 0


def test_report_text():
    report = render_token_report(analyze_tokens(DEBUG_DATA))

    assert report.startswith("=== FCM TOKEN ANALYSIS ===")
    assert "--- iOS TOKENS (2) ---" in report
    assert "DUPLICATE GROUP: iPhone_iOS (2 tokens)" in report
    assert "User Agent: " + "x" * 100 + "..." in report


def test_report_without_tokens():
    report = render_token_report(analyze_tokens({"tokens": []}))
    assert "No tokens found in storage." in report


def test_report_without_duplicates():
    report = render_token_report(analyze_tokens({"tokens": [{"userId": "a", "platform": "Web"}]}))
    assert "No duplicate devices detected." in report


def test_wipe_report():
    report = render_wipe_report(WipeResult(success=True, deleted=3, total=3, timestamp=None, message="ok"))
    assert "Success: Yes" in report
    assert "Tokens Deleted: 3/3" in report
    assert "Timestamp: Unknown" in report


def test_unparseable_total_falls_back_to_token_count():
    tokens = [{"userId": "a"}, {"userId": "b"}]
    assert analyze_tokens({"summary": {"totalTokens": "n/a"}, "tokens": tokens}).total == 2
    assert analyze_tokens({"summary": {"totalTokens": "12 tokens"}, "tokens": tokens}).total == 2
    assert analyze_tokens({"summary": {"totalTokens": "7.0"}, "tokens": tokens}).total == 7


def test_report_with_unparseable_total():
    report = render_token_report(analyze_tokens({"summary": {"totalTokens": "n/a"}, "tokens": [{"userId": "a"}]}))
    assert "Total tokens found: 1" in report
