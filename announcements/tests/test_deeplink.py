from announcements.deeplink import DEEP_LINK_PARAM, consume_deep_link, with_deep_link


def test_consume_returns_id_and_strips_parameter():
    found, cleaned = consume_deep_link("https://example.org/?lang=en&showAnnouncement=42")
    assert found == "42"
    assert cleaned == "https://example.org/?lang=en"


def test_consume_without_parameter_leaves_url_alone():
    found, cleaned = consume_deep_link("https://example.org/about?x=1")
    assert found is None
    assert cleaned == "https://example.org/about?x=1"


def test_blank_parameter_is_ignored_but_still_stripped():
    found, cleaned = consume_deep_link("/page?showAnnouncement=")
    assert found is None
    assert DEEP_LINK_PARAM not in cleaned


def test_with_deep_link_replaces_existing_value():
    url = with_deep_link("https://example.org/?showAnnouncement=1&a=b", 9)
    assert url == "https://example.org/?a=b&showAnnouncement=9"
