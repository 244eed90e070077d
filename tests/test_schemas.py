import pytest

from compliance_checker.errors import InvalidURLError
from compliance_checker.schemas import ComplianceFinding, parse_compliance_request


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com",
        "http://www.example.co.uk/path?q=1&x=2#top",
        "https://sub.example.com:8443/a/b",
    ],
)
def test_parse_compliance_request_accepts_http_urls(url):
    assert parse_compliance_request({"url": url}).url == url


@pytest.mark.parametrize(
    "body",
    [
        {"url": "not-a-url"},
        {"url": "ftp://example.com"},
        {"url": "https://localhost"},
        {"url": "https://example.com\n"},
        {"url": 42},
        {"link": "https://example.com"},
        {},
        None,
        ["https://example.com"],
    ],
)
def test_parse_compliance_request_rejects_bad_bodies(body):
    with pytest.raises(InvalidURLError):
        parse_compliance_request(body)


def test_finding_normalises_partial_status_spellings():
    for status in ("partially compliant", "Partially_Compliant", " partially-compliant "):
        finding = ComplianceFinding(
            term_or_phrase="insured",
            compliance_status=status,
            explanation="Missing coverage limit",
            suggestions="State the coverage limit",
        )
        assert finding.compliance_status == "partially-compliant"


def test_finding_rejects_unknown_status():
    with pytest.raises(ValueError):
        ComplianceFinding(
            term_or_phrase="bank",
            compliance_status="compliant",
            explanation="",
            suggestions="",
        )
