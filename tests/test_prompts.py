import pytest

from compliance_checker import policy
from compliance_checker.prompts import build_compliance_prompt


def test_build_compliance_prompt_embeds_policy_and_content_verbatim():
    prompt = build_compliance_prompt("We accept {bank} deposits.", "Rule 1: no {braces} stripped")

    assert "We accept {bank} deposits." in prompt
    assert "Rule 1: no {braces} stripped" in prompt
    assert '"findings"' in prompt
    for field in ("term_or_phrase", "compliance_status", "explanation", "suggestions"):
        assert field in prompt
    assert prompt.index("## Compliance Policy") < prompt.index("## Webpage Content")


def test_load_policy_document_defaults_to_bundled_text(monkeypatch):
    monkeypatch.delenv("COMPLIANCE_POLICY_PATH", raising=False)
    assert policy.load_policy_document() == policy.COMPLIANCE_GUIDELINES


def test_load_policy_document_reads_override(monkeypatch, tmp_path):
    path = tmp_path / "policy.txt"
    path.write_text("Only banks may say bank.", encoding="utf-8")
    monkeypatch.setenv("COMPLIANCE_POLICY_PATH", str(path))

    assert policy.load_policy_document() == "Only banks may say bank."


def test_load_policy_document_missing_file(monkeypatch, tmp_path):
    monkeypatch.setenv("COMPLIANCE_POLICY_PATH", str(tmp_path / "missing.txt"))
    with pytest.raises(RuntimeError):
        policy.load_policy_document()
