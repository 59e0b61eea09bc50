import pytest

from factexplorer.nl import naturalfilter_local
from factexplorer.nl.naturalfilter_local import build_prompt, sanitize_pills


def test_sanitize_plain_array():
    s = sanitize_pills('["ansible_distribution=Ubuntu", "vcpus>4"]')
    assert s.ok
    assert s.pills == ["ansible_distribution=Ubuntu", "vcpus>4"]


def test_sanitize_fenced_and_chatty_output():
    s = sanitize_pills('Sure! Here you go:\n```json\n["role=web"]\n```\nHope that helps.')
    assert s.ok and s.pills == ["role=web"]

    s = sanitize_pills('The filters are ["host=db-01"] as requested.')
    assert s.ok and s.pills == ["host=db-01"]


def test_sanitize_trims_and_dedupes():
    s = sanitize_pills('[" web ", "web", "", "db"]')
    assert s.pills == ["web", "db"]


@pytest.mark.parametrize("text,reason", [
    ("SELECT * FROM facts", "no json array"),
    ('["unterminated', "no json array"),
    ("[role=web]", "not valid json"),
    ('["a", 4]', "array of strings"),
    ('[" ", ""]', "no filters"),
])
def test_sanitize_rejects(text, reason):
    s = sanitize_pills(text)
    assert not s.ok
    assert reason in s.reason.lower()


def test_prompt_lists_fact_paths():
    p = build_prompt("ubuntu boxes", ["ansible_distribution", "role"])
    assert "ansible_distribution\nrole" in p
    assert p.rstrip().endswith("JSON:")
    assert "(none loaded)" in build_prompt("anything", [])


def test_generate_pills_uses_model_reply(monkeypatch):
    monkeypatch.setattr(naturalfilter_local, "generate", lambda system, user: '["role=web"]')
    assert naturalfilter_local.generate_pills("web servers", ["role"]) == ["role=web"]


def test_generate_pills_rejects_bad_reply(monkeypatch):
    monkeypatch.setattr(naturalfilter_local, "generate", lambda system, user: "I cannot help with that.")
    with pytest.raises(ValueError, match="Unusable model output"):
        naturalfilter_local.generate_pills("web servers")
