from factexplorer.facts import apply_filters, build_rows


def test_ask_returns_pills(client, monkeypatch):
    # Mock model output → deterministic pills
    from factexplorer.nl import naturalfilter_local
    seen = {}

    def fake(q, fact_paths=()):
        seen["paths"] = list(fact_paths)
        return ["ansible_distribution=Ubuntu", "ansible_processor_vcpus>4"]

    monkeypatch.setattr(naturalfilter_local, "generate_pills", fake)
    r = client.post("/ask", json={
        "q": "Ubuntu hosts with more than 4 CPUs",
        "fact_paths": ["ansible_distribution", "ansible_processor_vcpus"],
    })
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["ok"] is True
    assert out["provider"] == "local-transformers"
    assert out["pills"] == ["ansible_distribution=Ubuntu", "ansible_processor_vcpus>4"]
    assert seen["paths"] == ["ansible_distribution", "ansible_processor_vcpus"]


def test_ask_pills_filter_like_typed_ones(client, monkeypatch):
    from factexplorer.nl import naturalfilter_local

    monkeypatch.setattr(naturalfilter_local, "generate_pills", lambda q, fact_paths=(): ["vcpus>=8"])
    pills = client.post("/ask", json={"q": "big boxes"}).json()["pills"]

    rows = build_rows({"a": {"vcpus": 16}, "b": {"vcpus": 2}})
    assert [r.host for r in apply_filters(rows, pills)] == ["a"]


def test_ask_missing_question(client):
    r = client.post("/ask", json={"q": "   "})
    assert r.status_code == 400
    assert "Missing" in r.json()["detail"]


def test_ask_untranslatable(client, monkeypatch):
    from factexplorer.nl import naturalfilter_local

    def boom(q, fact_paths=()):
        raise ValueError("Unusable model output: no JSON array in model output")

    monkeypatch.setattr(naturalfilter_local, "generate_pills", boom)
    r = client.post("/ask", json={"q": "what is the meaning of life"})
    assert r.status_code == 400
    assert "Could not translate" in r.json()["detail"]
