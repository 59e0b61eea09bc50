from factexplorer.facts import MODIFIED_KEY, NO_DATA_VALUE, SENTINEL_PATH, build_rows, fact_paths, flatten_facts


def test_flatten_scenario_a():
    rows = build_rows({"h1": {"ansible_distribution": "Ubuntu", "ansible_processor_vcpus": 8}})
    assert [(r.host, r.fact_path, r.value) for r in rows] == [
        ("h1", "ansible_distribution", "Ubuntu"),
        ("h1", "ansible_processor_vcpus", 8),
    ]


def test_nested_paths_are_dot_joined_and_counted():
    facts = {
        "a": 1,
        "b": {"c": 2, "d": {"e": 3, "f": None}},
        "g": {},  # no leaves
    }
    pairs = flatten_facts(facts)
    assert pairs == [("a", 1), ("b.c", 2), ("b.d.e", 3), ("b.d.f", None)]
    depth = {"a": 1, "b.c": 2, "b.d.e": 3, "b.d.f": 3}
    for path, _ in pairs:
        assert path.count(".") == depth[path] - 1


def test_lists_are_leaves_serialized_as_json():
    pairs = flatten_facts({"dns": {"nameservers": ["10.0.0.2", "10.0.0.3"]}, "mounts": [{"mount": "/"}]})
    assert pairs == [
        ("dns.nameservers", '["10.0.0.2","10.0.0.3"]'),
        ("mounts", '[{"mount":"/"}]'),
    ]


def test_modified_key_is_metadata_not_a_fact():
    rows = build_rows({"h1": {MODIFIED_KEY: "2024-01-01T00:00:00Z", "role": "web"}})
    assert len(rows) == 1
    assert rows[0].fact_path == "role"
    assert rows[0].modified == "2024-01-01T00:00:00Z"


def test_scenario_b_empty_host_gets_one_sentinel_row():
    rows = build_rows({"h1": {}, "h2": {"role": "db"}})
    assert len(rows) == 2
    sentinel, real = rows
    assert sentinel.host == "h1"
    assert sentinel.fact_path == SENTINEL_PATH
    assert sentinel.value == NO_DATA_VALUE
    assert sentinel.id == "h1-no-facts"
    assert (real.host, real.fact_path, real.value) == ("h2", "role", "db")


def test_host_with_only_timestamp_is_a_sentinel():
    rows = build_rows({"h1": {MODIFIED_KEY: "2024-01-01T00:00:00Z"}})
    assert len(rows) == 1
    assert rows[0].is_sentinel
    assert rows[0].modified == "2024-01-01T00:00:00Z"


def test_row_order_and_ids(rows, snapshot):
    hosts_in_order = []
    for r in rows:
        if r.host not in hosts_in_order:
            hosts_in_order.append(r.host)
    assert hosts_in_order == list(snapshot)

    ids = [r.id for r in rows]
    assert len(ids) == len(set(ids))
    assert "web-1-network.eth0.ipv4" in ids


def test_rows_per_host_match_leaf_count(rows):
    per_host = {}
    for r in rows:
        per_host[r.host] = per_host.get(r.host, 0) + 1
    assert per_host == {"web-1": 6, "web-10": 4, "db-2": 5, "empty": 1}


def test_fact_paths_sorted_and_without_sentinel(rows):
    paths = fact_paths(rows)
    assert SENTINEL_PATH not in paths
    assert paths == sorted(paths)
    assert "network.eth0.ipv4" in paths


def test_empty_snapshot():
    assert build_rows({}) == []
    assert fact_paths([]) == []
