import pytest

from factexplorer.facts import FactRow, matches
from factexplorer.facts.types import to_comparable_number, to_comparable_string


def row(path, value, host="web-01", modified=None):
    return FactRow(id=f"{host}-{path}", host=host, fact_path=path, value=value, modified=modified)


# --- key/operator/value ---

def test_scenario_a_numeric_comparison():
    assert matches(row("ansible_processor_vcpus", 8), "ansible_processor_vcpus>4")
    assert not matches(row("ansible_distribution", "Ubuntu"), "ansible_processor_vcpus>4")


def test_scenario_c_suffix_key_match():
    pill = "distribution=Ubuntu"
    assert matches(row("ansible_distribution", "Ubuntu"), pill)
    assert matches(row("custom_distribution_note", "Ubuntu"), pill) is False
    assert matches(row("custom_distribution", "Ubuntu"), pill)
    assert not matches(row("ansible_distribution_version", "Ubuntu"), pill)


def test_equality_is_case_insensitive():
    assert matches(row("ansible_distribution", "Ubuntu"), "ANSIBLE_Distribution=ubuntu")
    assert matches(row("ansible_distribution", "Ubuntu"), "distribution != debian")
    assert not matches(row("ansible_distribution", "Ubuntu"), "distribution!=UBUNTU")


def test_not_equal_on_other_key_is_false():
    # the key decides first; a different fact never matches
    assert not matches(row("role", "web"), "distribution!=debian")


@pytest.mark.parametrize("pill,expected", [
    ("vcpus>8", False),
    ("vcpus>=8", True),
    ("vcpus<=8", True),
    ("vcpus<16", True),
    ("vcpus < 2", False),
    ("vcpus>=abc", False),
])
def test_numeric_operators(pill, expected):
    assert matches(row("ansible_processor_vcpus", 8), pill) is expected


def test_numeric_values_stored_as_strings_parse():
    assert matches(row("ansible_processor_vcpus", "8"), "vcpus>4")
    assert matches(row("ansible_memtotal", "16GB"), "memtotal>=16")
    assert not matches(row("ansible_processor_vcpus", "many"), "vcpus>4")
    assert not matches(row("enabled", True), "enabled>0")
    assert not matches(row("enabled", None), "enabled<1")


def test_quoted_value_is_unwrapped():
    r = row("ansible_hostname", "my host")
    assert matches(r, 'hostname_x="my host"') is False
    assert matches(row("ansible_hostname", "my host"), "ansible_hostname='my host'")
    assert matches(row("ansible_hostname", "my host"), 'ansible_hostname="my host"')


def test_values_compare_like_they_display():
    assert matches(row("replica", False), "replica=false")
    assert matches(row("swap", None), "swap=null")
    assert matches(row("ratio", 2.0), "ratio=2")


# --- host key ---

def test_host_key_compares_against_host():
    r = row("role", "web", host="Web-01")
    assert matches(r, "host=web-01")
    assert matches(r, "HOSTNAME=web-01")
    assert matches(r, "host!=db-01")
    assert not matches(r, "host!=web-01")


def test_host_key_ignores_ordering_operators():
    assert not matches(row("role", "web", host="web-01"), "host>a")
    assert not matches(row("role", "web", host="web-01"), "hostname<=z")


# --- exact ---

def test_exact_match_on_any_field():
    assert matches(row("role", "web"), '"web"')
    assert matches(row("role", "web"), '"ROLE"')
    assert matches(row("role", "web", host="web-01"), '"web-01"')
    assert not matches(row("role", "webserver"), '"web"')


# --- free text ---

def test_free_text_regex():
    r = row("ansible_kernel", "5.15.0-105-generic", host="web-01", modified="2024-05-14T09:12:44Z")
    assert matches(r, "^web-\\d+$")
    assert matches(r, "kernel")
    assert matches(r, "generic$")
    assert matches(r, "2024-05")  # modified timestamp is searched too
    assert not matches(r, "^db")


def test_scenario_d_invalid_regex_falls_back_to_substring():
    r = row("note", "see [ticket", host="web-01")
    assert matches(r, "[ticket")
    assert matches(row("role", "x", host="web-01"), "web-")
    assert not matches(row("role", "x", host="db-01"), "(unclosed")
    assert matches(row("note", "value (unclosed", host="db-01"), "(unclosed")


@pytest.mark.parametrize("term", [
    "a{99999999999}",
    "x{4294967296}",
    "(" * 200 + "a" + ")" * 200,
    "(" * 5000 + ")" * 5000,
    "a{2,1}",
    "\\",
])
def test_regexes_python_cannot_compile_never_raise(term):
    r = row("ansible_processor_vcpus", 8, host="web-1")
    assert matches(r, term) in (True, False)
    assert matches(row("note", f"literal {term} text"), term)


def test_operator_with_empty_side_is_free_text():
    # "=foo" has no key, so it is searched as text
    assert matches(row("note", "a=foo"), "=foo")


# --- OR and blanks ---

def test_or_within_a_pill():
    assert matches(row("ansible_distribution", "Debian"), "distribution=ubuntu|distribution=debian")
    assert not matches(row("ansible_distribution", "CentOS"), "distribution=ubuntu|distribution=debian")
    assert matches(row("role", "web"), "nomatch|web")


def test_blank_pill_matches_everything_but_blank_alternative_does_not():
    assert matches(row("role", "web"), "   ")
    assert not matches(row("role", "web"), "zzz|")


# --- coercion helpers ---

def test_comparable_string():
    assert to_comparable_string(True) == "true"
    assert to_comparable_string(None) == "null"
    assert to_comparable_string(8.0) == "8"
    assert to_comparable_string(8.5) == "8.5"
    assert to_comparable_string("x") == "x"


def test_comparable_number():
    assert to_comparable_number("  12.5abc") == 12.5
    assert to_comparable_number("-3") == -3.0
    assert to_comparable_number(".5") == 0.5
    assert to_comparable_number("1e3") == 1000.0
    assert to_comparable_number("abc") is None
    assert to_comparable_number(True) is None
    assert to_comparable_number(None) is None
    assert to_comparable_number(7) == 7.0
