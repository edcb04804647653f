import pytest

from accessrules.builtin_operators import (
    generate_g_function,
    ip_match,
    ip_match_func,
    key_match,
    key_match2,
    key_match2_func,
    key_match3,
    key_match3_func,
    key_match4,
    key_match4_func,
    key_match_func,
    regex_match,
    regex_match_func,
)
from accessrules.rolemanager import DefaultRoleManager


@pytest.mark.parametrize(
    ("key1", "key2", "expected"),
    [
        ("/foo", "/foo", True),
        ("/foo", "/foo*", True),
        ("/foo", "/foo/*", False),
        ("/foo/bar", "/foo", False),
        ("/foo/bar", "/foo*", True),
        ("/foo/bar", "/foo/*", True),
        ("/foobar", "/foo", False),
        ("/foobar", "/foo*", True),
        ("/foobar", "/foo/*", False),
    ],
)
def test_key_match(key1, key2, expected):
    assert key_match(key1, key2) is expected
    assert key_match_func(key1, key2) is expected


@pytest.mark.parametrize(
    ("key1", "key2", "expected"),
    [
        ("/foo", "/foo", True),
        ("/foo", "/foo*", True),
        ("/foo", "/foo/*", False),
        ("/foo/bar", "/foo", False),
        ("/foo/bar", "/foo*", False),
        ("/foo/bar", "/foo/*", True),
        ("/foobar", "/foo", False),
        ("/foobar", "/foo*", False),
        ("/foobar", "/foo/*", False),
        ("/", "/:resource", False),
        ("/resource1", "/:resource", True),
        ("/myid", "/:id/using/:resId", False),
        ("/myid/using/myresid", "/:id/using/:resId", True),
        ("/proxy/myid", "/proxy/:id/*", False),
        ("/proxy/myid/", "/proxy/:id/*", True),
        ("/proxy/myid/res", "/proxy/:id/*", True),
        ("/proxy/myid/res/res2", "/proxy/:id/*", True),
        ("/proxy/myid/res/res2/res3", "/proxy/:id/*", True),
        ("/proxy/", "/proxy/:id/*", False),
        ("/alice", "/:id", True),
        ("/alice/all", "/:id/all", True),
        ("/alice", "/:id/all", False),
        ("/alice/all", "/:id", False),
    ],
)
def test_key_match2(key1, key2, expected):
    assert key_match2(key1, key2) is expected
    assert key_match2_func(key1, key2) is expected


@pytest.mark.parametrize(
    ("key1", "key2", "expected"),
    [
        ("/foo", "/foo", True),
        ("/foo", "/foo*", True),
        ("/foo", "/foo/*", False),
        ("/foo/bar", "/foo", False),
        ("/foo/bar", "/foo*", False),
        ("/foo/bar", "/foo/*", True),
        ("/foobar", "/foo", False),
        ("/foobar", "/foo*", False),
        ("/foobar", "/foo/*", False),
        ("/", "/{resource}", False),
        ("/resource1", "/{resource}", True),
        ("/myid", "/{id}/using/{resId}", False),
        ("/myid/using/myresid", "/{id}/using/{resId}", True),
        ("/proxy/myid", "/proxy/{id}/*", False),
        ("/proxy/myid/", "/proxy/{id}/*", True),
        ("/proxy/myid/res", "/proxy/{id}/*", True),
        ("/proxy/myid/res/res2", "/proxy/{id}/*", True),
        ("/proxy/myid/res/res2/res3", "/proxy/{id}/*", True),
        ("/proxy/", "/proxy/{id}/*", False),
    ],
)
def test_key_match3(key1, key2, expected):
    assert key_match3(key1, key2) is expected
    assert key_match3_func(key1, key2) is expected


@pytest.mark.parametrize(
    ("key1", "key2", "expected"),
    [
        ("/parent/123/child/123", "/parent/{id}/child/{id}", True),
        ("/parent/123/child/456", "/parent/{id}/child/{id}", False),
        ("/parent/123/child/123", "/parent/{id}/child/{another_id}", True),
        ("/parent/123/child/456", "/parent/{id}/child/{another_id}", True),
        ("/parent/123/child/123/book/123", "/parent/{id}/child/{id}/book/{id}", True),
        ("/parent/123/child/123/book/456", "/parent/{id}/child/{id}/book/{id}", False),
        ("/parent/123/child/456/book/123", "/parent/{id}/child/{id}/book/{id}", False),
        ("/parent/123/child/456/book/", "/parent/{id}/child/{id}/book/{id}", False),
        ("/parent/123/child/456", "/parent/{id}/child/{id}/book/{id}", False),
    ],
)
def test_key_match4(key1, key2, expected):
    assert key_match4(key1, key2) is expected
    assert key_match4_func(key1, key2) is expected


def test_key_match4_rejects_pattern_with_extra_groups():
    with pytest.raises(ValueError):
        key_match4("/x/a/1", "/x/(a)/{id}")


@pytest.mark.parametrize(
    ("key1", "key2", "expected"),
    [
        ("/topic/create", "/topic/create", True),
        ("/topic/create/123", "/topic/create", True),
        ("/topic/delete", "/topic/create", False),
        ("/topic/edit", "/topic/edit/[0-9]+", False),
        ("/topic/edit/123", "/topic/edit/[0-9]+", True),
        ("/topic/edit/abc", "/topic/edit/[0-9]+", False),
        ("/foo/delete/123", "/topic/delete/[0-9]+", False),
        ("/topic/delete/0", "/topic/delete/[0-9]+", True),
        ("/topic/edit/123s", "/topic/delete/[0-9]+", False),
    ],
)
def test_regex_match(key1, key2, expected):
    assert regex_match(key1, key2) is expected
    assert regex_match_func(key1, key2) is expected


@pytest.mark.parametrize(
    ("ip1", "ip2", "expected"),
    [
        ("192.168.2.123", "192.168.2.0/24", True),
        ("192.168.2.123", "192.168.3.0/24", False),
        ("192.168.2.123", "192.168.2.0/16", True),
        ("192.168.2.123", "192.168.2.123", True),
        ("192.168.2.123", "192.168.2.123/32", True),
        ("10.0.0.11", "10.0.0.0/8", True),
        ("11.0.0.123", "10.0.0.0/8", False),
    ],
)
def test_ip_match(ip1, ip2, expected):
    assert ip_match(ip1, ip2) is expected
    assert ip_match_func(ip1, ip2) is expected


def test_ip_match_invalid_first_argument():
    with pytest.raises(ValueError, match="ip1"):
        ip_match("not-an-ip", "10.0.0.0/8")


def test_ip_match_invalid_second_argument():
    with pytest.raises(ValueError, match="ip2"):
        ip_match("10.0.0.1", "not-an-ip")


def test_wrapper_rejects_non_string_arguments():
    with pytest.raises(TypeError):
        key_match_func(1, "/foo")


def test_g_function_without_role_manager_compares_names():
    g = generate_g_function(None)
    assert g("alice", "alice") is True
    assert g("alice", "bob") is False


def test_g_function_uses_role_links():
    rm = DefaultRoleManager(10)
    rm.add_link("alice", "admin")
    rm.add_link("admin", "root")
    g = generate_g_function(rm)
    assert g("alice", "admin") is True
    assert g("alice", "root") is True
    assert g("admin", "alice") is False


def test_g_function_with_domain():
    rm = DefaultRoleManager(10)
    rm.add_link("alice", "admin", "domain1")
    g = generate_g_function(rm)
    assert g("alice", "admin", "domain1") is True
    assert g("alice", "admin", "domain2") is False
    assert g("alice", "admin") is False