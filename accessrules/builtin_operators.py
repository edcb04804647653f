"""Matching functions usable in matcher expressions."""

from __future__ import annotations

import ipaddress
import re
from typing import Any, Callable

from accessrules.rolemanager import RoleManager, RoleManagerError

_COLON_PARAM = re.compile(r"(.*):[^/]+(.*)")
_BRACE_PARAM = re.compile(r"(.*)\{[^/]+\}(.*)")


def _two_strings(args: tuple[Any, ...]) -> tuple[str, str]:
    first, second = args[0], args[1]
    if not isinstance(first, str) or not isinstance(second, str):
        raise TypeError("matching functions take string arguments")
    return first, second


def _replace_params(key: str, marker: str, pattern: re.Pattern[str], repl: str) -> str:
    while marker in key:
        replaced = pattern.sub(repl, key)
        if replaced == key:
            break
        key = replaced
    return key


def key_match(key1: str, key2: str) -> bool:
    """Match key1 against key2, where a ``*`` in key2 matches any suffix.

    For example "/foo/bar" matches "/foo/*".
    """
    i = key2.find("*")
    if i == -1:
        return key1 == key2
    if len(key1) > i:
        return key1[:i] == key2[:i]
    return key1 == key2[:i]


def key_match_func(*args: Any) -> bool:
    """Expression wrapper for key_match."""
    return key_match(*_two_strings(args))


def key_match2(key1: str, key2: str) -> bool:
    """Match a RESTful path against a pattern with ``*`` and ``:name`` parts.

    For example "/resource1" matches "/:resource".
    """
    key2 = key2.replace("/*", "/.*")
    key2 = _replace_params(key2, "/:", _COLON_PARAM, r"\1[^/]+\2")
    return regex_match(key1, f"^{key2}$")


def key_match2_func(*args: Any) -> bool:
    """Expression wrapper for key_match2."""
    return key_match2(*_two_strings(args))


def key_match3(key1: str, key2: str) -> bool:
    """Match a RESTful path against a pattern with ``*`` and ``{name}`` parts.

    For example "/resource1" matches "/{resource}".
    """
    key2 = key2.replace("/*", "/.*")
    key2 = _replace_params(key2, "/{", _BRACE_PARAM, r"\1[^/]+\2")
    return regex_match(key1, f"^{key2}$")


def key_match3_func(*args: Any) -> bool:
    """Expression wrapper for key_match3."""
    return key_match3(*_two_strings(args))


def key_match4(key1: str, key2: str) -> bool:
    """Like key_match3, but repeated ``{name}`` parts must match equal values.

    "/parent/123/child/123" matches "/parent/{id}/child/{id}" while
    "/parent/123/child/456" does not.
    """
    key2 = key2.replace("/*", "/.*")

    tokens: list[str] = []
    start = -1
    for i, c in enumerate(key2):
        if c == "{":
            start = i
        elif c == "}":
            if start == -1:
                raise ValueError("key_match4: unbalanced '}' in pattern")
            tokens.append(key2[start : i + 1])

    key2 = _replace_params(key2, "/{", _BRACE_PARAM, r"\1([^/]+)\2")

    match = re.search(f"^{key2}$", key1)
    if match is None:
        return False
    values = match.groups()

    if len(tokens) != len(values):
        raise ValueError("key_match4: number of tokens is not equal to number of values")

    seen: dict[str, str | None] = {}
    for token, value in zip(tokens, values):
        if token in seen and seen[token] != value:
            return False
        seen.setdefault(token, value)
    return True


def key_match4_func(*args: Any) -> bool:
    """Expression wrapper for key_match4."""
    return key_match4(*_two_strings(args))


def regex_match(key1: str, key2: str) -> bool:
    """Tell whether the regular expression key2 matches anywhere in key1."""
    return re.search(key2, key1) is not None


def regex_match_func(*args: Any) -> bool:
    """Expression wrapper for regex_match."""
    return regex_match(*_two_strings(args))


def _parse_ip(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    address = ipaddress.ip_address(text)
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def ip_match(ip1: str, ip2: str) -> bool:
    """Tell whether address ip1 equals address ip2 or lies in the CIDR block ip2.

    For example "192.168.2.123" matches "192.168.2.0/24".
    """
    try:
        address = _parse_ip(ip1)
    except ValueError:
        raise ValueError(
            "invalid argument: ip1 in ip_match() function is not an IP address."
        ) from None

    if "/" in ip2:
        try:
            network = ipaddress.ip_network(ip2, strict=False)
        except ValueError:
            pass
        else:
            return address in network

    try:
        other = _parse_ip(ip2)
    except ValueError:
        raise ValueError(
            "invalid argument: ip2 in ip_match() function is neither an IP address nor a CIDR."
        ) from None
    return address == other


def ip_match_func(*args: Any) -> bool:
    """Expression wrapper for ip_match."""
    return ip_match(*_two_strings(args))


def generate_g_function(rm: RoleManager | None) -> Callable[..., bool]:
    """Build the ``g(name1, name2[, domain])`` function for matchers.

    Without a role manager the function compares the two names for equality.
    """

    def g(*args: Any) -> bool:
        name1, name2 = _two_strings(args)
        if rm is None:
            return name1 == name2
        try:
            if len(args) == 2:
                return rm.has_link(name1, name2)
            domain = args[2]
            if not isinstance(domain, str):
                raise TypeError("matching functions take string arguments")
            return rm.has_link(name1, name2, domain)
        except RoleManagerError:
            return False

    return g