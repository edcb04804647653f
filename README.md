# accessrules

Building blocks for role-based access control:

- `accessrules.rolemanager`: a role manager that records which users and
  roles inherit which other roles, optionally per domain.
- `accessrules.builtin_operators`: matching operators for paths, regular
  expressions and IP addresses, plus a `g` function backed by a role manager.
- `accessrules.util`: small helpers for rule text and string lists.

## Installation

```
pip install .
```

## Role inheritance

```python
from accessrules.rolemanager import DefaultRoleManager

rm = DefaultRoleManager(10)
rm.add_link("alice", "admin")
rm.add_link("admin", "staff")

rm.has_link("alice", "staff")   # True
rm.get_roles("alice")           # ["admin"]
rm.get_users("admin")           # ["alice"]

rm.delete_link("admin", "staff")
rm.has_link("alice", "staff")   # False
```

The maximum hierarchy level passed to `DefaultRoleManager` limits how many
inheritance steps `has_link` follows. `has_link` is always true for a name
and itself. `get_roles` and `get_users` return direct links only;
`get_roles` returns an empty list for an unknown name. `clear()` removes
everything.

`RoleManager` is the abstract base class that `DefaultRoleManager`
implements; subclass it to provide another role store.

### Domains

Every link operation takes an optional single domain. Roles in one domain do
not leak into another:

```python
rm.add_link("bob", "admin", "domain1")
rm.has_link("bob", "admin", "domain1")   # True
rm.has_link("bob", "admin", "domain2")   # False
rm.get_roles("bob", "domain1")           # ["admin"]
```

### Errors

All errors derive from `RoleManagerError`:

- `DomainParameterError` when more than one domain is passed;
- `NameNotFoundError` from `get_users` for an unknown role, and from
  `delete_link` when either name is unknown.

### Pattern roles

A matching function makes stored role names act as patterns. It is called
as `fn(name, stored_name)`; only one function is kept, and a later call
replaces the earlier one (the name argument is only a label):

```python
from accessrules.builtin_operators import key_match2

rm.add_matching_func("key_match2", key_match2)
```

### Logging

`print_roles()` writes the current inheritance links, such as
`u4 < (g2, g3)`, at INFO level to the `accessrules.rolemanager` logger, and
does nothing when that level is not enabled.

## Matching operators

```python
from accessrules.builtin_operators import (
    key_match, key_match2, key_match3, key_match4, regex_match, ip_match,
)

key_match("/foo/bar", "/foo/*")                             # True
key_match2("/resource1", "/:resource")                      # True
key_match3("/resource1", "/{resource}")                     # True
key_match4("/parent/1/child/1", "/parent/{id}/child/{id}")  # True
key_match4("/parent/1/child/2", "/parent/{id}/child/{id}")  # False
regex_match("/topic/edit/123", "/topic/edit/[0-9]+")        # True
ip_match("192.168.2.123", "192.168.2.0/24")                 # True
```

`regex_match` searches anywhere in the key. `ip_match` compares against a
single address or a CIDR block and raises `ValueError` for text that is
neither.

Each operator also has a `*_func(*args)` form (`key_match_func`,
`key_match2_func`, `key_match3_func`, `key_match4_func`, `regex_match_func`,
`ip_match_func`) that takes its two arguments positionally and raises
`TypeError` if they are not strings.

`generate_g_function(rm)` builds a `g(name1, name2[, domain])` function that
asks `rm.has_link`; role manager errors count as `False`. With `rm=None` it
just compares the two names.

## Helpers

`accessrules.util` provides:

- `escape_assertion(s)`: turns `r.sub` / `p.sub` into `r_sub` / `p_sub`;
- `remove_comments(s)`: drops everything from the first `#`;
- `array_equals`, `array_2d_equals`, `set_equals`: list comparisons;
- `array_remove_duplicates(s)`: a new list without repeats, order kept;
- `array_to_string(s)`, `params_to_string(*args)`: join with `", "`;
- `join_slice(a, *args)`: `[a, *args]`;
- `set_subtract(a, b)`: items of `a` not in `b`, in order.

## What this package does not do

It has no enforcer: it does not read model or policy files, store or load
policies, or evaluate access requests. It supplies the role manager and
matching functions such an evaluator would use.

## Running the tests

```
pip install ".[test]"
pytest
```