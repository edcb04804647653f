"""Role inheritance management for RBAC models."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)

MatchingFunc = Callable[[str, str], bool]

_DOMAIN_SEPARATOR = "::"


class RoleManagerError(Exception):
    """Base class for role manager errors."""


class DomainParameterError(RoleManagerError):
    """Raised when more than one domain is given."""

    def __init__(self, message: str = "error: domain should be 1 parameter") -> None:
        super().__init__(message)


class NameNotFoundError(RoleManagerError):
    """Raised when a role name is not known to the role manager."""

    def __init__(self, message: str = "error: name does not exist") -> None:
        super().__init__(message)


class RoleManager(ABC):
    """Operations for managing role inheritance.

    The optional trailing argument of the link and query methods is a domain,
    which acts as a prefix to the role names.
    """

    @abstractmethod
    def clear(self) -> None:
        """Remove all stored data, resetting to the initial state."""

    @abstractmethod
    def add_link(self, name1: str, name2: str, *args: str) -> None:
        """Make role name1 inherit role name2."""

    @abstractmethod
    def delete_link(self, name1: str, name2: str, *args: str) -> None:
        """Remove the inheritance of role name2 by role name1."""

    @abstractmethod
    def has_link(self, name1: str, name2: str, *args: str) -> bool:
        """Tell whether role name1 inherits role name2."""

    @abstractmethod
    def get_roles(self, name: str, *args: str) -> list[str]:
        """Return the roles that name directly inherits."""

    @abstractmethod
    def get_users(self, name: str, *args: str) -> list[str]:
        """Return the names that directly inherit role name."""

    @abstractmethod
    def print_roles(self) -> None:
        """Write all role links to the log."""


@dataclass(eq=False)
class _Role:
    name: str
    roles: list[_Role] = field(default_factory=list)

    def add_role(self, role: _Role) -> None:
        if any(r.name == role.name for r in self.roles):
            return
        self.roles.append(role)

    def delete_role(self, role: _Role) -> None:
        for r in self.roles:
            if r.name == role.name:
                self.roles.remove(r)
                return

    def has_role(self, name: str, hierarchy_level: int) -> bool:
        if self.name == name:
            return True
        if hierarchy_level <= 0:
            return False
        return any(r.has_role(name, hierarchy_level - 1) for r in self.roles)

    def has_direct_role(self, name: str) -> bool:
        return any(r.name == name for r in self.roles)

    def role_names(self) -> list[str]:
        return [r.name for r in self.roles]

    def __str__(self) -> str:
        if not self.roles:
            return ""
        names = ", ".join(self.role_names())
        if len(self.roles) != 1:
            names = f"({names})"
        return f"{self.name} < {names}"


def _domain_prefix(args: tuple[str, ...]) -> str | None:
    if len(args) > 1:
        raise DomainParameterError()
    return args[0] if args else None


def _qualify(name: str, domain: str | None) -> str:
    return name if domain is None else f"{domain}{_DOMAIN_SEPARATOR}{name}"


def _unqualify(name: str, domain: str | None) -> str:
    return name if domain is None else name[len(domain) + len(_DOMAIN_SEPARATOR):]


class DefaultRoleManager(RoleManager):
    """In-memory role manager with a bounded inheritance depth."""

    def __init__(self, max_hierarchy_level: int) -> None:
        self._all_roles: dict[str, _Role] = {}
        self._max_hierarchy_level = max_hierarchy_level
        self._matching_func: MatchingFunc | None = None

    def add_matching_func(self, name: str, fn: MatchingFunc) -> None:
        """Use fn(name, stored_role) to match role names as patterns.

        Only one function is kept; a later call replaces the earlier one.
        """
        self._matching_func = fn

    def _has_role(self, name: str) -> bool:
        if self._matching_func is not None:
            return any(self._matching_func(name, key) for key in self._all_roles)
        return name in self._all_roles

    def _create_role(self, name: str) -> _Role:
        if self._matching_func is not None:
            for key in list(self._all_roles):
                if self._matching_func(name, key):
                    name = key
        return self._all_roles.setdefault(name, _Role(name))

    def clear(self) -> None:
        self._all_roles = {}

    def add_link(self, name1: str, name2: str, *args: str) -> None:
        domain = _domain_prefix(args)
        role1 = self._create_role(_qualify(name1, domain))
        role2 = self._create_role(_qualify(name2, domain))
        role1.add_role(role2)

    def delete_link(self, name1: str, name2: str, *args: str) -> None:
        domain = _domain_prefix(args)
        name1, name2 = _qualify(name1, domain), _qualify(name2, domain)
        if not self._has_role(name1) or not self._has_role(name2):
            raise NameNotFoundError("error: name1 or name2 does not exist")
        role1 = self._create_role(name1)
        role2 = self._create_role(name2)
        role1.delete_role(role2)

    def has_link(self, name1: str, name2: str, *args: str) -> bool:
        domain = _domain_prefix(args)
        name1, name2 = _qualify(name1, domain), _qualify(name2, domain)
        if name1 == name2:
            return True
        if not self._has_role(name1) or not self._has_role(name2):
            return False
        return self._create_role(name1).has_role(name2, self._max_hierarchy_level)

    def get_roles(self, name: str, *args: str) -> list[str]:
        domain = _domain_prefix(args)
        name = _qualify(name, domain)
        if not self._has_role(name):
            return []
        return [_unqualify(r, domain) for r in self._create_role(name).role_names()]

    def get_users(self, name: str, *args: str) -> list[str]:
        domain = _domain_prefix(args)
        name = _qualify(name, domain)
        if not self._has_role(name):
            raise NameNotFoundError()
        return [
            _unqualify(role.name, domain)
            for role in self._all_roles.values()
            if role.has_direct_role(name)
        ]

    def print_roles(self) -> None:
        if not logger.isEnabledFor(logging.INFO):
            return
        text = ", ".join(s for s in map(str, self._all_roles.values()) if s)
        logger.info("%s", text)