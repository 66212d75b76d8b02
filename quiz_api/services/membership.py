"""Group membership lookups against the host account directory."""
import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Dict, Iterable, List, Optional

from quiz_api.core.config import settings


logger = logging.getLogger(__name__)


def account_name(principal_name: str) -> str:
    """Reduce ``DOMAIN\\user`` or ``user@REALM`` to the bare account name."""
    name = principal_name.rsplit("\\", 1)[-1]
    return name.split("@", 1)[0]


class GroupMembershipProvider(ABC):
    """Source of group names for a principal."""

    @abstractmethod
    def get_groups(self, principal_name: str) -> Iterable[str]:
        """
        Return the names of the groups ``principal_name`` belongs to.

        Raises:
            LookupError: the account does not exist
            Exception: any directory failure, propagated as-is
        """


class LocalGroupMembershipProvider(GroupMembershipProvider):
    """Looks up memberships in the machine's own account database."""

    def get_groups(self, principal_name: str) -> List[str]:
        # Not available on every platform; a failed import counts as a lookup failure.
        import grp
        import pwd

        name = account_name(principal_name)
        try:
            account = pwd.getpwnam(name)
        except KeyError:
            raise LookupError(f"Account not found: {name}")

        groups = []
        for group in grp.getgrall():
            if group.gr_gid == account.pw_gid or name in group.gr_mem:
                groups.append(group.gr_name)
        return groups


class StaticGroupMembershipProvider(GroupMembershipProvider):
    """Fixed principal-to-groups mapping for development and tests."""

    def __init__(self, memberships: Optional[Dict[str, List[str]]] = None):
        self.memberships = {
            principal.casefold(): list(groups)
            for principal, groups in (memberships or {}).items()
        }

    def get_groups(self, principal_name: str) -> List[str]:
        try:
            return self.memberships[principal_name.casefold()]
        except KeyError:
            raise LookupError(f"Account not found: {principal_name}")


def is_member(provider: GroupMembershipProvider, principal_name: str, group_name: str) -> bool:
    """
    Return True iff ``principal_name`` belongs to ``group_name`` (case-insensitive).

    Lookup failures are logged and reported as non-membership.
    """
    target = group_name.casefold()
    try:
        for group in provider.get_groups(principal_name):
            if group.casefold() == target:
                return True
    except Exception as exc:
        logger.warning("Error checking user groups for %s: %s", principal_name, exc)
    return False


@lru_cache
def get_membership_provider() -> GroupMembershipProvider:
    """Dependency returning the provider selected by MEMBERSHIP_BACKEND."""
    backend = settings.MEMBERSHIP_BACKEND
    if backend == "local":
        return LocalGroupMembershipProvider()
    if backend == "static":
        return StaticGroupMembershipProvider(settings.STATIC_GROUP_MEMBERSHIPS)
    raise RuntimeError(f"Unknown MEMBERSHIP_BACKEND: {backend!r}")
