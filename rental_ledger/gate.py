"""Identity and permission checks for ledger calls."""

from rental_ledger.exceptions import (
    NotAdminError,
    NotGuestError,
    NotOwnerError,
    NotWhitelistedError,
)
from rental_ledger.models import Identity, PropertyRecord


class PermissionGate:
    """Answer who may do what against the current ledger state.

    Parameters
    ----------
    admin : Identity
        The ledger administrator. Cannot be changed after construction.
    """

    def __init__(self, admin: Identity) -> None:
        self._admin = admin
        self._whitelist: set[Identity] = set()

    @property
    def admin(self) -> Identity:
        return self._admin

    def is_admin(self, identity: Identity) -> bool:
        return identity == self._admin

    def is_whitelisted(self, identity: Identity) -> bool:
        return identity in self._whitelist

    def whitelisted(self) -> frozenset[Identity]:
        """Return a snapshot of the whitelist."""
        return frozenset(self._whitelist)

    def add(self, identity: Identity) -> bool:
        """Add ``identity`` to the whitelist.

        Returns ``False`` if it was already present. There is no removal.
        """
        if identity in self._whitelist:
            return False
        self._whitelist.add(identity)
        return True

    def require_admin(self, identity: Identity) -> None:
        if not self.is_admin(identity):
            raise NotAdminError(f"{identity} is not the ledger admin")

    def require_whitelisted(self, identity: Identity) -> None:
        if not self.is_whitelisted(identity):
            raise NotWhitelistedError(f"{identity} is not whitelisted")

    def require_owner(self, record: PropertyRecord, identity: Identity) -> None:
        if record.owner != identity:
            raise NotOwnerError(
                f"{identity} is not the owner of property {record.property_id}"
            )

    def require_guest(self, record: PropertyRecord, identity: Identity) -> None:
        if record.guest is None or record.guest != identity:
            raise NotGuestError(
                f"{identity} is not the guest of property {record.property_id}"
            )
