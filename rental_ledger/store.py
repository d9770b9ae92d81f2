"""In-memory property record store."""

from dataclasses import dataclass, field

from rental_ledger.exceptions import UnknownPropertyError
from rental_ledger.models import Identity, PropertyRecord


@dataclass
class PropertyStore:
    """Owns property records and the id counter.

    Ids are issued from ``counter`` in listing order and never reused.
    Records are never removed.
    """

    properties: dict[int, PropertyRecord] = field(default_factory=dict)
    counter: int = 0

    # Relationship indexes
    _owner_properties: dict[Identity, list[int]] = field(default_factory=dict)

    def add_property(
        self,
        owner: Identity,
        name: str,
        address: str,
        description: str,
        image_url: str,
        price_per_day: int,
        number_of_rooms: int,
        area: int,
    ) -> PropertyRecord:
        """Create a record under the next id and advance the counter."""
        prop = PropertyRecord(
            property_id=self.counter,
            name=name,
            address=address,
            description=description,
            image_url=image_url,
            price_per_day=price_per_day,
            number_of_rooms=number_of_rooms,
            area=area,
            owner=owner,
        )
        self.properties[prop.property_id] = prop
        self._owner_properties.setdefault(owner, []).append(prop.property_id)
        self.counter += 1
        return prop

    def get_property(self, property_id: int) -> PropertyRecord:
        """Return the live record for ``property_id``.

        Raises
        ------
        UnknownPropertyError
            If the id has not been issued.
        """
        try:
            return self.properties[property_id]
        except (KeyError, TypeError):
            raise UnknownPropertyError(f"Property {property_id} not found") from None

    def summary(self) -> dict[str, int]:
        """Return summary counts of the stored properties."""
        active = sum(1 for p in self.properties.values() if p.is_active)
        booked = sum(1 for p in self.properties.values() if p.is_booked)
        return {
            "properties": len(self.properties),
            "active": active,
            "unlisted": len(self.properties) - active,
            "booked": booked,
            "owners": len(self._owner_properties),
        }
