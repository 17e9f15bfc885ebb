from dataclasses import dataclass


@dataclass(frozen=True)
class Item:
    """Represents an inventory item. The id doubles as the SKU."""
    id: str
    name: str

    @property
    def sku(self) -> str:
        return self.id

    def __repr__(self):
        return f"Item(id={self.id!r}, name={self.name!r})"
