"""In-memory marketplace state used by the test server and test doubles.

Tracks accounts, listings and messages. All state is in-memory only,
no persistence between restarts.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from marketline.models.listing import ItemListing


@dataclass
class StoredMessage:
    """A message one user sent another about an item."""

    sender: str
    receiver: str
    item_id: str
    body: str


@dataclass
class MemoryMarket:
    """Accounts, listings and messages for a single marketplace."""

    _passwords: dict[str, str] = field(default_factory=dict)
    _listings: dict[str, ItemListing] = field(default_factory=dict)  # item_id -> listing
    _messages: list[StoredMessage] = field(default_factory=list)
    _next_item_id: int = 1

    # --- Accounts ---

    def create_user(self, username: str, password: str) -> bool:
        """Register an account. Returns False if the name is taken."""
        if username in self._passwords:
            return False
        self._passwords[username] = password
        return True

    def has_user(self, username: str) -> bool:
        return username in self._passwords

    def check_password(self, username: str, password: str) -> bool:
        return self._passwords.get(username) == password

    # --- Listings ---

    def add_listing(
        self, title: str, description: str, price: Decimal, seller: str
    ) -> ItemListing:
        """Create a listing with the next sequential id."""
        item_id = str(self._next_item_id)
        self._next_item_id += 1
        listing = ItemListing(
            item_id=item_id,
            title=title,
            description=description,
            price=price,
            seller=seller,
        )
        self._listings[item_id] = listing
        return listing

    def get_listing(self, item_id: str) -> ItemListing | None:
        return self._listings.get(item_id)

    def mark_sold(self, item_id: str) -> ItemListing | None:
        """Flag a listing as sold and return the updated listing."""
        listing = self._listings.get(item_id)
        if listing is None:
            return None
        listing = listing.model_copy(update={"sold": True})
        self._listings[item_id] = listing
        return listing

    def search(self, keyword: str) -> list[ItemListing]:
        """Listings whose title or description contains `keyword`, ignoring case."""
        needle = keyword.lower()
        return [
            listing
            for listing in self._listings.values()
            if needle in listing.title.lower() or needle in listing.description.lower()
        ]

    def listing_count(self) -> int:
        return len(self._listings)

    # --- Messages ---

    def add_message(self, message: StoredMessage) -> None:
        self._messages.append(message)

    def messages_for(self, username: str) -> list[StoredMessage]:
        """Messages received by `username`, oldest first."""
        return [m for m in self._messages if m.receiver == username]
