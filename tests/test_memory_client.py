"""Tests for InMemoryMarketClient, the socket-free MarketClient."""

from marketline import (
    ClientState,
    ErrorKind,
    InMemoryMarketClient,
    MarketClient,
    MemoryMarket,
)


class TestInMemoryMarketClient:
    def test_is_a_market_client(self):
        assert isinstance(InMemoryMarketClient(), MarketClient)

    def test_lifecycle(self, market: MemoryMarket):
        client = InMemoryMarketClient(market)
        assert client.state == ClientState.DISCONNECTED
        assert client.connect()
        assert client.state == ClientState.CONNECTED
        assert client.login("alice", "secret")
        assert client.state == ClientState.AUTHENTICATED
        client.disconnect()
        client.disconnect()
        assert client.state == ClientState.DISCONNECTED
        assert client.current_user is None

    def test_requires_connect(self, market: MemoryMarket):
        client = InMemoryMarketClient(market)
        assert not client.login("alice", "secret")
        assert client.last_outcome.error == ErrorKind.NOT_CONNECTED
        assert client.sent == []

    def test_wrong_password(self, market: MemoryMarket):
        client = InMemoryMarketClient(market)
        client.connect()
        assert not client.login("alice", "nope")
        assert client.last_outcome.error == ErrorKind.PROTOCOL_MISMATCH

    def test_encodes_like_the_network_client(self, market: MemoryMarket):
        client = InMemoryMarketClient(market)
        client.connect()
        client.login("alice", "secret")
        client.post_item("Bike", "Good bike", 50.0, "alice")
        assert client.sent == ["LOGIN alice secret", "POST_ITEM Bike|Good bike|50.00|alice"]

    def test_cross_identity_sends_nothing(self, market: MemoryMarket):
        client = InMemoryMarketClient(market)
        client.connect()
        client.login("alice", "secret")
        sent_before = list(client.sent)
        assert client.buy_item("bob", "item-1") is False
        assert client.sent == sent_before
        assert client.last_outcome.error == ErrorKind.AUTHORIZATION_MISMATCH

    def test_register_then_trade(self, market: MemoryMarket):
        seller = InMemoryMarketClient(market)
        buyer = InMemoryMarketClient(market)
        seller.connect()
        buyer.connect()

        assert buyer.create_user("carol", "pw")
        assert not buyer.create_user("carol", "pw")
        assert buyer.login("carol", "pw")

        assert seller.login("alice", "secret")
        assert seller.post_item("Desk", "Solid oak", "120", "alice")

        found = buyer.search_items("OAK")
        assert [(l.title, l.sold) for l in found] == [("Desk", False)]
        assert buyer.buy_item("carol", found[0].item_id)
        assert not buyer.buy_item("carol", found[0].item_id)

    def test_search_empty(self, market: MemoryMarket):
        client = InMemoryMarketClient(market)
        client.connect()
        assert client.search_items("anything") == []

    def test_get_response_has_nothing_pending(self, market: MemoryMarket):
        client = InMemoryMarketClient(market)
        client.connect()
        assert client.get_response() is None
        assert client.is_connected
