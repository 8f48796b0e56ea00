"""Tests for auction-scoped logging context."""

from src.dmx.logging import (
    AuctionLogContext,
    add_auction_id,
    add_service_info,
    get_auction_id,
)


class TestAuctionLogContext:
    """Tests for binding the auction ID to log entries."""

    def test_context_sets_and_resets(self):
        """The auction ID is bound only inside the context."""
        assert get_auction_id() == ""
        with AuctionLogContext("auction-1"):
            assert get_auction_id() == "auction-1"
            with AuctionLogContext("auction-2"):
                assert get_auction_id() == "auction-2"
            assert get_auction_id() == "auction-1"
        assert get_auction_id() == ""

    def test_processor_adds_auction_id(self):
        """Entries logged inside the context carry the auction ID."""
        with AuctionLogContext("auction-1"):
            event = add_auction_id(None, "info", {"event": "x"})
        assert event["auction_id"] == "auction-1"

    def test_processor_without_auction(self):
        """Entries outside an auction have no auction ID."""
        assert "auction_id" not in add_auction_id(None, "info", {"event": "x"})

    def test_service_info(self):
        """Entries are tagged with the service name."""
        assert add_service_info(None, "info", {})["service"] == "dmx-adapter"
