"""Tests for aggregator link encoding and decoding."""

import pytest

from feed_editor.config import Settings
from feed_editor.errors import MalformedLinkError
from feed_editor.link import channel_feed_url, channel_thumbnail_url, decode, encode

BASE = (
    "https://rss-bridge.org/bridge01/"
    "?action=display&bridge=FeedMergeBridge&feed_name=yt"
)
FEED_PREFIX = "https%3A%2F%2Fwww.youtube.com%2Ffeeds%2Fvideos.xml%3Fchannel_id%3D"


@pytest.fixture
def settings():
    return Settings(_env_file=None)


class TestEncode:
    """Tests for encode."""

    def test_empty_list(self, settings):
        """No channels still produces the fixed bridge parameters."""
        link = encode([], settings)

        assert link == f"{BASE}&format=Atom"
        assert "feed_" not in link.replace("feed_name", "")

    def test_two_channels_in_order(self, settings):
        """Each channel gets a numbered, fully quoted feed parameter."""
        link = encode(["UC1", "UC2"], settings)

        assert link == (
            f"{BASE}&feed_1={FEED_PREFIX}UC1&feed_2={FEED_PREFIX}UC2&format=Atom"
        )

    def test_blank_entries_are_skipped_and_numbering_stays_dense(self, settings):
        """Blank ids are dropped and later ids are renumbered from 1."""
        link = encode(["", "UCa", "   ", "UCb", ""], settings)

        assert f"feed_1={FEED_PREFIX}UCa" in link
        assert f"feed_2={FEED_PREFIX}UCb" in link
        assert "feed_3=" not in link

    def test_duplicates_are_kept(self, settings):
        link = encode(["UCx", "UCx"], settings)

        assert f"feed_1={FEED_PREFIX}UCx" in link
        assert f"feed_2={FEED_PREFIX}UCx" in link

    def test_unsafe_characters_are_quoted(self, settings):
        """Characters that would break the query string are escaped twice."""
        link = encode(["a&b=c d"], settings)

        assert "&b=" not in link
        assert f"feed_1={FEED_PREFIX}a%2526b%253Dc%2520d" in link

    def test_hosts_come_from_settings(self):
        """Bridge and feed hosts can point at a local server."""
        settings = Settings(
            _env_file=None,
            bridge_url="http://localhost:3000/",
            video_feed_url="http://localhost:4000/feed.xml",
        )

        link = encode(["UC1"], settings)

        assert link.startswith("http://localhost:3000/?action=display")
        assert "feed_1=http%3A%2F%2Flocalhost%3A4000%2Ffeed.xml%3Fchannel_id%3DUC1" in link


class TestDecode:
    """Tests for decode."""

    def test_round_trip(self, settings):
        """Decoding an encoded link restores the ids, padded to ten slots."""
        channel_ids = ["UCuAXFkgsw1L7xaCfnd5JJOw", "UC2", "UC3"]

        result = decode(encode(channel_ids, settings), settings)

        assert result == channel_ids + [""] * 7

    def test_round_trip_full_list(self, settings):
        channel_ids = [f"UC{i}" for i in range(10)]

        assert decode(encode(channel_ids, settings), settings) == channel_ids

    def test_round_trip_empty_list(self, settings):
        assert decode(encode([], settings), settings) == [""] * 10

    def test_round_trip_unsafe_identifier(self, settings):
        assert decode(encode(["a&b=c d"], settings), settings)[0] == "a&b=c d"

    def test_not_a_url_raises(self, settings):
        with pytest.raises(MalformedLinkError):
            decode("not a url", settings)

    def test_empty_string_raises(self, settings):
        with pytest.raises(MalformedLinkError):
            decode("", settings)

    def test_invalid_port_raises(self, settings):
        with pytest.raises(MalformedLinkError):
            decode("https://host:notaport/?feed_1=x", settings)

    def test_nested_value_not_a_url_leaves_slot_empty(self, settings):
        """A feed parameter that is not a URL degrades to an empty slot."""
        result = decode("https://host/path?feed_1=not-a-url", settings)

        assert result == [""] * 10

    def test_nested_url_without_channel_id_leaves_slot_empty(self, settings):
        result = decode(
            "https://host/?feed_1=https%3A%2F%2Fexample.com%2Ffeed.xml", settings
        )

        assert result == [""] * 10

    def test_gaps_are_preserved(self, settings):
        """Slots follow the parameter numbers, not their order in the link."""
        link = (
            f"https://host/?feed_3={FEED_PREFIX}UC3"
            f"&feed_1={FEED_PREFIX}UC1&feed_11={FEED_PREFIX}UC11"
        )

        result = decode(link, settings)

        assert result[0] == "UC1"
        assert result[1] == ""
        assert result[2] == "UC3"
        assert "UC11" not in result
        assert len(result) == 10

    def test_first_duplicate_parameter_wins(self, settings):
        link = f"https://host/?feed_1={FEED_PREFIX}first&feed_1={FEED_PREFIX}second"

        assert decode(link, settings)[0] == "first"

    def test_slot_count_follows_settings(self):
        settings = Settings(_env_file=None, max_channels=3)

        assert decode(encode(["UC1"], settings), settings) == ["UC1", "", ""]


def test_channel_feed_url(settings):
    assert (
        channel_feed_url("UC1", settings)
        == "https://www.youtube.com/feeds/videos.xml?channel_id=UC1"
    )


def test_channel_thumbnail_url(settings):
    assert channel_thumbnail_url("UC1", settings) == "https://www.youtube.com/channel/UC1"
