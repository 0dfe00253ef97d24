"""Tests for playback state models."""

import pytest

from mpdnotify.api.mpd.types import MpdTrack
from mpdnotify.models.playback import (
    PlaybackSnapshot,
    PlaybackState,
    notification_body,
)


class TestPlaybackState:
    """Tests for PlaybackState mapping."""

    @pytest.mark.parametrize(
        ("raw", "state", "title"),
        [
            ("play", PlaybackState.PLAYING, "Now Playing"),
            ("pause", PlaybackState.PAUSED, "Now Paused"),
            ("stop", PlaybackState.STOPPED, "Stopped"),
        ],
    )
    def test_known_states(self, raw: str, state: PlaybackState, title: str) -> None:
        """Test MPD states map to states and titles."""
        assert PlaybackState.from_mpd(raw) is state
        assert state.title == title

    @pytest.mark.parametrize("raw", ["", "unknown", "PLAY", "playing", "stopped"])
    def test_unknown_states(self, raw: str) -> None:
        """Test anything else maps to UNKNOWN with a ?? title."""
        state = PlaybackState.from_mpd(raw)
        assert state is PlaybackState.UNKNOWN
        assert state.title == "??"


class TestNotificationBody:
    """Tests for notification_body."""

    def test_metadata_lines(self) -> None:
        """Test the artist/song/album layout."""
        track = MpdTrack(file="a.flac", artist="Nina Simone", title="Sinnerman", album="Pastel Blues")
        body = notification_body(PlaybackState.PLAYING, track)
        assert body == "Artist: Nina Simone\nSong: Sinnerman\nAlbum: Pastel Blues"

    @pytest.mark.parametrize("state", [PlaybackState.PAUSED, PlaybackState.STOPPED])
    def test_same_layout_when_not_playing(self, state: PlaybackState) -> None:
        """Test paused and stopped keep the metadata."""
        track = MpdTrack(artist="A", title="T", album="L")
        assert notification_body(state, track) == "Artist: A\nSong: T\nAlbum: L"

    def test_empty_metadata(self) -> None:
        """Test missing tags render as empty values."""
        body = notification_body(PlaybackState.STOPPED, MpdTrack())
        assert body == "Artist: \nSong: \nAlbum: "

    def test_unknown_state(self) -> None:
        """Test unknown state ignores the metadata."""
        track = MpdTrack(artist="A", title="T", album="L")
        assert notification_body(PlaybackState.UNKNOWN, track) == "Unknown state"


class TestPlaybackSnapshot:
    """Tests for PlaybackSnapshot change detection."""

    def test_initial_differs_from_everything(self) -> None:
        """Test the empty snapshot differs from any reading."""
        snapshot = PlaybackSnapshot()
        for state in PlaybackState:
            assert snapshot.differs(0, state)
            assert snapshot.differs(657932, state)
            assert snapshot.differs(-1, state)

    def test_same_reading(self) -> None:
        """Test an identical reading is not a change."""
        snapshot = PlaybackSnapshot(song_id=5, state=PlaybackState.PLAYING)
        assert not snapshot.differs(5, PlaybackState.PLAYING)

    def test_song_change(self) -> None:
        """Test a new song ID is a change."""
        snapshot = PlaybackSnapshot(song_id=5, state=PlaybackState.PLAYING)
        assert snapshot.differs(6, PlaybackState.PLAYING)

    def test_state_change(self) -> None:
        """Test a new state is a change."""
        snapshot = PlaybackSnapshot(song_id=5, state=PlaybackState.PLAYING)
        assert snapshot.differs(5, PlaybackState.PAUSED)

    def test_frozen(self) -> None:
        """Test snapshots are immutable."""
        snapshot = PlaybackSnapshot(song_id=5, state=PlaybackState.PLAYING)
        with pytest.raises(AttributeError):
            snapshot.song_id = 6  # type: ignore[misc]
