"""discogs-playlist: Turn a Discogs collection export into a Spotify playlist."""

__version__ = "0.1.0"
