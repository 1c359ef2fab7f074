"""Content fingerprinting and the local/shared result stores."""
