"""Host application contracts and a local implementation."""
