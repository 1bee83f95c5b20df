"""Settings, their persistence and the settings panel."""
