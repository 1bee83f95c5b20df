"""Load and save plugin settings through the host."""

from typing import Optional

from footprints.config.settings import Settings
from footprints.host.base import SettingsPersistence


class ConfigurationStore:
    """Holds the one live Settings object for a plugin instance."""

    def __init__(self, persistence: SettingsPersistence):
        self.persistence = persistence
        self.settings: Optional[Settings] = None

    async def load(self) -> Settings:
        """Read persisted settings, with defaults for every missing key."""
        data = await self.persistence.load_persisted()
        self.settings = Settings.from_dict(data or {})
        return self.settings

    async def save(self) -> None:
        if self.settings is None:
            self.settings = Settings()
        await self.persistence.save_persisted(self.settings.to_dict())
