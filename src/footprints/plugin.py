"""Plugin lifecycle: load settings, wire the logger, unload."""

from typing import Callable, Optional

from footprints.config.settings import Settings
from footprints.config.store import ConfigurationStore
from footprints.host.base import Host, SettingsPersistence
from footprints.log.recorder import EventRecorder
from footprints.log.writer import LogWriter
from footprints.watcher import ActivityWatcher


class FootprintsPlugin:
    """Entry point the host calls on load and unload."""

    def __init__(
        self,
        host: Host,
        persistence: SettingsPersistence,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        self.host = host
        self.store = ConfigurationStore(persistence)
        self.on_error = on_error
        self.recorder: Optional[EventRecorder] = None
        self.watcher: Optional[ActivityWatcher] = None

    @property
    def settings(self) -> Settings:
        if self.store.settings is None:
            raise RuntimeError("plugin settings are not loaded yet")
        return self.store.settings

    async def load_settings(self) -> Settings:
        return await self.store.load()

    async def save_settings(self) -> None:
        await self.store.save()

    async def on_load(self) -> None:
        settings = await self.load_settings()
        writer = LogWriter(self.host.storage, on_error=self.on_error)
        self.recorder = EventRecorder(settings, writer)
        self.watcher = ActivityWatcher(self.host, settings, self.recorder)
        self.watcher.start()

    def on_unload(self) -> None:
        if self.watcher is not None:
            self.watcher.stop()
