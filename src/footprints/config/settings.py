"""Plugin settings and their defaults."""

from dataclasses import dataclass, field
from typing import Optional

from footprints.events import EventKind


LOG_FORMATS = ("plain", "csv", "json", "custom")

DEFAULT_LOG_PATH = "Logs"
DEFAULT_CUSTOM_FORMAT = "%t | %e | %f | %d"


def as_bool(value) -> bool:
    """Read a persisted flag; strings such as "false" or "off" are false."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass
class ParameterConfig:
    """Whether a payload field ends up in the record's details."""
    enabled: bool = True
    name: Optional[str] = None  # label used in the log instead of the field name
    include_type: bool = False

    def to_dict(self) -> dict:
        return {"enabled": self.enabled, "name": self.name, "include_type": self.include_type}

    @classmethod
    def from_dict(cls, data: dict, base: Optional["ParameterConfig"] = None) -> "ParameterConfig":
        """Build a config from a mapping, keeping ``base`` values for absent keys."""
        base = base or cls()
        return cls(
            enabled=as_bool(data["enabled"]) if "enabled" in data else base.enabled,
            name=(data.get("name") or None) if "name" in data else base.name,
            include_type=(
                as_bool(data["include_type"]) if "include_type" in data else base.include_type
            ),
        )


def _p(enabled: bool = True, include_type: bool = False, name: Optional[str] = None) -> ParameterConfig:
    return ParameterConfig(enabled=enabled, name=name, include_type=include_type)


def default_parameter_configs() -> dict[str, dict[str, ParameterConfig]]:
    """Per-kind field configs, following the parameters each host channel passes."""
    return {
        EventKind.METADATA_CHANGED.value: {
            "file": _p(include_type=True),
            "data": _p(enabled=False),
            "cache": _p(include_type=True),
        },
        EventKind.METADATA_DELETED.value: {
            "file": _p(include_type=True),
            "prev_cache": _p(include_type=True, name="prevCache"),
        },
        EventKind.METADATA_RESOLVE.value: {"file": _p(include_type=True)},
        EventKind.METADATA_RESOLVED.value: {},
        EventKind.VAULT_CREATE.value: {"file": _p(include_type=True)},
        EventKind.VAULT_MODIFY.value: {"file": _p(include_type=True)},
        EventKind.VAULT_DELETE.value: {"file": _p(include_type=True)},
        EventKind.VAULT_RENAME.value: {
            "file": _p(include_type=True),
            "old_path": _p(name="oldPath"),
        },
        EventKind.WORKSPACE_QUICK_PREVIEW.value: {
            "file": _p(include_type=True),
            "data": _p(enabled=False),
        },
        EventKind.WORKSPACE_RESIZE.value: {},
        EventKind.WORKSPACE_ACTIVE_LEAF_CHANGE.value: {"leaf": _p(include_type=True)},
        EventKind.WORKSPACE_FILE_OPEN.value: {"file": _p(include_type=True)},
        EventKind.WORKSPACE_LAYOUT_CHANGE.value: {},
        EventKind.WORKSPACE_WINDOW_OPEN.value: {
            "win": _p(include_type=True),
            "window": _p(include_type=True),
        },
        EventKind.WORKSPACE_WINDOW_CLOSE.value: {
            "win": _p(include_type=True),
            "window": _p(include_type=True),
        },
        EventKind.WORKSPACE_CSS_CHANGE.value: {},
        EventKind.WORKSPACE_FILE_MENU.value: {
            "menu": _p(include_type=True),
            "file": _p(include_type=True),
            "source": _p(),
            "leaf": _p(include_type=True),
        },
        EventKind.WORKSPACE_FILES_MENU.value: {
            "menu": _p(include_type=True),
            "files": _p(include_type=True),
            "source": _p(),
            "leaf": _p(include_type=True),
        },
        EventKind.WORKSPACE_URL_MENU.value: {
            "menu": _p(include_type=True),
            "url": _p(),
        },
        EventKind.WORKSPACE_EDITOR_MENU.value: {
            "menu": _p(include_type=True),
            "editor": _p(include_type=True),
            "info": _p(include_type=True),
        },
        EventKind.WORKSPACE_EDITOR_CHANGE.value: {
            "editor": _p(include_type=True),
            "info": _p(include_type=True),
        },
        EventKind.WORKSPACE_EDITOR_PASTE.value: {
            "event": _p(include_type=True),
            "editor": _p(include_type=True),
            "info": _p(include_type=True),
        },
        EventKind.WORKSPACE_EDITOR_DROP.value: {
            "event": _p(include_type=True),
            "editor": _p(include_type=True),
            "info": _p(include_type=True),
        },
        EventKind.WORKSPACE_QUIT.value: {"tasks": _p(include_type=True)},
        EventKind.LEAF_PINNED_CHANGE.value: {"pinned": _p()},
        EventKind.LEAF_GROUP_CHANGE.value: {"group": _p()},
        EventKind.PUBLISH_NAVIGATED.value: {},
        EventKind.MENU_HIDE.value: {},
    }


def default_tracking() -> dict[str, bool]:
    return {kind.value: True for kind in EventKind}


@dataclass
class Settings:
    """Everything the user can configure, persisted as one mapping."""
    log_path: str = DEFAULT_LOG_PATH
    derive_name_from_date: bool = True
    format: str = "plain"
    custom_format: str = DEFAULT_CUSTOM_FORMAT
    track: dict[str, bool] = field(default_factory=default_tracking)
    parameter_configs: dict[str, dict[str, ParameterConfig]] = field(
        default_factory=default_parameter_configs
    )

    def is_tracked(self, kind: EventKind) -> bool:
        return bool(self.track.get(kind.value, False))

    def parameters_for(self, kind: EventKind) -> dict[str, ParameterConfig]:
        return self.parameter_configs.get(kind.value, {})

    def to_dict(self) -> dict:
        return {
            "log_path": self.log_path,
            "derive_name_from_date": self.derive_name_from_date,
            "format": self.format,
            "custom_format": self.custom_format,
            "track": dict(self.track),
            "parameter_configs": {
                kind: {name: cfg.to_dict() for name, cfg in params.items()}
                for kind, params in self.parameter_configs.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Overlay a (possibly partial) persisted mapping onto the defaults."""
        settings = cls()
        if not isinstance(data, dict):
            return settings

        for key in ("log_path", "format", "custom_format"):
            if isinstance(data.get(key), str):
                setattr(settings, key, data[key])
        if "derive_name_from_date" in data:
            settings.derive_name_from_date = as_bool(data["derive_name_from_date"])

        track = data.get("track")
        if isinstance(track, dict):
            for kind, enabled in track.items():
                settings.track[str(kind)] = as_bool(enabled)

        configs = data.get("parameter_configs")
        if isinstance(configs, dict):
            for kind, params in configs.items():
                if not isinstance(params, dict):
                    continue
                merged = settings.parameter_configs.setdefault(str(kind), {})
                for name, cfg in params.items():
                    if isinstance(cfg, dict):
                        merged[str(name)] = ParameterConfig.from_dict(cfg, merged.get(str(name)))

        return settings
