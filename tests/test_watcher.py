"""Tests for host subscriptions."""

import pytest

from footprints.config.settings import Settings
from footprints.events import (
    EditorChangePayload,
    EditorInfo,
    EmptyPayload,
    EventKind,
    FilePayload,
    FilesMenuPayload,
    LeafPayload,
    MetadataChangedPayload,
    PinnedPayload,
    RenamePayload,
    VaultFile,
)
from footprints.host.base import EventEmitter, Host, Leaf
from footprints.watcher import WIRINGS, ActivityWatcher


class FakeHost(Host):
    def __init__(self, leaves=None):
        self._vault = EventEmitter()
        self._metadata_cache = EventEmitter()
        self._workspace = EventEmitter()
        self._leaves = leaves or []

    @property
    def vault(self):
        return self._vault

    @property
    def metadata_cache(self):
        return self._metadata_cache

    @property
    def workspace(self):
        return self._workspace

    @property
    def storage(self):
        raise NotImplementedError

    def leaves(self):
        return list(self._leaves)

    def listener_total(self):
        total = sum(e.listener_count() for e in (self._vault, self._metadata_cache, self._workspace))
        return total + sum(leaf.events.listener_count() for leaf in self._leaves)


class SpyRecorder:
    def __init__(self):
        self.calls = []

    def record(self, kind, file=None, details=None):
        self.calls.append((kind, file.path if file else None, details))


def only_tracking(*kinds):
    settings = Settings()
    for key in settings.track:
        settings.track[key] = False
    for kind in kinds:
        settings.track[kind.value] = True
    return settings


@pytest.fixture
def recorder():
    return SpyRecorder()


class TestLifecycle:
    def test_stop_before_start(self, recorder):
        host = FakeHost()
        watcher = ActivityWatcher(host, Settings(), recorder)
        watcher.stop()
        watcher.stop()
        assert watcher.subscription_count() == 0
        assert not watcher.active

    def test_start_then_stop_releases_everything(self, recorder):
        host = FakeHost(leaves=[Leaf(id="l1")])
        watcher = ActivityWatcher(host, Settings(), recorder)
        watcher.start()
        assert watcher.active
        assert host.listener_total() == watcher.subscription_count() > 0
        watcher.stop()
        assert host.listener_total() == 0
        watcher.stop()
        assert watcher.subscription_count() == 0

    def test_start_twice_does_not_double_subscribe(self, recorder):
        host = FakeHost()
        watcher = ActivityWatcher(host, only_tracking(EventKind.VAULT_CREATE), recorder)
        watcher.start()
        watcher.start()
        assert host.vault.listener_count("create") == 1
        host.vault.trigger("create", FilePayload(VaultFile("a.md")))
        assert len(recorder.calls) == 1

    def test_restart_after_stop(self, recorder):
        host = FakeHost()
        watcher = ActivityWatcher(host, only_tracking(EventKind.VAULT_CREATE), recorder)
        watcher.start()
        watcher.stop()
        watcher.start()
        assert host.vault.listener_count("create") == 1

    def test_untracked_kinds_not_subscribed(self, recorder):
        host = FakeHost()
        watcher = ActivityWatcher(host, only_tracking(EventKind.VAULT_MODIFY), recorder)
        watcher.start()
        assert watcher.active_kinds() == {EventKind.VAULT_MODIFY}
        host.vault.trigger("create", FilePayload(VaultFile("a.md")))
        assert recorder.calls == []

    def test_unobservable_kinds_are_noops(self, recorder):
        host = FakeHost()
        settings = only_tracking(EventKind.PUBLISH_NAVIGATED, EventKind.MENU_HIDE)
        watcher = ActivityWatcher(host, settings, recorder)
        watcher.start()
        assert watcher.subscription_count() == 0
        assert watcher.active_kinds() == set()

    def test_every_observable_kind_is_wired_once(self):
        kinds = [w.kind for w in WIRINGS]
        assert len(kinds) == len(set(kinds))
        assert set(kinds) == set(EventKind) - {EventKind.PUBLISH_NAVIGATED, EventKind.MENU_HIDE}


class TestCallbacks:
    def test_vault_rename_details(self, recorder):
        host = FakeHost()
        ActivityWatcher(host, only_tracking(EventKind.VAULT_RENAME), recorder).start()
        host.vault.trigger("rename", RenamePayload(VaultFile("Notes/a.md"), "b.md"))
        assert recorder.calls == [(EventKind.VAULT_RENAME, "Notes/a.md", "oldPath: b.md")]

    def test_metadata_changed_skips_disabled_data(self, recorder):
        host = FakeHost()
        ActivityWatcher(host, only_tracking(EventKind.METADATA_CHANGED), recorder).start()
        host.metadata_cache.trigger(
            "changed",
            MetadataChangedPayload(VaultFile("a.md"), data="# body", cache={"tags": []}),
        )
        kind, path, details = recorder.calls[0]
        assert path == "a.md"
        assert "body" not in details
        assert details == "cache: {'tags': []} (dict)"

    def test_no_file_event(self, recorder):
        host = FakeHost()
        ActivityWatcher(host, only_tracking(EventKind.WORKSPACE_LAYOUT_CHANGE), recorder).start()
        host.workspace.trigger("layout-change", EmptyPayload())
        assert recorder.calls == [(EventKind.WORKSPACE_LAYOUT_CHANGE, None, None)]

    def test_editor_change_uses_info_file(self, recorder):
        host = FakeHost()
        ActivityWatcher(host, only_tracking(EventKind.WORKSPACE_EDITOR_CHANGE), recorder).start()
        host.workspace.trigger(
            "editor-change",
            EditorChangePayload(editor="ed", info=EditorInfo(VaultFile("n.md"))),
        )
        kind, path, details = recorder.calls[0]
        assert path == "n.md"
        assert "editor: ed (str)" in details

    def test_files_menu_lists_files(self, recorder):
        host = FakeHost()
        ActivityWatcher(host, only_tracking(EventKind.WORKSPACE_FILES_MENU), recorder).start()
        host.workspace.trigger(
            "files-menu",
            FilesMenuPayload(menu="m", files=[VaultFile("a.md"), VaultFile("b.md")], source="explorer"),
        )
        kind, path, details = recorder.calls[0]
        assert path is None
        assert "files: a.md, b.md (list)" in details
        assert "source: explorer" in details

    def test_parameter_config_can_be_changed(self, recorder):
        host = FakeHost()
        settings = only_tracking(EventKind.VAULT_RENAME)
        settings.parameter_configs["vault-rename"]["old_path"].enabled = False
        ActivityWatcher(host, settings, recorder).start()
        host.vault.trigger("rename", RenamePayload(VaultFile("a.md"), "b.md"))
        assert recorder.calls[0][2] is None

    def test_leaf_events_per_open_leaf(self, recorder):
        leaves = [Leaf(id="l1", file=VaultFile("a.md")), Leaf(id="l2", file=VaultFile("b.md"))]
        host = FakeHost(leaves=leaves)
        watcher = ActivityWatcher(host, only_tracking(EventKind.LEAF_PINNED_CHANGE), recorder)
        watcher.start()
        assert watcher.subscription_count() == 2
        leaves[1].events.trigger("pinned-change", PinnedPayload(pinned=True))
        assert recorder.calls == [(EventKind.LEAF_PINNED_CHANGE, "b.md", "pinned: True")]


class TestLegacyKinds:
    def test_open_requires_file(self, recorder):
        host = FakeHost()
        ActivityWatcher(host, only_tracking(EventKind.OPEN), recorder).start()
        host.workspace.trigger("file-open", FilePayload(None))
        host.workspace.trigger("file-open", FilePayload(VaultFile("a.md")))
        assert recorder.calls == [(EventKind.OPEN, "a.md", None)]

    def test_close_uses_leaf_file(self, recorder):
        host = FakeHost()
        ActivityWatcher(host, only_tracking(EventKind.CLOSE), recorder).start()
        host.workspace.trigger("active-leaf-change", LeafPayload(Leaf(id="x")))
        host.workspace.trigger("active-leaf-change", LeafPayload(Leaf(id="y", file=VaultFile("c.md"))))
        assert recorder.calls == [(EventKind.CLOSE, "c.md", None)]

    def test_new_and_legacy_kinds_share_a_channel(self, recorder):
        host = FakeHost()
        settings = only_tracking(EventKind.VAULT_CREATE, EventKind.CREATE)
        ActivityWatcher(host, settings, recorder).start()
        host.vault.trigger("create", FilePayload(VaultFile("a.md")))
        assert [c[0] for c in recorder.calls] == [EventKind.VAULT_CREATE, EventKind.CREATE]
