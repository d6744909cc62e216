"""镜像清理测试"""

import pytest

from spade_docker.managers.image.base import (
    ImageNotFoundError,
    InspectionError,
    MissingImagePolicy,
    PrunePolicy,
    RecordEncodingError,
)
from spade_docker.managers.image.cleanup import ImageCleaner

from .conftest import FOREIGN, OWNED, FakeBackend


def make_cleaner(store, backend, prune_policy=PrunePolicy.REMAINING, missing=MissingImagePolicy.FORGET):
    return ImageCleaner(store, backend, prune_policy=prune_policy, missing_image_policy=missing)


class TestShrinkPolicies:
    def test_suffix_policy_collapses_to_suffix(self, store):
        store.replace(["a", "b", "c"])
        backend = FakeBackend({"a": FOREIGN, "b": OWNED, "c": OWNED}, removable=["b"])

        report = make_cleaner(store, backend, PrunePolicy.SUFFIX).cleanup()

        assert store.load() == ["c"]
        assert report["removed"] == ["b"]
        assert report["kept"] == ["a", "c"]
        assert backend.inspected == ["a", "b", "c"]

    def test_remaining_policy_keeps_skipped_images(self, store):
        store.replace(["a", "b", "c"])
        backend = FakeBackend({"a": FOREIGN, "b": OWNED, "c": OWNED}, removable=["b"])

        make_cleaner(store, backend, PrunePolicy.REMAINING).cleanup()

        assert store.load() == ["a", "c"]

    @pytest.mark.parametrize("policy", list(PrunePolicy))
    def test_all_owned_removed(self, store, policy):
        store.replace(["a", "b", "c"])
        backend = FakeBackend({"a": OWNED, "b": OWNED, "c": OWNED})

        report = make_cleaner(store, backend, policy).cleanup()

        assert store.load() == []
        assert report["removed"] == ["a", "b", "c"]

    def test_nothing_removed_leaves_file_untouched(self, store):
        store.replace(["a", "b"])
        before = store.location.record_path.stat().st_mtime_ns
        backend = FakeBackend({"a": FOREIGN, "b": OWNED}, removable=[])

        report = make_cleaner(store, backend).cleanup()

        assert store.load() == ["a", "b"]
        assert store.location.record_path.stat().st_mtime_ns == before
        assert report["removed"] == []

    def test_store_never_holds_removed_identifier(self, store):
        store.replace(["a", "b", "c", "d"])
        snapshots = []

        class RecordingBackend(FakeBackend):
            def inspect(self, image_id):
                snapshots.append((list(self.removed), store.load()))
                return super().inspect(image_id)

        backend = RecordingBackend({"a": OWNED, "b": FOREIGN, "c": OWNED, "d": OWNED})

        make_cleaner(store, backend).cleanup()

        for removed, persisted in snapshots:
            assert not set(removed) & set(persisted)
        assert store.load() == ["b"]

    def test_duplicate_identifiers_are_dropped_together(self, store):
        store.replace(["a", "b", "a"])
        backend = FakeBackend({"a": OWNED, "b": FOREIGN})

        make_cleaner(store, backend).cleanup()

        assert store.load() == ["b"]
        assert backend.inspected == ["a", "b"]


class TestMissingImages:
    def test_forget_policy_drops_missing_image(self, store):
        store.replace(["gone", "b"])
        backend = FakeBackend({"gone": None, "b": FOREIGN})

        report = make_cleaner(store, backend).cleanup()

        assert store.load() == ["b"]
        assert report["forgotten"] == ["gone"]
        assert backend.removed == []

    def test_fail_policy_aborts(self, store):
        store.replace(["gone", "b"])
        backend = FakeBackend({"gone": None, "b": OWNED})

        with pytest.raises(ImageNotFoundError):
            make_cleaner(store, backend, missing=MissingImagePolicy.FAIL).cleanup()

        assert store.load() == ["gone", "b"]
        assert backend.inspected == ["gone"]


class TestInspectionFailures:
    def test_inspection_error_aborts_whole_run(self, store, inspection_failure):
        store.replace(["a", "b", "c"])
        backend = FakeBackend({"a": OWNED, "b": inspection_failure, "c": OWNED})

        with pytest.raises(InspectionError):
            make_cleaner(store, backend).cleanup()

        # a 已删除并持久化，c 未被处理
        assert store.load() == ["b", "c"]
        assert backend.removed == ["a"]

    def test_encoding_error_aborts(self, store):
        store.replace(["a"])
        backend = FakeBackend({"a": RecordEncodingError("bad json")})

        with pytest.raises(RecordEncodingError):
            make_cleaner(store, backend).cleanup()

        assert store.load() == ["a"]


class TestEdgeCases:
    def test_empty_store(self, store):
        backend = FakeBackend({})

        report = make_cleaner(store, backend).cleanup()

        assert report == {"removed": [], "kept": [], "forgotten": []}
        assert not store.location.record_path.exists()

    def test_empty_lines_are_not_inspected(self, store):
        store.replace(["a", ""])
        backend = FakeBackend({"a": OWNED})

        make_cleaner(store, backend).cleanup()

        assert backend.inspected == ["a"]
        assert store.load() == []

    def test_empty_inspection_result_is_kept(self, store):
        store.replace(["a", "b"])
        backend = FakeBackend({"a": {}, "b": OWNED})

        report = make_cleaner(store, backend).cleanup()

        assert report["kept"] == ["a"]
        assert report["removed"] == ["b"]
        assert store.load() == ["a"]

    def test_dry_run_changes_nothing(self, store):
        store.replace(["a", "b", "gone"])
        backend = FakeBackend({"a": OWNED, "b": FOREIGN, "gone": None})

        report = make_cleaner(store, backend).cleanup(dry_run=True)

        assert report == {"removed": ["a"], "kept": ["b"], "forgotten": ["gone"]}
        assert backend.removed == []
        assert store.load() == ["a", "b", "gone"]
