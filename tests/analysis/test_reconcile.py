"""Tests for manifest reconciliation."""
from structlog.testing import capture_logs

from license_tools.analysis.reconcile import reconcile, rewrite_manifest
from license_tools.models.identity import ArtifactIdentity
from license_tools.models.library import LibraryRecord
from license_tools.models.record_set import RecordSet


def _record(descriptor: str, **fields) -> LibraryRecord:  # type: ignore[no-untyped-def]
    return LibraryRecord(artifact_id=ArtifactIdentity.parse(descriptor), **fields)


def _ids(records: list[LibraryRecord]) -> list[str]:
    return [str(record.artifact_id) for record in records]


class TestReconcile:
    """Tests for reconcile."""

    def test_matching_sets_are_ok(self) -> None:
        """Test that a manifest covering all dependencies needs no rewrite."""
        manifest = RecordSet([_record("com.a:one:+"), _record("com.b:two:+")])
        resolved = RecordSet([_record("com.b:two:2.0"), _record("com.a:one:1.0")])

        result = reconcile(manifest, resolved)

        assert result.is_ok
        assert result.undocumented == []
        assert result.stale == []
        assert result.rewritten is None

    def test_empty_sets_are_ok(self) -> None:
        """Test that nothing resolved and nothing listed is consistent."""
        assert reconcile(RecordSet(), RecordSet()).is_ok

    def test_undocumented_dependency(self) -> None:
        """Test that a resolved dependency missing from the manifest is reported."""
        manifest = RecordSet([_record("com.a:one:+")])
        resolved = RecordSet([_record("com.a:one:1.0"), _record("com.c:new:3.0")])

        result = reconcile(manifest, resolved)

        assert not result.is_ok
        assert _ids(result.undocumented) == ["com.c:new:3.0"]
        assert result.stale == []
        assert _ids(result.rewritten or []) == ["com.a:one:+", "com.c:new:+"]

    def test_stale_entry(self) -> None:
        """Test that a manifest entry no longer resolved is reported and dropped."""
        manifest = RecordSet([_record("com.a:one:+"), _record("com.old:gone:+")])
        resolved = RecordSet([_record("com.a:one:1.0")])

        result = reconcile(manifest, resolved)

        assert not result.is_ok
        assert result.undocumented == []
        assert _ids(result.stale) == ["com.old:gone:+"]
        assert _ids(result.rewritten or []) == ["com.a:one:+"]

    def test_both_directions_reported_together(self) -> None:
        """Test that additions and removals are computed in one pass."""
        manifest = RecordSet([_record("com.old:gone:+"), _record("com.a:one:+")])
        resolved = RecordSet([_record("com.a:one:1.0"), _record("com.c:new:3.0")])

        result = reconcile(manifest, resolved)

        assert _ids(result.undocumented) == ["com.c:new:3.0"]
        assert _ids(result.stale) == ["com.old:gone:+"]
        assert _ids(result.rewritten or []) == ["com.a:one:+", "com.c:new:+"]

    def test_exact_manifest_version_must_match(self) -> None:
        """Test that a pinned manifest entry does not cover other versions."""
        manifest = RecordSet([_record("com.a:one:1.0")])
        resolved = RecordSet([_record("com.a:one:2.0")])

        result = reconcile(manifest, resolved)

        assert _ids(result.undocumented) == ["com.a:one:2.0"]
        assert _ids(result.stale) == ["com.a:one:1.0"]
        assert _ids(result.rewritten or []) == ["com.a:one:+"]

    def test_inputs_are_not_modified(self) -> None:
        """Test that reconciliation leaves both sets untouched."""
        manifest = RecordSet([_record("com.old:gone:+")])
        resolved = RecordSet([_record("com.c:new:3.0")])

        reconcile(manifest, resolved)

        assert manifest.identities() == [ArtifactIdentity.parse("com.old:gone:+")]
        assert resolved.identities() == [ArtifactIdentity.parse("com.c:new:3.0")]


class TestRewriteManifest:
    """Tests for rewrite_manifest."""

    def test_retained_entries_keep_order_and_fields(self) -> None:
        """Test that untouched entries are rewritten as they were."""
        manifest = RecordSet(
            [
                _record("com.z:last:+", license="MIT", copyright_holder="Z"),
                _record("com.a:first:+", license="Apache-2.0"),
            ]
        )

        rewritten = rewrite_manifest(manifest, [_record("com.m:mid:1.0")], [])

        assert _ids(rewritten) == ["com.z:last:+", "com.a:first:+", "com.m:mid:+"]
        assert rewritten[0].license == "MIT"
        assert rewritten[0].copyright_holder == "Z"
        assert rewritten[1].license == "Apache-2.0"

    def test_appended_entries_carry_resolved_metadata(self) -> None:
        """Test that new entries keep what dependency resolution found."""
        added = _record("com.c:new:3.0", library_name="New", license="MIT")

        rewritten = rewrite_manifest(RecordSet(), [added], [])

        assert rewritten[0].library_name == "New"
        assert rewritten[0].license == "MIT"
        assert rewritten[0].artifact_id.version == "+"

    def test_versions_of_one_artifact_collapse(self) -> None:
        """Test that several undocumented versions yield a single entry."""
        undocumented = [
            _record("com.c:new:1.0", license="MIT"),
            _record("com.c:new:2.0", license="Apache-2.0"),
        ]

        rewritten = rewrite_manifest(RecordSet(), undocumented, [])

        assert _ids(rewritten) == ["com.c:new:+"]
        assert rewritten[0].license == "MIT"

    def test_collapsed_manifest_entry_is_logged(self) -> None:
        """Test that a pinned manifest entry folded into another is reported."""
        manifest = RecordSet(
            [
                _record("com.a:lib:1.0", license="MIT"),
                _record("com.a:lib:2.0", license="Apache-2.0"),
            ]
        )

        with capture_logs() as captured:
            rewritten = rewrite_manifest(manifest, [_record("com.c:new:1.0")], [])

        assert _ids(rewritten) == ["com.a:lib:+", "com.c:new:+"]
        assert rewritten[0].license == "MIT"
        warnings = [event for event in captured if event["log_level"] == "warning"]
        assert len(warnings) == 1
        assert warnings[0]["artifact"] == "com.a:lib:2.0"
        assert warnings[0]["kept_as"] == "com.a:lib:+"

    def test_undocumented_versions_collapse_quietly(self) -> None:
        """Test that only hand-written entries trigger the warning."""
        undocumented = [_record("com.c:new:1.0"), _record("com.c:new:2.0")]

        with capture_logs() as captured:
            rewrite_manifest(RecordSet(), undocumented, [])

        assert [e for e in captured if e["log_level"] == "warning"] == []

    def test_rewrite_is_idempotent(self) -> None:
        """Test that reconciling the rewritten manifest finds nothing to do."""
        manifest = RecordSet([_record("com.a:one:1.0"), _record("com.old:gone:+")])
        resolved = RecordSet([_record("com.a:one:1.0"), _record("com.c:new:3.0")])

        first = reconcile(manifest, resolved)
        second = reconcile(RecordSet(first.rewritten or []), resolved)

        assert second.is_ok
