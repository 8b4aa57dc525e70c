"""Tests for ArtifactIdentity."""
import pytest
from pydantic import ValidationError

from license_tools.exceptions import MalformedIdentityError
from license_tools.models.identity import ArtifactIdentity


class TestParse:
    """Tests for ArtifactIdentity.parse."""

    def test_parses_three_segments(self) -> None:
        """Test that group, name and version are split on colons."""
        identity = ArtifactIdentity.parse("com.squareup.okio:okio:2.8.0")

        assert identity.group == "com.squareup.okio"
        assert identity.name == "okio"
        assert identity.version == "2.8.0"

    def test_parses_wildcard_version(self) -> None:
        """Test that the wildcard version is accepted."""
        identity = ArtifactIdentity.parse("com.example:lib:+")

        assert identity.version == "+"
        assert identity.is_wildcard

    def test_extra_colons_belong_to_version(self) -> None:
        """Test that anything after the second colon is the version."""
        identity = ArtifactIdentity.parse("com.example:lib:1.0:jdk8")

        assert identity.version == "1.0:jdk8"

    @pytest.mark.parametrize(
        "descriptor",
        ["", "lib", "com.example:lib", ":lib:1.0", "com.example::1.0", "com.example:lib:"],
    )
    def test_rejects_malformed_descriptors(self, descriptor: str) -> None:
        """Test that incomplete descriptors raise MalformedIdentityError."""
        with pytest.raises(MalformedIdentityError):
            ArtifactIdentity.parse(descriptor)

    def test_str_round_trips(self) -> None:
        """Test that str() gives back the descriptor."""
        descriptor = "com.example:lib:1.2.3"

        assert str(ArtifactIdentity.parse(descriptor)) == descriptor


class TestEquality:
    """Tests for identity equality and hashing."""

    def test_equal_identities_hash_equal(self) -> None:
        """Test that identities are usable as dict keys."""
        first = ArtifactIdentity.parse("com.example:lib:1.0")
        second = ArtifactIdentity(group="com.example", name="lib", version="1.0")

        assert first == second
        assert {first: "x"}[second] == "x"

    def test_version_is_part_of_identity(self) -> None:
        """Test that different versions are different identities."""
        assert ArtifactIdentity.parse("a:b:1") != ArtifactIdentity.parse("a:b:2")

    def test_identity_is_immutable(self) -> None:
        """Test that identities cannot be changed in place."""
        identity = ArtifactIdentity.parse("a:b:1")

        with pytest.raises(ValidationError):
            identity.version = "2"  # type: ignore[misc]


class TestWildcard:
    """Tests for wildcard handling."""

    def test_with_wildcard_version(self) -> None:
        """Test that the version is replaced by the wildcard."""
        identity = ArtifactIdentity.parse("com.example:lib:1.0")

        wildcard = identity.with_wildcard_version()

        assert str(wildcard) == "com.example:lib:+"
        assert identity.version == "1.0"

    def test_with_wildcard_version_is_idempotent(self) -> None:
        """Test that applying the wildcard twice changes nothing."""
        identity = ArtifactIdentity.parse("com.example:lib:1.0")

        once = identity.with_wildcard_version()

        assert once.with_wildcard_version() == once


class TestMatches:
    """Tests for ArtifactIdentity.matches."""

    def test_wildcard_matches_any_version(self) -> None:
        """Test that a wildcard entry matches every exact version."""
        wildcard = ArtifactIdentity.parse("com.example:lib:+")
        exact = ArtifactIdentity.parse("com.example:lib:3.1.4")

        assert wildcard.matches(exact)
        assert exact.matches(wildcard)

    def test_different_versions_do_not_match(self) -> None:
        """Test that two exact versions only match when equal."""
        first = ArtifactIdentity.parse("com.example:lib:1.0")

        assert first.matches(ArtifactIdentity.parse("com.example:lib:1.0"))
        assert not first.matches(ArtifactIdentity.parse("com.example:lib:2.0"))

    def test_group_and_name_must_match(self) -> None:
        """Test that the wildcard does not cross artifacts."""
        wildcard = ArtifactIdentity.parse("com.example:lib:+")

        assert not wildcard.matches(ArtifactIdentity.parse("com.example:other:1.0"))
        assert not wildcard.matches(ArtifactIdentity.parse("org.example:lib:1.0"))

    def test_exact_mode_compares_versions_literally(self) -> None:
        """Test that exact matching does not expand wildcards."""
        wildcard = ArtifactIdentity.parse("com.example:lib:+")
        exact = ArtifactIdentity.parse("com.example:lib:1.0")

        assert not wildcard.matches(exact, exact=True)
        assert wildcard.matches(wildcard, exact=True)
