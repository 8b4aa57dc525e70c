"""Artifact identity model."""
from __future__ import annotations

from pydantic import BaseModel, Field

from license_tools.constants import WILDCARD_VERSION
from license_tools.exceptions import MalformedIdentityError


class ArtifactIdentity(BaseModel):
    """Canonical ``group:name:version`` key for a dependency.

    Identities are immutable and hash on all three fields. Manifest entries
    usually carry the wildcard version ``+`` so they keep matching a library
    across upgrades; resolved artifacts always carry exact versions.
    """

    model_config = {"extra": "forbid", "frozen": True}

    group: str = Field(description="Artifact group (Maven groupId, 'pypi', ...)")
    name: str = Field(description="Artifact name")
    version: str = Field(description="Exact version or the wildcard token")

    @classmethod
    def parse(cls, descriptor: str) -> ArtifactIdentity:
        """Parse a ``group:name:version`` descriptor.

        Any colons after the second one belong to the version.

        Args:
            descriptor: Descriptor string.

        Returns:
            The parsed ArtifactIdentity.

        Raises:
            MalformedIdentityError: If the descriptor has fewer than three
                segments or an empty group or name.
        """
        parts = descriptor.split(":", 2)
        if len(parts) < 3 or not parts[0] or not parts[1] or not parts[2]:
            raise MalformedIdentityError(descriptor)
        return cls(group=parts[0], name=parts[1], version=parts[2])

    @property
    def is_wildcard(self) -> bool:
        """True if the version is the wildcard token."""
        return self.version == WILDCARD_VERSION

    def with_wildcard_version(self) -> ArtifactIdentity:
        """Return a copy of this identity with the wildcard version."""
        if self.is_wildcard:
            return self
        return self.model_copy(update={"version": WILDCARD_VERSION})

    def matches(self, other: ArtifactIdentity, exact: bool = False) -> bool:
        """Check whether two identities refer to the same declared entry.

        Args:
            other: Identity to compare with.
            exact: Compare versions literally. When False, a wildcard version
                on either side matches any version.

        Returns:
            True if the identities match.
        """
        if self.group != other.group or self.name != other.name:
            return False
        if exact:
            return self.version == other.version
        return (
            self.is_wildcard
            or other.is_wildcard
            or self.version == other.version
        )

    def __str__(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"
