"""SkillShare exceptions."""


class SkillShareError(Exception):
    """Base exception."""


class StoreUnavailable(SkillShareError):
    """Readiness probe failed or a store read raised."""


class DecodeError(SkillShareError):
    """Stored bytes do not parse as the expected structure."""


class UnsupportedSchemaVersion(DecodeError):
    """Blob carries a schema version this build cannot read."""

    def __init__(self, kind: str, version) -> None:
        super().__init__(f"{kind} blob uses unsupported schema version {version!r}")
        self.kind = kind
        self.version = version


class UserRejected(SkillShareError):
    """The signer declined the write."""


class WriteFailed(SkillShareError):
    """Any other failure from a write call."""


class WalletNotConnected(SkillShareError):
    """A write was requested without a wallet session."""


class InvalidDraft(SkillShareError):
    """Submission draft or rating value failed validation."""


class RecordNotFound(SkillShareError):
    """No record stored under the requested identifier."""
