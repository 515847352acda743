class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class UserNotFound(DomainError):
    """No user matches the lookup criteria (e.g., id)."""

    pass


class InvalidCredentials(DomainError):
    """The account password did not match."""

    pass


class EncodingError(DomainError):
    """The enrollment QR image could not be rendered."""

    pass


class InvalidCodeFormat(DomainError):
    """Submitted code is not shaped like a TOTP or backup code."""

    pass


class InvalidVerificationCode(DomainError):
    """Submitted TOTP or backup code did not verify."""

    pass


class VerificationRequired(DomainError):
    """The action needs a password or a TOTP code and none usable was given."""

    pass


class TwoFactorAlreadyEnabled(DomainError):
    pass


class TwoFactorNotEnabled(DomainError):
    pass


class TwoFactorSetupNotStarted(DomainError):
    """Enable attempted before a secret was generated for the user."""

    pass
