from pydantic import BaseModel, Field


class TwoFactorSetupOut(BaseModel):
    secret: str = Field(..., description="Base32 TOTP secret, for manual entry")
    otpauth_uri: str = Field(..., description="otpauth:// enrollment URI")
    qr_code: str = Field(..., description="PNG data URI of the enrollment QR code")


class BackupCodesOut(BaseModel):
    backup_codes: list[str] = Field(
        ..., description="Plaintext recovery codes, shown to the user once"
    )


class SecondFactorOut(BaseModel):
    user_id: str
    used_backup_code: bool = False
    remaining_backup_codes: int


class TwoFactorStatusOut(BaseModel):
    enabled: bool
    has_backup_codes: bool
    remaining_backup_codes: int = 0
