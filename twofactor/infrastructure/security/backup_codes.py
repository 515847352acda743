from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

import twofactor.domain.services as domain_services
from twofactor.infrastructure.security.password import hash_password, verify_password

logger = logging.getLogger(__name__)

NOT_FOUND = -1


@dataclass(frozen=True)
class BackupCodeBatch:
    """
    plaintext_codes are shown to the user once; hashed_codes are what gets
    stored. Both lists share the same ordering.
    """

    plaintext_codes: list[str] = field(default_factory=list)
    hashed_codes: list[str] = field(default_factory=list)


def generate_backup_codes(
    count: int = 10,
    *,
    hash_code: Callable[[str], str] = hash_password,
) -> BackupCodeBatch:
    plaintext_codes: list[str] = []
    hashed_codes: list[str] = []
    for _ in range(count):
        code = domain_services.generate_backup_code()
        plaintext_codes.append(code)
        hashed_codes.append(hash_code(code))
    return BackupCodeBatch(plaintext_codes=plaintext_codes, hashed_codes=hashed_codes)


def verify_backup_code(
    input_code: str,
    hashed_codes: Sequence[str],
    *,
    verify_code: Callable[[str, str], bool] = verify_password,
) -> int:
    """
    Index of the first stored hash matching input_code, or NOT_FOUND (-1).

    Input is normalized first, so "ab12 cd34" matches a hash of "AB12-CD34".
    A stored entry that is not a valid hash never matches.
    """
    if not isinstance(input_code, str) or not input_code:
        return NOT_FOUND

    candidate = domain_services.normalize_backup_code(input_code)
    for index, hashed in enumerate(hashed_codes):
        try:
            matched = verify_code(candidate, hashed)
        except (ValueError, TypeError):
            logger.warning("Skipping malformed stored backup code", extra={"index": index})
            continue
        if matched:
            return index
    return NOT_FOUND
