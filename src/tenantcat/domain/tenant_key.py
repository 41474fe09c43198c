"""Tenant key derivation.

A tenant key is a signed 32-bit integer derived from the tenant's name. The same
name always yields the same key, which is what makes catalog registration safe
to repeat: re-registering a tenant lands on the same mapping row.

The key is stored in the metadata table in its "raw" form: four bytes, big-endian,
with the sign bit flipped so that byte order matches numeric order.

Known limitation: two different names may hash to the same key. Collisions are
neither detected nor resolved here.
"""

import hashlib

__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "derive_key",
    "key_from_raw",
    "normalize_tenant_name",
    "raw_key_bytes",
    "raw_key_encoding",
]

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
RAW_KEY_LENGTH = 4
_SIGN_BIT = 0x80000000


def normalize_tenant_name(tenant_name: str) -> str:
    """Remove every space and lowercase the name.

    Example:
        ``"Fabrikam Jazz Club"`` -> ``"fabrikamjazzclub"``
    """
    return tenant_name.replace(" ", "").lower()


def derive_key(tenant_name: str) -> int:
    """Derive the tenant key for `tenant_name`.

    The normalized name is encoded as UTF-8 and hashed with MD5; the first four
    bytes of the digest, read as a little-endian signed integer, are the key.
    MD5 is used for its distribution only; nothing here is security-sensitive.

    Args:
        tenant_name: The tenant's display name.

    Returns:
        The signed 32-bit tenant key.
    """
    normalized = normalize_tenant_name(tenant_name).encode("utf-8")
    digest = hashlib.md5(normalized, usedforsecurity=False).digest()
    return int.from_bytes(digest[:RAW_KEY_LENGTH], "little", signed=True)


def _check_int32(tenant_key: int) -> None:
    if not INT32_MIN <= tenant_key <= INT32_MAX:
        raise ValueError(f"Tenant key {tenant_key} is outside the 32-bit range")


def raw_key_bytes(tenant_key: int) -> bytes:
    """Return the fixed-width raw encoding of `tenant_key`.

    Raises:
        ValueError: If the key does not fit in a signed 32-bit integer.
    """
    _check_int32(tenant_key)
    normalized = (tenant_key & 0xFFFFFFFF) ^ _SIGN_BIT
    return normalized.to_bytes(RAW_KEY_LENGTH, "big")


def raw_key_encoding(tenant_key: int) -> str:
    """Render the raw encoding of `tenant_key` as an uppercase ``0x`` literal.

    Example:
        ``raw_key_encoding(0) == "0x80000000"``
    """
    return "0x" + raw_key_bytes(tenant_key).hex().upper()


def key_from_raw(raw: bytes) -> int:
    """Invert `raw_key_bytes`.

    Raises:
        ValueError: If `raw` is not exactly four bytes long.
    """
    if len(raw) != RAW_KEY_LENGTH:
        raise ValueError(
            f"Raw tenant key must be {RAW_KEY_LENGTH} bytes, got {len(raw)}"
        )
    normalized = int.from_bytes(raw, "big") ^ _SIGN_BIT
    return normalized - 2**32 if normalized & _SIGN_BIT else normalized
