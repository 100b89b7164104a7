"""
RU: Пакет signkit: вывод ключей из паролей, HMAC, дайджесты и подписанные URL поверх примитивов cryptography.

EN: signkit: password-based key derivation, HMAC, digests and signed URLs on top of
the ``cryptography`` primitives.

Example: sign a download link that expires in an hour
    from signkit import signed_url, verify_signed_url
    url = signed_url("https://example.com/file?id=7", "shared-secret", 3600)
    assert verify_signed_url(url, ["new-secret", "shared-secret"])
"""

from .algorithms import KEY_LENGTHS, key_length, normalize_algorithm
from .compare import fixed_time_compare
from .config import (
    DEFAULT_HMAC,
    DEFAULT_KDF,
    DEFAULT_SIGNED_URL,
    HmacDefaults,
    KdfDefaults,
    SignedUrlConfig,
)
from .encoding import (
    base64url_decode,
    base64url_encode,
    bytes_to_string,
    encode_bytes,
    hex_encode,
    string_to_bytes,
)
from .exceptions import (
    CryptoError,
    SignatureError,
    SignedUrlError,
    UnsupportedAlgorithmError,
)
from .hashing import compute_digest, sha256, sha256_file
from .health import crypto_health_check
from .kdf import Pbkdf2KeyDeriver, make_pbkdf2_options, pbkdf2
from .keys import Password, RawKey, as_secret
from .mac import compute_hmac, sha256_hmac
from .signed_url import (
    SignedUrlStatus,
    UrlSigner,
    inspect_signed_url,
    signed_url,
    temporary_signed_url,
    verify_signed_url,
)

__version__ = "1.0.0"

__all__ = [
    # Algorithms
    "KEY_LENGTHS",
    "key_length",
    "normalize_algorithm",
    "fixed_time_compare",
    # Config
    "DEFAULT_HMAC",
    "DEFAULT_KDF",
    "DEFAULT_SIGNED_URL",
    "HmacDefaults",
    "KdfDefaults",
    "SignedUrlConfig",
    # Encoding
    "base64url_decode",
    "base64url_encode",
    "bytes_to_string",
    "encode_bytes",
    "hex_encode",
    "string_to_bytes",
    # Errors
    "CryptoError",
    "SignatureError",
    "SignedUrlError",
    "UnsupportedAlgorithmError",
    # Digest / KDF / HMAC
    "compute_digest",
    "sha256",
    "sha256_file",
    "Pbkdf2KeyDeriver",
    "make_pbkdf2_options",
    "pbkdf2",
    "Password",
    "RawKey",
    "as_secret",
    "compute_hmac",
    "sha256_hmac",
    # Signed URLs
    "SignedUrlStatus",
    "UrlSigner",
    "inspect_signed_url",
    "signed_url",
    "temporary_signed_url",
    "verify_signed_url",
    # Health
    "crypto_health_check",
]
