import hashlib
import json
from .config import config
from .errors import DigestError, StoreError

def get_digest(content, algorithm=config['hash_algorithm']):
    """Return the uppercase hex digest of a byte string."""
    try:
        hasher = hashlib.new(algorithm)
        hasher.update(content)
        return hasher.hexdigest().upper()
    except (ValueError, TypeError) as e:
        raise DigestError(f"Unable to compute {algorithm} digest: {e}") from e

def encode_members(members):
    """Serialize a set of paths for storage."""
    return json.dumps(sorted(members)).encode('utf-8')

def decode_members(value):
    """Inverse of encode_members."""
    try:
        members = json.loads(bytes(value).decode('utf-8'))
    except (UnicodeDecodeError, ValueError) as e:
        raise StoreError(f"Corrupt member set: {e}") from e
    if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
        raise StoreError("Corrupt member set: expected a list of paths")
    return set(members)
