"""
Data models for the DNS domain client.

Every field is optional: ``None`` means the server did not return the
field. Absent fields are omitted entirely when serializing, never sent
as ``null``.
"""

from dataclasses import dataclass
from typing import Any, Optional

U16_MAX = 0xFFFF


def _get_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"field '{key}' must be a string, got {type(value).__name__}")
    return value


def _get_bool(data: dict, key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise TypeError(f"field '{key}' must be a boolean, got {type(value).__name__}")
    return value


def _get_u16(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field '{key}' must be an integer, got {type(value).__name__}")
    if not 0 <= value <= U16_MAX:
        raise ValueError(f"field '{key}' out of range for u16: {value}")
    return value


def _get_list(data: dict, key: str) -> Optional[list]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise TypeError(f"field '{key}' must be an array, got {type(value).__name__}")
    return value


def _drop_absent(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


@dataclass(frozen=True)
class DNSSECKeyInfo:
    """A DNSSEC key attached to a domain."""

    dnskey: Optional[str] = None
    ds: Optional[tuple[str, ...]] = None
    keyflags: Optional[int] = None  # serialized as "flags"
    keytype: Optional[str] = None
    managed: Optional[bool] = None  # True when the server manages the key

    def to_dict(self) -> dict:
        """Serialize to the API's JSON shape, omitting absent fields."""
        return _drop_absent({
            "dnskey": self.dnskey,
            "ds": list(self.ds) if self.ds is not None else None,
            "flags": self.keyflags,
            "keytype": self.keytype,
            "managed": self.managed,
        })

    @classmethod
    def from_dict(cls, data: Any) -> "DNSSECKeyInfo":
        """
        Build a key from decoded JSON.

        Raises:
            TypeError: If data or a present field has the wrong JSON type
            ValueError: If flags is outside the unsigned 16-bit range
        """
        if not isinstance(data, dict):
            raise TypeError(f"DNSSEC key must be an object, got {type(data).__name__}")

        ds = _get_list(data, "ds")
        if ds is not None:
            for entry in ds:
                if not isinstance(entry, str):
                    raise TypeError("field 'ds' must contain only strings")

        return cls(
            dnskey=_get_str(data, "dnskey"),
            ds=tuple(ds) if ds is not None else None,
            keyflags=_get_u16(data, "flags"),
            keytype=_get_str(data, "keytype"),
            managed=_get_bool(data, "managed"),
        )


@dataclass(frozen=True)
class Domain:
    """A DNS zone hosted by the service."""

    created: Optional[str] = None
    keys: Optional[tuple[DNSSECKeyInfo, ...]] = None
    minimum_ttl: Optional[int] = None
    name: Optional[str] = None
    published: Optional[str] = None
    touched: Optional[str] = None
    zonefile: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize to the API's JSON shape, omitting absent fields."""
        return _drop_absent({
            "created": self.created,
            "keys": [key.to_dict() for key in self.keys] if self.keys is not None else None,
            "minimum_ttl": self.minimum_ttl,
            "name": self.name,
            "published": self.published,
            "touched": self.touched,
            "zonefile": self.zonefile,
        })

    @classmethod
    def from_dict(cls, data: Any) -> "Domain":
        """
        Build a domain from decoded JSON.

        Missing keys and explicit nulls stay absent; unknown keys are
        ignored.

        Raises:
            TypeError: If data or a present field has the wrong JSON type
            ValueError: If minimum_ttl is outside the unsigned 16-bit range
        """
        if not isinstance(data, dict):
            raise TypeError(f"domain must be an object, got {type(data).__name__}")

        keys = _get_list(data, "keys")

        return cls(
            created=_get_str(data, "created"),
            keys=tuple(DNSSECKeyInfo.from_dict(k) for k in keys) if keys is not None else None,
            minimum_ttl=_get_u16(data, "minimum_ttl"),
            name=_get_str(data, "name"),
            published=_get_str(data, "published"),
            touched=_get_str(data, "touched"),
            zonefile=_get_str(data, "zonefile"),
        )


DomainList = list[Domain]


def domain_list_from_json(data: Any) -> DomainList:
    """Build an ordered domain list from a decoded JSON array."""
    if not isinstance(data, list):
        raise TypeError(f"domain list must be an array, got {type(data).__name__}")
    return [Domain.from_dict(item) for item in data]
