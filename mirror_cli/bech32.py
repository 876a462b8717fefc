from __future__ import annotations

BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32_CONST = 1
ACC_ADDRESS_PREFIX = "terra"
ACC_ADDRESS_BYTES = 20

_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)


def _polymod(values: list[int]) -> int:
    chk = 1
    for v in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ v
        for i in range(5):
            if (top >> i) & 1:
                chk ^= _GENERATOR[i]
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def bech32_decode(value: str) -> tuple[str, list[int]]:
    """Split a bech32 string into (hrp, 5-bit data) after checksum verification."""
    if not isinstance(value, str) or not value:
        raise ValueError("bech32 value must be a non-empty string")
    if any(ord(c) < 33 or ord(c) > 126 for c in value):
        raise ValueError("bech32 value contains invalid characters")
    if value.lower() != value and value.upper() != value:
        raise ValueError("bech32 value uses mixed case")
    if len(value) > 90:
        raise ValueError("bech32 value exceeds 90 characters")
    value = value.lower()
    pos = value.rfind("1")
    if pos < 1 or pos + 7 > len(value):
        raise ValueError("bech32 separator missing or misplaced")
    hrp = value[:pos]
    data: list[int] = []
    for c in value[pos + 1 :]:
        idx = BECH32_CHARSET.find(c)
        if idx < 0:
            raise ValueError(f"bech32 data contains invalid character {c!r}")
        data.append(idx)
    if _polymod(_hrp_expand(hrp) + data) != BECH32_CONST:
        raise ValueError("bech32 checksum mismatch")
    return hrp, data[:-6]


def bech32_encode(hrp: str, data: list[int]) -> str:
    values = _hrp_expand(hrp) + data
    polymod = _polymod(values + [0, 0, 0, 0, 0, 0]) ^ BECH32_CONST
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
    return hrp + "1" + "".join(BECH32_CHARSET[d] for d in data + checksum)


def convert_bits(data: list[int], from_bits: int, to_bits: int, *, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out: list[int] = []
    maxv = (1 << to_bits) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise ValueError("convert_bits input value out of range")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & maxv)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits or ((acc << (to_bits - bits)) & maxv):
        raise ValueError("convert_bits has non-zero padding")
    return out


def encode_acc_address(raw: bytes, *, prefix: str = ACC_ADDRESS_PREFIX) -> str:
    if not isinstance(raw, (bytes, bytearray)) or len(raw) != ACC_ADDRESS_BYTES:
        raise ValueError("account address encoder requires exactly 20 bytes")
    return bech32_encode(prefix, convert_bits(list(raw), 8, 5, pad=True))


def is_acc_address(value: str, *, prefix: str = ACC_ADDRESS_PREFIX) -> bool:
    try:
        hrp, data = bech32_decode(value)
        payload = convert_bits(data, 5, 8, pad=False)
    except ValueError:
        return False
    return hrp == prefix and len(payload) == ACC_ADDRESS_BYTES
