import base64
import pytest
from gitcosign_core.armor import crc24, dearmor, enarmor
from gitcosign_core.commit import parse_commit
from gitcosign_core.errors import ArmorChecksumError, ArmorFormatError


def test_crc24_rfc4880_vector():
    assert crc24(b"123456789") == bytes.fromhex("21cf02")


def test_crc24_of_empty_input_is_initial_register():
    assert crc24(b"") == bytes.fromhex("b704ce")


@pytest.mark.parametrize("raw", [b"", b"\x00", bytes(range(256)), b"\x89\x01\x33" * 97])
def test_dearmor_enarmor_roundtrip(raw):
    assert dearmor(enarmor(raw)) == raw
    assert dearmor(enarmor(raw), verify_checksum=True) == raw


def test_enarmor_layout():
    raw = bytes(range(96))  # 128 base64 chars, exactly two lines
    text = enarmor(raw)
    lines = text.split("\n")
    assert lines[0] == "-----BEGIN PGP SIGNATURE-----"
    assert lines[1] == ""
    assert len(lines[2]) == 64 and len(lines[3]) == 64
    assert lines[4] == "=" + base64.b64encode(crc24(raw)).decode()
    assert lines[5] == "-----END PGP SIGNATURE-----"
    assert text.endswith("-----END PGP SIGNATURE-----\n")


def test_dearmor_skips_header_block():
    payload = b"detached signature packet"
    text = (
        "-----BEGIN PGP SIGNATURE-----\n"
        "Version: GnuPG v2\n"
        "Comment: co-signed\n"
        "\n"
        + base64.b64encode(payload).decode() + "\n"
        "=" + base64.b64encode(crc24(payload)).decode() + "\n"
        "-----END PGP SIGNATURE-----\n"
    )
    assert dearmor(text) == payload
    assert dearmor(text.encode("ascii")) == payload


def test_dearmor_folded_commit_value():
    raw = b"\xc2\x9f" * 40
    armored = enarmor(raw).rstrip("\n").replace("\n", "\n ")
    commit = parse_commit(b"tree abc\ngpgsig " + armored.encode() + b"\n\nmsg\n")
    assert dearmor(commit.signature) == raw


def test_dearmor_without_checksum_line():
    text = "-----BEGIN PGP SIGNATURE-----\n\nAQID\n-----END PGP SIGNATURE-----"
    assert dearmor(text) == b"\x01\x02\x03"


def test_mismatched_block_types_rejected():
    text = enarmor(b"abc").replace("END PGP SIGNATURE", "END PGP MESSAGE")
    with pytest.raises(ArmorFormatError, match="mismatch"):
        dearmor(text)


def test_missing_markers_rejected():
    with pytest.raises(ArmorFormatError):
        dearmor("AQID\n=abcd\n-----END PGP SIGNATURE-----\n")
    with pytest.raises(ArmorFormatError):
        dearmor("-----BEGIN PGP SIGNATURE-----\n\nAQID\n")


def test_invalid_base64_rejected():
    with pytest.raises(ArmorFormatError):
        dearmor("-----BEGIN PGP SIGNATURE-----\n\nnot*base64!\n-----END PGP SIGNATURE-----\n")


def test_checksum_only_checked_on_request():
    text = enarmor(b"payload bytes")
    lines = text.split("\n")
    lines[-3] = "=" + base64.b64encode(b"\x00\x00\x00").decode()
    corrupted = "\n".join(lines)

    assert dearmor(corrupted) == b"payload bytes"
    with pytest.raises(ArmorChecksumError):
        dearmor(corrupted, verify_checksum=True)
