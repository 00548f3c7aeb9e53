from datetime import datetime, timezone
import pytest
from gitcosign_core.errors import TranscriptError
from gitcosign_core.transcript import parse_sig_timestamp, parse_transcript

ALICE = "0123456789ABCDEF0123456789ABCDEF01234567"
BOB = "FEDCBA9876543210FEDCBA9876543210FEDCBA98"

GPGV_OUTPUT = f"""\
gpgv: Signature made Mon Jan  1 00:00:00 2024 UTC
[GNUPG:] NEWSIG
[GNUPG:] KEY_CONSIDERED {ALICE} 0
[GNUPG:] SIG_ID pYzZ0aVQgaW5 2024-01-01 1704067200
[GNUPG:] GOODSIG 89ABCDEF01234567 Alice <alice@example.com>
[GNUPG:] VALIDSIG {ALICE} 2024-01-01 1704067200 0 4 0 22 10 00 {ALICE}
gpgv: Good signature from "Alice <alice@example.com>"
[GNUPG:] NEWSIG
[GNUPG:] ERRSIG 9876543210FEDCBA 22 10 00 1704067300 9 {BOB}
[GNUPG:] NO_PUBKEY 9876543210FEDCBA
"""

JAN_1 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_parse_valid_and_missing_key_results():
    results = parse_transcript(GPGV_OUTPUT)
    assert len(results) == 2

    good, missing = results
    assert good.is_valid and not good.is_missing_key
    assert good.key_id == ALICE
    assert good.timestamp == JAN_1
    assert good.expires is None

    assert not missing.is_valid and missing.is_missing_key
    assert missing.key_id == BOB
    assert missing.timestamp == datetime(2024, 1, 1, 0, 1, 40, tzinfo=timezone.utc)


def test_errsig_other_reason_is_invalid_known_key():
    text = f"[GNUPG:] NEWSIG\n[GNUPG:] ERRSIG 9876543210FEDCBA 22 10 00 1704067300 4 {BOB}\n"
    (res,) = parse_transcript(text)
    assert not res.is_valid
    assert not res.is_missing_key


def test_errsig_without_fingerprint_uses_keyid():
    text = "[GNUPG:] NEWSIG\n[GNUPG:] ERRSIG 9876543210FEDCBA 1 8 00 1704067300 9\n"
    (res,) = parse_transcript(text)
    assert res.key_id == "9876543210FEDCBA"
    assert res.is_missing_key


def test_badsig_is_invalid():
    text = "[GNUPG:] NEWSIG alice@example.com\n[GNUPG:] BADSIG 89ABCDEF01234567 Alice <alice@example.com>\n"
    (res,) = parse_transcript(text)
    assert not res.is_valid and not res.is_missing_key
    assert res.key_id == "89ABCDEF01234567"


def test_badsig_reports_considered_fingerprint():
    text = (
        f"[GNUPG:] NEWSIG\n[GNUPG:] KEY_CONSIDERED {ALICE} 0\n"
        "[GNUPG:] BADSIG 89ABCDEF01234567 Alice <alice@example.com>\n"
        # fingerprint does not leak into the next signature
        "[GNUPG:] NEWSIG\n[GNUPG:] BADSIG FEDCBA9876543210 Bob <bob@example.com>\n"
    )
    first, second = parse_transcript(text)
    assert first.key_id == ALICE
    assert second.key_id == "FEDCBA9876543210"


def test_validsig_with_iso_timestamps_and_expiry():
    text = f"[GNUPG:] NEWSIG\n[GNUPG:] VALIDSIG {ALICE} 2024-01-01 20240101T000000 1735689600 4 0 22 10 00 {ALICE}\n"
    (res,) = parse_transcript(text)
    assert res.timestamp == JAN_1
    assert res.expires == datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_empty_transcript_has_no_results():
    assert parse_transcript("") == []
    assert parse_transcript("gpgv: some noise\n") == []


@pytest.mark.parametrize("text", [
    f"[GNUPG:] NEWSIG\n[GNUPG:] NEWSIG\n[GNUPG:] VALIDSIG {ALICE} 2024-01-01 1704067200 0\n",
    f"[GNUPG:] VALIDSIG {ALICE} 2024-01-01 1704067200 0\n",
    "[GNUPG:] NEWSIG\n",
])
def test_unexpected_shape_rejected(text):
    with pytest.raises(TranscriptError, match="unexpected result shape"):
        parse_transcript(text)


def test_truncated_line_rejected():
    with pytest.raises(TranscriptError):
        parse_transcript(f"[GNUPG:] NEWSIG\n[GNUPG:] VALIDSIG {ALICE}\n")


def test_results_keep_transcript_order():
    text = (
        "[GNUPG:] NEWSIG\n[GNUPG:] ERRSIG AAAA 1 8 00 1 9 AAAA\n"
        f"[GNUPG:] NEWSIG\n[GNUPG:] VALIDSIG {ALICE} 2024-01-01 1704067200 0\n"
        "[GNUPG:] NEWSIG\n[GNUPG:] ERRSIG BBBB 1 8 00 1 9 BBBB\n"
    )
    assert [r.key_id for r in parse_transcript(text)] == ["AAAA", ALICE, "BBBB"]


@pytest.mark.parametrize("ts, expected", [
    ("0", None),
    ("1704067200", JAN_1),
    ("20240101T000000", JAN_1),
    ("2024-01-01T00:00:00", JAN_1),
    ("2024-01-01T00:00:00Z", JAN_1),
])
def test_parse_sig_timestamp(ts, expected):
    assert parse_sig_timestamp(ts) == expected


@pytest.mark.parametrize("ts", ["yesterday", "2024-01-01", "-5", "12T34", "99999999999999999999"])
def test_unknown_timestamp_format(ts):
    with pytest.raises(TranscriptError, match="Unknown timestamp format"):
        parse_sig_timestamp(ts)
