# tests/test_token_service.py
import base64
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from jwtutils.adapters.pyjwt.signer import PyJWTSigner
from jwtutils.application.token_service import TokenService
from jwtutils.domain.constants import KeyEncoding, TimeUnit
from jwtutils.domain.value_objects import Validity


def _tamper_signature(token: str) -> str:
    header, payload, signature = token.split(".")
    # first char: every bit of it is significant
    first = "A" if signature[0] != "A" else "B"
    return f"{header}.{payload}.{first}{signature[1:]}"


def _clock_at(moment: datetime):
    return lambda: moment


@pytest.fixture
def service() -> TokenService:
    return TokenService()


# --- create / validate ------------------------------------------------------


def test_round_trip(service, secret_key):
    token = service.create_token(
        "alice", {"role": "admin"}, validity=timedelta(minutes=5), secret_key=secret_key
    )

    assert token.count(".") == 2
    assert service.validate_token(token, secret_key)


def test_validity_forms_all_produce_valid_tokens(service, secret_key):
    for validity in (timedelta(hours=1), (1, TimeUnit.HOURS), (60, "minutes"), 3_600_000, Validity(60_000)):
        token = service.create_token("alice", validity=validity, secret_key=secret_key)
        assert service.validate_token(token, secret_key), validity


def test_default_algorithm_is_hs256(service, secret_key):
    token = service.create_token("alice", validity=timedelta(minutes=5), secret_key=secret_key)

    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_explicit_algorithm(service, secret_key):
    token = service.create_token(
        "alice", validity=timedelta(minutes=5), secret_key=secret_key, algorithm="HS512"
    )

    assert jwt.get_unverified_header(token)["alg"] == "HS512"
    assert service.validate_token(token, secret_key)
    assert not service.validate_token(token, secret_key, algorithms=["HS256"])


def test_registered_claim_names(secret_key):
    issued = datetime.now(timezone.utc).replace(microsecond=0) - timedelta(minutes=1)
    service = TokenService(clock=_clock_at(issued))

    token = service.create_token("alice", validity=(10, "minutes"), secret_key=secret_key)
    payload = jwt.decode(token, secret_key, algorithms=["HS256"])

    assert payload["sub"] == "alice"
    assert payload["iat"] == int(issued.timestamp())
    assert payload["exp"] == int(issued.timestamp()) + 600


def test_claims_can_override_subject_but_not_timestamps(service, secret_key):
    token = service.create_token(
        "alice",
        {"sub": "bob", "iat": 1, "exp": 2},
        validity=timedelta(minutes=5),
        secret_key=secret_key,
    )

    assert service.validate_token(token, secret_key)
    assert service.get_subject(token, secret_key) == "bob"
    assert service.get_claim(token, secret_key, "exp") > 2


def test_zero_and_negative_validity_are_expired(service, secret_key):
    for validity in (timedelta(0), 0, (-5, "seconds"), timedelta(minutes=-1)):
        token = service.create_token("alice", validity=validity, secret_key=secret_key)
        assert not service.validate_token(token, secret_key), validity


def test_token_expires_after_validity(secret_key):
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    service = TokenService(clock=_clock_at(issued))

    token = service.create_token("alice", validity=timedelta(hours=1), secret_key=secret_key)

    assert not service.validate_token(token, secret_key)


def test_wrong_key(service, secret_key, other_key):
    token = service.create_token("alice", validity=timedelta(minutes=5), secret_key=secret_key)

    assert not service.validate_token(token, other_key)


def test_tampered_signature(service, secret_key):
    token = service.create_token(
        "alice", {"role": "admin"}, validity=timedelta(minutes=5), secret_key=secret_key
    )
    tampered = _tamper_signature(token)

    assert not service.validate_token(tampered, secret_key)
    with pytest.raises(jwt.InvalidSignatureError):
        service.get_claim(tampered, secret_key, "role")


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c", "a.b"])
def test_validate_never_raises_on_garbage(service, secret_key, token):
    assert service.validate_token(token, secret_key) is False


def test_validate_with_missing_key(service, secret_key):
    token = service.create_token("alice", validity=timedelta(minutes=5), secret_key=secret_key)

    assert service.validate_token(token, None) is False
    assert service.validate_token(token, "") is False


def test_unsigned_token_rejected(service, secret_key):
    unsigned = jwt.encode({"sub": "alice"}, None, algorithm="none")

    assert not service.validate_token(unsigned, secret_key)


def test_create_rejects_bad_arguments(service, secret_key):
    with pytest.raises(ValueError):
        service.create_token("alice", validity=timedelta(minutes=5), secret_key="")
    with pytest.raises(TypeError):
        service.create_token(None, validity=timedelta(minutes=5), secret_key=secret_key)
    with pytest.raises(TypeError):
        service.create_token("alice", validity="5 minutes", secret_key=secret_key)


# --- reading claims ----------------------------------------------------------


def test_subject_and_claims(service, secret_key):
    token = service.create_token(
        "alice",
        {"role": "admin", "level": 3, "active": True, "scopes": ["read", "write"]},
        validity=timedelta(minutes=5),
        secret_key=secret_key,
    )

    assert service.get_subject(token, secret_key) == "alice"
    assert service.get_claim(token, secret_key, "role") == "admin"
    assert service.get_claim(token, secret_key, "level") == 3
    assert service.get_claim(token, secret_key, "active") is True
    assert service.get_claim(token, secret_key, "scopes") == ["read", "write"]
    assert service.get_claim(token, secret_key, "missing") is None


def test_get_claims_exposes_timestamps(secret_key):
    issued = datetime.now(timezone.utc).replace(microsecond=0) - timedelta(minutes=10)
    service = TokenService(clock=_clock_at(issued))

    token = service.create_token("alice", {"role": "admin"}, validity=(1, "hours"), secret_key=secret_key)
    claims = service.get_claims(token, secret_key)

    assert claims.subject == "alice"
    assert claims.issued_at == issued
    assert claims.expires_at == issued + timedelta(hours=1)
    assert claims.custom == {"role": "admin"}


def test_reading_claims_propagates_errors(secret_key, other_key):
    service = TokenService()
    token = service.create_token("alice", validity=timedelta(minutes=5), secret_key=secret_key)

    with pytest.raises(jwt.InvalidSignatureError):
        service.get_subject(token, other_key)
    with pytest.raises(jwt.DecodeError):
        service.get_claim("garbage", secret_key, "role")

    expired = TokenService(clock=_clock_at(datetime.now(timezone.utc) - timedelta(hours=2)))
    old = expired.create_token("alice", validity=timedelta(hours=1), secret_key=secret_key)
    with pytest.raises(jwt.ExpiredSignatureError):
        service.get_subject(old, secret_key)


def test_leeway_tolerates_small_skew(secret_key):
    issued = datetime.now(timezone.utc) - timedelta(seconds=70)
    token = TokenService(clock=_clock_at(issued)).create_token(
        "alice", validity=timedelta(minutes=1), secret_key=secret_key
    )

    assert not TokenService().validate_token(token, secret_key)
    assert TokenService(signer=PyJWTSigner(leeway=60)).validate_token(token, secret_key)


# --- header extraction -------------------------------------------------------


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("abc.def.ghi", None),
        (None, None),
        ("Bearer", None),
        ("Bearer ", ""),
        ("bearer abc.def.ghi", None),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer  abc", " abc"),
        ("Bearer abc ", "abc "),
    ],
)
def test_extract_token(header, expected):
    assert TokenService.extract_token(header) == expected


# --- caller-supplied registered claims ---------------------------------------


@pytest.mark.parametrize(
    "claims, key, expected",
    [
        ({"aud": "orders-api"}, "aud", "orders-api"),
        ({"aud": ["orders-api", "billing-api"]}, "aud", ["orders-api", "billing-api"]),
        ({"jti": 5}, "jti", 5),
        ({"sub": 42}, "sub", 42),
    ],
)
def test_embedded_registered_claims_round_trip(service, secret_key, claims, key, expected):
    token = service.create_token("alice", claims, validity=timedelta(minutes=5), secret_key=secret_key)

    assert service.validate_token(token, secret_key)
    assert service.get_claim(token, secret_key, key) == expected


def test_non_string_subject_override_is_readable(service, secret_key):
    token = service.create_token("alice", {"sub": 42}, validity=timedelta(minutes=5), secret_key=secret_key)

    assert service.get_subject(token, secret_key) == 42


# --- algorithms and validity bounds ------------------------------------------


def test_empty_algorithm_list_accepts_nothing(service, secret_key):
    token = service.create_token("alice", validity=timedelta(minutes=5), secret_key=secret_key)

    assert not service.validate_token(token, secret_key, algorithms=[])
    with pytest.raises(jwt.PyJWTError):
        service.get_claims(token, secret_key, algorithms=[])


@pytest.mark.parametrize(
    "validity",
    [(10**9, "days"), 10**30, (float("inf"), "seconds"), (3_000_000, "days")],
)
def test_out_of_range_validity_is_value_error(service, secret_key, validity):
    with pytest.raises(ValueError):
        service.create_token("alice", validity=validity, secret_key=secret_key)


# --- key encoding ------------------------------------------------------------


def test_base64_key_encoding_matches_jjwt_string_keys():
    key_bytes = bytes(range(64))
    encoded = base64.b64encode(key_bytes).decode("ascii")
    # a token issued by a peer that decodes its key string from base64
    foreign = jwt.encode({"sub": "alice"}, key_bytes, algorithm="HS256")

    base64_service = TokenService(signer=PyJWTSigner(key_encoding=KeyEncoding.BASE64))
    assert base64_service.validate_token(foreign, encoded)
    assert base64_service.get_subject(foreign, encoded) == "alice"
    assert not TokenService().validate_token(foreign, encoded)

    own = base64_service.create_token("bob", validity=timedelta(minutes=5), secret_key=encoded)
    assert jwt.decode(own, key_bytes, algorithms=["HS256"])["sub"] == "bob"


def test_raw_key_encoding_uses_string_bytes(service, secret_key):
    token = service.create_token("alice", validity=timedelta(minutes=5), secret_key=secret_key)

    payload = jwt.decode(token, secret_key.encode("utf-8"), algorithms=["HS256"])
    assert payload["sub"] == "alice"


def test_invalid_base64_key(secret_key):
    service = TokenService(signer=PyJWTSigner(key_encoding=KeyEncoding.BASE64))
    token = TokenService().create_token("alice", validity=timedelta(minutes=5), secret_key=secret_key)

    assert not service.validate_token(token, "abc")
    with pytest.raises(jwt.InvalidKeyError):
        service.get_subject(token, "abc")
