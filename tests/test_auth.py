import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from leisure_pricing.core.security import create_access_token, decode_access_token
from leisure_pricing.dependencies.auth import get_current_business_user, require_admin


def _bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_token_subject_is_the_business_user():
    token = create_access_token({"sub": "BIZ_1", "role": "business"})

    assert decode_access_token(token).sub == "BIZ_1"
    assert get_current_business_user(_bearer(token)) == "BIZ_1"


def test_missing_or_invalid_token_is_401():
    for credentials in (None, _bearer("not-a-jwt")):
        with pytest.raises(HTTPException) as exc:
            get_current_business_user(credentials)
        assert exc.value.status_code == 401


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "BIZ_1"}, expires_minutes=-5)

    assert decode_access_token(token).sub is None


def test_admin_role_required_for_metrics():
    business = create_access_token({"sub": "BIZ_1", "role": "business"})
    admin = create_access_token({"sub": "OPS", "role": "admin"})

    with pytest.raises(HTTPException) as exc:
        require_admin(_bearer(business))
    assert exc.value.status_code == 403
    assert require_admin(_bearer(admin)) == "OPS"
