from werkzeug.datastructures import Authorization

from musicals.auth import check_basic_auth, check_password, unauthorized_response


def _basic(username, password):
    return Authorization("basic", {"username": username, "password": password})


def test_basic_auth_matches_both_fields():
    assert check_basic_auth(_basic("admin", "pw"), "admin", "pw")
    assert not check_basic_auth(_basic("admin", "nope"), "admin", "pw")
    assert not check_basic_auth(_basic("root", "pw"), "admin", "pw")
    assert not check_basic_auth(None, "admin", "pw")


def test_password_with_colon():
    assert check_basic_auth(_basic("admin", "a:b"), "admin", "a:b")


def test_unset_credentials_never_match():
    assert not check_basic_auth(_basic("", ""), "", "")
    assert not check_password("", "")


def test_check_password():
    assert check_password("pw", "pw")
    assert not check_password("PW", "pw")
    assert not check_password(None, "pw")
    assert not check_password(123, "pw")


def test_unauthorized_response():
    resp = unauthorized_response()
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == 'Basic realm="Admin Panel", charset="UTF-8"'
