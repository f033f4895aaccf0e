"""
Auth endpoint tests: registration, login, logout and the member-only gate.

Form endpoints answer with a redirect on success and re-render the form
with a single error message on failure, so the assertions look at the
status code, the Location header, or the rendered message.
"""
import pytest
from httpx import AsyncClient

VALID_FORM = {
    "fullName": "Grace Hopper",
    "email": "grace@example.com",
    "password": "cobol1959",
    "confirmPassword": "cobol1959",
}


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_register_form_renders(async_client: AsyncClient):
    resp = await async_client.get("/register")
    assert resp.status_code == 200
    assert 'name="fullName"' in resp.text


@pytest.mark.asyncio
async def test_register_redirects_to_login(async_client: AsyncClient):
    resp = await async_client.post("/register", data=VALID_FORM)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_registered_user_can_log_in(async_client: AsyncClient):
    await async_client.post("/register", data=VALID_FORM)

    resp = await async_client.post(
        "/login", data={"email": VALID_FORM["email"], "password": VALID_FORM["password"]}
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override, message",
    [
        ({"fullName": "Grace"}, "Full name must include first and last name."),
        ({"email": "grace@example"}, "Invalid email format."),
        ({"email": "grace example.com"}, "Invalid email format."),
        ({"password": "short6", "confirmPassword": "short6"}, "Password must be longer than 6 characters."),
        ({"confirmPassword": "cobol1960"}, "Passwords do not match."),
    ],
)
async def test_register_validation_messages(async_client: AsyncClient, override, message):
    """Each broken rule re-renders the form with its own message."""
    resp = await async_client.post("/register", data={**VALID_FORM, **override})
    assert resp.status_code == 200
    assert message in resp.text


@pytest.mark.asyncio
async def test_register_keeps_entered_values(async_client: AsyncClient):
    resp = await async_client.post("/register", data={**VALID_FORM, "confirmPassword": "nope-nope"})
    assert 'value="Grace Hopper"' in resp.text
    assert 'value="grace@example.com"' in resp.text


@pytest.mark.asyncio
async def test_register_duplicate_email(async_client: AsyncClient):
    first = await async_client.post("/register", data=VALID_FORM)
    assert first.status_code == 303

    resp = await async_client.post("/register", data={**VALID_FORM, "fullName": "Other Person"})
    assert resp.status_code == 200
    assert "Email already exists or database error." in resp.text


# ---------------------------------------------------------------------------
# Login / logout
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_login_form_renders(async_client: AsyncClient):
    resp = await async_client.get("/login")
    assert resp.status_code == 200
    assert 'name="password"' in resp.text


@pytest.mark.asyncio
async def test_login_unknown_email(async_client: AsyncClient, author, author_password):
    resp = await async_client.post(
        "/login", data={"email": "nobody@example.com", "password": author_password}
    )
    assert resp.status_code == 200
    assert "Email not found." in resp.text


@pytest.mark.asyncio
async def test_login_wrong_password(async_client: AsyncClient, author, author_password):
    resp = await async_client.post(
        "/login", data={"email": author.email, "password": author_password + "x"}
    )
    assert resp.status_code == 200
    assert "Incorrect password." in resp.text


@pytest.mark.asyncio
async def test_login_establishes_session(logged_in_client: AsyncClient, author):
    resp = await logged_in_client.get("/blogs/post")
    assert resp.status_code == 200
    assert author.email in resp.text


@pytest.mark.asyncio
async def test_logout_destroys_session(logged_in_client: AsyncClient):
    resp = await logged_in_client.get("/logout")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/"

    gated = await logged_in_client.get("/blogs/blogs")
    assert gated.status_code == 302
    assert gated.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_logout_without_session_is_harmless(async_client: AsyncClient):
    resp = await async_client.get("/logout")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/"


# ---------------------------------------------------------------------------
# Member-only gate
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/blogs/blogs"),
        ("GET", "/blogs/post"),
        ("POST", "/blogs/post"),
        ("POST", "/blogs/upload-image"),
    ],
)
async def test_member_routes_redirect_anonymous_visitors(async_client: AsyncClient, method, path):
    resp = await async_client.request(method, path)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/login"
