"""API tests for registration, login and token handling."""

from serilovers.models import WatchlistCollection


API = "/api/v1"

NEW_USER = {
    "email": "New.Viewer@example.com",
    "username": "newviewer",
    "password": "correct-horse",
}


class TestRegister:
    """Tests for POST /auth/register."""

    def test_register_returns_token(self, client):
        """Test registration answers 201 with a token and a client user."""
        response = client.post(f"{API}/auth/register", json=NEW_USER)

        assert response.status_code == 201
        body = response.json()
        assert body["access_token"]
        assert body["token_type"] == "bearer"
        assert body["user"]["email"] == "new.viewer@example.com"
        assert body["user"]["role"] == "client"

    def test_register_creates_one_favorites(self, client, db):
        """Test a new account starts with exactly one Favorites collection."""
        body = client.post(f"{API}/auth/register", json=NEW_USER).json()

        collections = db.query(WatchlistCollection).filter(
            WatchlistCollection.user_id == body["user"]["id"]
        ).all()
        assert [c.name for c in collections] == ["Favorites"]

    def test_duplicate_email(self, client):
        """Test an email can only be registered once, ignoring case."""
        client.post(f"{API}/auth/register", json=NEW_USER)

        response = client.post(
            f"{API}/auth/register",
            json={**NEW_USER, "email": "new.viewer@EXAMPLE.com", "username": "someone"},
        )

        assert response.status_code == 409

    def test_short_password(self, client):
        """Test passwords under eight characters are rejected by validation."""
        response = client.post(f"{API}/auth/register", json={**NEW_USER, "password": "short"})

        assert response.status_code == 422


class TestLogin:
    """Tests for POST /auth/login and token use."""

    def test_login_and_me(self, client):
        """Test a registered user can log in and read their profile."""
        client.post(f"{API}/auth/register", json=NEW_USER)

        login = client.post(
            f"{API}/auth/login",
            json={"email": NEW_USER["email"], "password": NEW_USER["password"]},
        )
        assert login.status_code == 200

        token = login.json()["access_token"]
        me = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {token}"})

        assert me.status_code == 200
        assert me.json()["username"] == "newviewer"

    def test_wrong_password(self, client):
        """Test a bad password is a 401."""
        client.post(f"{API}/auth/register", json=NEW_USER)

        response = client.post(
            f"{API}/auth/login",
            json={"email": NEW_USER["email"], "password": "wrong-password"},
        )

        assert response.status_code == 401

    def test_invalid_token(self, client):
        """Test a garbage bearer token is a 401."""
        response = client.get(f"{API}/users/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_user_listing_is_admin_only(self, client, user_headers, admin_headers):
        """Test only admins list users."""
        assert client.get(f"{API}/users", headers=user_headers).status_code == 403
        assert client.get(f"{API}/users", headers=admin_headers).status_code == 200
