"""
User registration and role management tests
"""


class TestRegistration:
    """POST /users/register"""

    async def test_register_new_user(self, client):
        response = await client.post(
            "/users/register",
            json={"name": "Ada", "email": "ada@example.com", "photoURL": "https://img/ada.png"},
        )
        assert response.status_code == 201
        assert response.json() == {"message": "User registered in DB successfully", "role": "member"}

    async def test_register_existing_user_returns_stored_role(self, client, manager_headers):
        response = await client.post(
            "/users/register",
            json={"name": "Manager", "email": "manager@example.com"},
        )
        assert response.status_code == 200
        assert response.json() == {"message": "User already exists in DB", "role": "clubManager"}

    async def test_register_requires_valid_email(self, client):
        response = await client.post("/users/register", json={"name": "Bad", "email": "not-an-email"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"


class TestRoles:
    """Role lookup and admin role changes"""

    async def test_get_own_role(self, client, manager_headers):
        response = await client.get("/users/role", headers=manager_headers)
        assert response.status_code == 200
        assert response.json() == {"role": "clubManager"}

    async def test_get_role_of_unregistered_user(self, client, identity):
        token = identity.issue("new@example.com")
        response = await client.get("/users/role", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 404

    async def test_admin_lists_users(self, client, admin_headers, member_headers):
        response = await client.get("/users", headers=admin_headers)
        assert response.status_code == 200
        emails = {u["email"] for u in response.json()}
        assert emails == {"admin@example.com", "member@example.com"}
        assert "photoURL" in response.json()[0]

    async def test_admin_promotes_member(self, client, admin_headers, member_headers):
        response = await client.patch(
            "/users/role/member@example.com",
            json={"role": "clubManager"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["message"] == "member@example.com role updated to clubManager successfully."

        response = await client.get("/users/role", headers=member_headers)
        assert response.json() == {"role": "clubManager"}

    async def test_role_update_rejects_unknown_role(self, client, admin_headers, member_headers):
        response = await client.patch(
            "/users/role/member@example.com",
            json={"role": "superuser"},
            headers=admin_headers,
        )
        assert response.status_code == 400

    async def test_role_update_same_role_is_not_found(self, client, admin_headers, member_headers):
        response = await client.patch(
            "/users/role/member@example.com",
            json={"role": "member"},
            headers=admin_headers,
        )
        assert response.status_code == 404
        assert response.json()["message"] == "User not found or role already set."

    async def test_manager_cannot_update_roles(self, client, manager_headers, member_headers):
        response = await client.patch(
            "/users/role/member@example.com",
            json={"role": "admin"},
            headers=manager_headers,
        )
        assert response.status_code == 403

    async def test_member_cannot_delete_users(self, client, member_headers, manager_headers):
        response = await client.delete("/users/manager@example.com", headers=member_headers)
        assert response.status_code == 403


class TestDeleteUser:
    """DELETE /users/{email}"""

    async def test_delete_removes_provider_account_and_row(
        self, client, identity, admin_headers, member_headers
    ):
        response = await client.delete("/users/member@example.com", headers=admin_headers)
        assert response.status_code == 200
        assert "deleted successfully" in response.json()["message"]
        assert identity.deleted == ["member@example.com"]
        assert "member@example.com" not in identity.accounts

        response = await client.get("/users", headers=admin_headers)
        assert [u["email"] for u in response.json()] == ["admin@example.com"]

    async def test_delete_user_missing_from_provider(self, client, identity, admin_headers, make_user):
        await make_user("orphan@example.com")
        identity.accounts.discard("orphan@example.com")

        response = await client.delete("/users/orphan@example.com", headers=admin_headers)
        assert response.status_code == 200
        assert "was missing in the identity provider" in response.json()["message"]

    async def test_delete_unknown_user(self, client, admin_headers):
        response = await client.delete("/users/nobody@example.com", headers=admin_headers)
        assert response.status_code == 404
