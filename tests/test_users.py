import pytest


def new_user(name, email, password="secret", confirm=None):
    return {
        "name": name,
        "email": email,
        "password": password,
        "password_confirm": password if confirm is None else confirm,
    }


@pytest.fixture
def crowd(client):
    """23 users, user00@example.com to user22@example.com."""
    for number in range(23):
        response = client.post(
            "/users", json=new_user(f"User {number:02d}", f"user{number:02d}@example.com")
        )
        assert response.status_code == 200


class TestCreateUser:
    def test_create(self, client):
        response = client.post("/users", json=new_user("Bob", "bob@example.com"))

        assert response.status_code == 200
        assert response.json() == {"name": "Bob", "email": "bob@example.com"}

    def test_password_mismatch(self, client):
        response = client.post(
            "/users", json=new_user("Bob", "bob@example.com", confirm="other")
        )

        assert response.status_code == 403
        assert response.json() == {
            "error": "INVALID_PASSWORD",
            "message": "Password confirmation mismatched",
        }
        assert client.get("/users").json() == []

    def test_email_taken(self, client, register):
        register()

        response = client.post("/users", json=new_user("Bobby", "bob@example.com"))

        assert response.status_code == 409
        assert response.json()["error"] == "EMAIL_ALREADY_TAKEN"

    def test_missing_fields(self, client):
        response = client.post("/users", json={"name": "Bob"})

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestGetUsers:
    def test_unpaginated_is_a_plain_array(self, client, register):
        user_id = register()

        response = client.get("/users")

        assert response.status_code == 200
        assert response.json() == [
            {"id": user_id, "name": "Bob", "email": "bob@example.com"}
        ]

    def test_unpaginated_ignores_search(self, client, crowd):
        response = client.get("/users", params={"search": "email:user01"})
        assert len(response.json()) == 23

    def test_last_page(self, client, crowd):
        response = client.get(
            "/users", params={"page_number": 3, "page_size": 10, "sort": "email:asc"}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["page_number"] == 3
        assert body["page_size"] == 10
        assert body["count"] == 23
        assert body["total_pages"] == 3
        assert body["has_previous_page"] is True
        assert body["has_next_page"] is False
        assert [user["email"] for user in body["data"]] == [
            "user20@example.com",
            "user21@example.com",
            "user22@example.com",
        ]

    def test_defaults_apply_to_missing_parameters(self, client, crowd):
        body = client.get("/users", params={"page_number": 1}).json()

        assert body["page_size"] == 10
        assert body["has_next_page"] is True
        assert body["data"][0]["email"] == "user00@example.com"

    def test_sort_descending(self, client, crowd):
        body = client.get("/users", params={"sort": "name:desc"}).json()
        assert body["data"][0]["name"] == "User 22"

    def test_search_one_column(self, client, crowd):
        body = client.get(
            "/users", params={"page_number": 1, "search": "email:USER1"}
        ).json()

        assert body["count"] == 10
        assert body["total_pages"] == 1
        assert all(user["email"].startswith("user1") for user in body["data"])

    def test_search_without_column_is_unfiltered(self, client, crowd):
        body = client.get("/users", params={"page_number": 1, "search": "user1"}).json()
        assert body["count"] == 23

    def test_out_of_range_page(self, client, crowd):
        body = client.get("/users", params={"page_number": 9, "page_size": 10}).json()

        assert body["data"] == []
        assert body["has_next_page"] is False
        assert body["has_previous_page"] is True

    def test_empty_collection_page(self, client):
        body = client.get("/users", params={"page_number": 1}).json()

        assert body["count"] == 0
        assert body["total_pages"] == 0
        assert body["has_previous_page"] is False
        assert body["has_next_page"] is False

    @pytest.mark.parametrize("params", [{"page_number": 0}, {"page_size": -1}])
    def test_page_parameters_must_be_positive(self, client, params):
        response = client.get("/users", params=params)

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_get_one(self, client, register):
        user_id = register()

        response = client.get(f"/users/{user_id}")

        assert response.status_code == 200
        assert response.json() == {"id": user_id, "name": "Bob", "email": "bob@example.com"}

    def test_get_unknown(self, client):
        response = client.get("/users/missing")

        assert response.status_code == 422
        assert response.json() == {"error": "UNPROCESSABLE_ENTITY", "message": "Unknown user"}


class TestUpdateUser:
    def test_update(self, client, register):
        user_id = register()

        response = client.put(
            f"/users/{user_id}", json={"name": "Robert", "email": "robert@example.com"}
        )

        assert response.status_code == 200
        assert response.json() == {"id": user_id}
        assert client.get(f"/users/{user_id}").json()["email"] == "robert@example.com"

    def test_resubmitting_own_email_is_allowed(self, client, register):
        user_id = register()

        response = client.put(
            f"/users/{user_id}", json={"name": "Robert", "email": "bob@example.com"}
        )

        assert response.status_code == 200
        assert client.get(f"/users/{user_id}").json()["name"] == "Robert"

    def test_email_of_another_user(self, client, register):
        user_id = register()
        register(name="Alice", email="alice@example.com")

        response = client.put(
            f"/users/{user_id}", json={"name": "Bob", "email": "alice@example.com"}
        )

        assert response.status_code == 409
        assert response.json()["error"] == "EMAIL_ALREADY_TAKEN"

    def test_update_unknown(self, client):
        response = client.put(
            "/users/missing", json={"name": "Ghost", "email": "ghost@example.com"}
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Failed to update user"


class TestDeleteUser:
    def test_delete(self, client, register):
        user_id = register()

        response = client.delete(f"/users/{user_id}")

        assert response.status_code == 200
        assert response.json() == {"id": user_id}
        assert client.get("/users").json() == []

    def test_delete_unknown(self, client):
        response = client.delete("/users/missing")

        assert response.status_code == 422
        assert response.json()["message"] == "Failed to delete user"


class TestChangePassword:
    def test_mismatch(self, client, register):
        user_id = register()

        response = client.post(
            f"/users/{user_id}/change-password",
            json={
                "password_old": "secret",
                "password_new": "better",
                "password_confirm": "butter",
            },
        )

        assert response.status_code == 403
        assert response.json()["error"] == "INVALID_PASSWORD"

    def test_wrong_old_password(self, client, register):
        user_id = register()

        response = client.post(
            f"/users/{user_id}/change-password",
            json={
                "password_old": "guess",
                "password_new": "better",
                "password_confirm": "better",
            },
        )

        assert response.status_code == 403
        assert response.json() == {"error": "INVALID_CREDENTIALS", "message": "Wrong password"}


def test_unknown_route_uses_error_shape(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json()["error"] == "NOT_FOUND"


class TestHugePageParameters:
    def test_page_number_past_any_store_offset(self, client, crowd):
        response = client.get(
            "/users", params={"page_number": 10**19, "page_size": 10}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["page_number"] == 10**19
        assert body["count"] == 23
        assert body["data"] == []
        assert body["has_previous_page"] is True
        assert body["has_next_page"] is False

    def test_page_size_past_any_store_limit(self, client, crowd):
        response = client.get("/users", params={"page_number": 1, "page_size": 10**19})

        body = response.json()
        assert response.status_code == 200
        assert body["total_pages"] == 1
        assert len(body["data"]) == 23
        assert body["has_next_page"] is False
