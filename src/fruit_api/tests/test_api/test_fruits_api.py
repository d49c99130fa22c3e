"""
HTTP behaviour of the /fruits endpoints, through the full app (middleware,
route table, exception handlers, lifespan-created schema).
"""


class TestFruitLifecycle:

    def test_create_update_get_delete(self, client):
        """
        Behavior:
                - The full create / update / get / delete / get sequence on one fruit,
                  followed by a create carrying an id.

        Importance:
                - Covers every status the CRUD endpoints produce on the happy path
                  plus the 404 and 422 cases that follow from it.
        """
        # Create
        resp = client.post("/fruits", json={"name": "Apple"})
        assert resp.status_code == 201
        assert resp.json() == {"id": 1, "name": "Apple"}

        # Update
        resp = client.put("/fruits/1", json={"name": "Green Apple"})
        assert resp.status_code == 200
        assert resp.json() == {"id": 1, "name": "Green Apple"}

        # Read back
        resp = client.get("/fruits/1")
        assert resp.status_code == 200
        assert resp.json() == {"id": 1, "name": "Green Apple"}

        # Delete
        resp = client.delete("/fruits/1")
        assert resp.status_code == 204
        assert resp.content == b""

        # Gone
        resp = client.get("/fruits/1")
        assert resp.status_code == 404
        assert resp.content == b""

        # Id preset on create
        resp = client.post("/fruits", json={"id": 5, "name": "Pear"})
        assert resp.status_code == 422
        body = resp.json()
        assert body["exceptionType"] == "ValidationError"
        assert body["code"] == 422
        assert body["requestPath"] == "/fruits"
        assert "Id" in body["error"]

    def test_ids_are_not_reused(self, client):
        first = client.post("/fruits", json={"name": "Apple"}).json()
        client.delete(f"/fruits/{first['id']}")

        second = client.post("/fruits", json={"name": "Apple"}).json()

        assert second["id"] != first["id"]


class TestListFruits:

    def test_empty(self, client):
        resp = client.get("/fruits")

        assert resp.status_code == 200
        assert resp.json() == []

    def test_sorted_by_name(self, client):
        for name in ["Cherry", "Apple", "Banana"]:
            assert client.post("/fruits", json={"name": name}).status_code == 201

        resp = client.get("/fruits")

        assert [f["name"] for f in resp.json()] == ["Apple", "Banana", "Cherry"]


class TestCreateFruit:

    def test_missing_body(self, client):
        resp = client.post("/fruits")

        assert resp.status_code == 422
        assert resp.json()["error"] == "Fruit was not set on request."

    def test_duplicate_name_is_store_failure(self, client):
        """
        Importance:
                - The second create fails as a store failure (500, DuplicateError)
                  and the row count is unchanged.
        """
        client.post("/fruits", json={"name": "Apple"})

        resp = client.post("/fruits", json={"name": "Apple"})

        assert resp.status_code == 500
        assert resp.json()["exceptionType"] == "DuplicateError"
        assert resp.json()["error"] == "Fruit already exists for field(s): name"
        assert len(client.get("/fruits").json()) == 1

    def test_name_too_long(self, client):
        resp = client.post("/fruits", json={"name": "x" * 41})

        assert resp.status_code == 422
        assert resp.json()["exceptionType"] == "RequestValidationError"


class TestUpdateFruit:

    def test_missing_name(self, client):
        client.post("/fruits", json={"name": "Apple"})

        resp = client.put("/fruits/1", json={"name": None})

        assert resp.status_code == 422
        assert resp.json()["error"] == "Fruit name was not set on request."

    def test_missing_fruit(self, client):
        resp = client.put("/fruits/42", json={"name": "Pear"})

        assert resp.status_code == 404
        assert resp.content == b""

    def test_name_taken_by_another_fruit(self, client):
        client.post("/fruits", json={"name": "Apple"})
        banana = client.post("/fruits", json={"name": "Banana"}).json()

        resp = client.put(f"/fruits/{banana['id']}", json={"name": "Apple"})

        assert resp.status_code == 500
        assert resp.json()["exceptionType"] == "DuplicateError"
        assert client.get(f"/fruits/{banana['id']}").json()["name"] == "Banana"


class TestDeleteFruit:

    def test_second_delete_is_not_found(self, client):
        created = client.post("/fruits", json={"name": "Apple"}).json()

        assert client.delete(f"/fruits/{created['id']}").status_code == 204
        assert client.delete(f"/fruits/{created['id']}").status_code == 404


class TestErrorResponses:

    def test_non_integer_id(self, client):
        resp = client.get("/fruits/abc")

        assert resp.status_code == 422
        body = resp.json()
        assert body["exceptionType"] == "RequestValidationError"
        assert body["requestPath"] == "/fruits/abc"

    def test_unknown_route(self, client):
        resp = client.get("/vegetables")

        assert resp.status_code == 404
        assert resp.json() == {
            "exceptionType": "HTTPException",
            "code": 404,
            "requestPath": "/vegetables",
            "error": "Not Found",
        }

    def test_method_not_allowed(self, client):
        resp = client.patch("/fruits/1", json={"name": "Pear"})

        assert resp.status_code == 405
        assert resp.json()["code"] == 405
        assert "allow" in resp.headers

    def test_unexpected_failure_is_500(self, app, client):
        """
        Behavior:
                - An endpoint raises a plain exception.

        Importance:
                - The body follows the error shape with code 500 and the exception's message.
        """
        async def explode():
            raise RuntimeError("kaboom")

        app.add_api_route("/explode", explode)

        resp = client.get("/explode")

        assert resp.status_code == 500
        assert resp.json() == {
            "exceptionType": "RuntimeError",
            "code": 500,
            "requestPath": "/explode",
            "error": "kaboom",
        }

    def test_composite_failure_uses_inner_status(self, app, client):
        from fruit_api.exceptions.base import ValidationError

        async def explode_group():
            raise ExceptionGroup("task group failed", [ValidationError("Fruit was not set on request.")])

        app.add_api_route("/explode-group", explode_group)

        resp = client.get("/explode-group")

        assert resp.status_code == 422
        assert resp.json()["exceptionType"] == "ValidationError"
        assert resp.json()["error"] == "Fruit was not set on request."


class TestRequestId:

    def test_generated_when_absent(self, client):
        resp = client.get("/fruits")

        assert resp.headers.get("X-Request-ID")

    def test_echoed_when_present(self, client):
        resp = client.get("/fruits", headers={"X-Request-ID": "abc-123"})

        assert resp.headers["X-Request-ID"] == "abc-123"

    def test_present_on_error_responses(self, client):
        resp = client.post("/fruits", json={"id": 1, "name": "Pear"}, headers={"X-Request-ID": "req-422"})

        assert resp.status_code == 422
        assert resp.headers["X-Request-ID"] == "req-422"

    def test_oversized_incoming_id_replaced(self, client):
        resp = client.get("/fruits", headers={"X-Request-ID": "x" * 500})

        assert resp.headers["X-Request-ID"] != "x" * 500

    def test_present_on_unexpected_failure(self, app, client):
        """
        Behavior:
                - An endpoint raises a plain exception while the request carries an id.

        Importance:
                - The translated 500 still echoes the request id, so the response can
                  be matched with the ERROR log line.
        """
        async def explode():
            raise RuntimeError("kaboom")

        app.add_api_route("/explode", explode)

        resp = client.get("/explode", headers={"X-Request-ID": "req-500"})

        assert resp.status_code == 500
        assert resp.headers["X-Request-ID"] == "req-500"
